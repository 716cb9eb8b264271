"""JsonDiffOptions, DeepEqualDiffOptions and the conversion policy enums.

Both option classes are frozen (immutable) dataclasses: one options value is a
read-only snapshot for the duration of a diff call.  ``JsonDiffOptions``
controls the tree comparison itself; ``DeepEqualDiffOptions`` extends it with
the policies used when converting arbitrary Python objects into trees.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum, auto
from types import MappingProxyType
from typing import Any

__all__ = [
    "AttributeHandling",
    "DeepEqualDiffOptions",
    "DefaultValueHandling",
    "JsonDiffOptions",
    "NullValueHandling",
    "PathFilter",
    "ReferenceLoopHandling",
]

# A custom filter receives candidate paths (or property names) and yields the
# ones to keep.  It is consulted with one candidate at a time as each record
# (or member) is produced, so it must decide per candidate; a filter that
# depends on the other candidates in a batch (e.g. keeping only the first one)
# keeps every candidate.
PathFilter = Callable[[Iterable[str]], Iterable[str]]


class NullValueHandling(StrEnum):
    """Whether object members holding ``None`` are written to the tree."""

    INCLUDE = auto()
    IGNORE = auto()


class DefaultValueHandling(StrEnum):
    """Whether object members holding a type default (0, False, None) are written."""

    INCLUDE = auto()
    IGNORE = auto()


class ReferenceLoopHandling(StrEnum):
    """What to do with a member that refers back to an object being converted.

    - IGNORE: Drop the member.
    - ERROR:  Raise ``ReferenceLoopError``.
    """

    IGNORE = auto()
    ERROR = auto()


class AttributeHandling(StrEnum):
    """Whether dataclass field metadata may rename or omit members.

    - INCLUDE: Honour ``field(metadata={"json": {"name": ..., "ignore": ...}})``.
    - IGNORE:  Always use the field name and include every field.
    """

    INCLUDE = auto()
    IGNORE = auto()


def _pattern_tuple(name: str, patterns: Iterable[str | None] | None) -> tuple[str, ...]:
    if patterns is None:
        return ()
    if isinstance(patterns, str):
        msg = f"{name} must be a collection of strings, not a single str"
        raise TypeError(msg)
    result: list[str] = []
    for pattern in patterns:
        if pattern is None:
            continue
        if not isinstance(pattern, str):
            msg = f"{name} entries must be str, got {type(pattern)!r}"
            raise TypeError(msg)
        result.append(pattern)
    return tuple(result)


def _check_callable(name: str, value: object) -> None:
    if value is not None and not callable(value):
        msg = f"{name} must be callable or None, got {type(value)!r}"
        raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class JsonDiffOptions:
    """Immutable options that control how two JSON trees are compared.

    Attributes:
        exclude_property_paths: Paths to leave out of the comparison, in JSON
            pointer notation with glob wildcards (``*``, ``**``, ``?``).
        property_path_filter: Custom filter choosing the paths to keep; it only
            sees paths that survived ``exclude_property_paths``, one path per
            call (see ``PathFilter``).
        ignore_array_element_order: Arrays are equal when they hold the same
            elements in any order.
        ignore_empty_arrays: An empty array equals a missing or null value.
        ignore_empty_objects: An empty object equals a missing or null value.
        ignore_case: Ignore case in string values and property names.
        ignore_line_ending_differences: Treat ``\\r\\n``, ``\\r`` and ``\\n`` as equal.
        ignore_white_space_differences: Treat any non-empty whitespace run as
            a single space.
    """

    exclude_property_paths: tuple[str, ...] = ()
    property_path_filter: PathFilter | None = None
    ignore_array_element_order: bool = False
    ignore_empty_arrays: bool = False
    ignore_empty_objects: bool = False
    ignore_case: bool = False
    ignore_line_ending_differences: bool = False
    ignore_white_space_differences: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "exclude_property_paths",
            _pattern_tuple("exclude_property_paths", self.exclude_property_paths),
        )
        _check_callable("property_path_filter", self.property_path_filter)

    @property
    def normalizes_text(self) -> bool:
        """True when any string-manipulation option is enabled."""
        return (
            self.ignore_case
            or self.ignore_line_ending_differences
            or self.ignore_white_space_differences
        )


@dataclass(frozen=True, slots=True)
class DeepEqualDiffOptions(JsonDiffOptions):
    """Immutable options for comparing arbitrary Python objects.

    Extends ``JsonDiffOptions`` with the policies ``TreeBuilder`` applies while
    converting each object into a tree value.

    Attributes:
        exclude_property_names: Object member names to leave out, literal or
            glob, matched case-insensitively.  Mapping keys are never filtered.
        property_filter: Custom filter choosing the member names to keep; it
            only sees names that survived ``exclude_property_names``.
        null_value_handling: Defaults to dropping ``None`` members.
        default_value_handling: Defaults to dropping members holding a type default.
        reference_loop_handling: Defaults to dropping members that loop back.
        date_format: ``strftime`` format for dates and times.  Defaults to
            ISO-8601 truncated to whole seconds.
        datetime_converter: Applied to every ``datetime`` before formatting,
            e.g. to round to the precision a database stores.
        attribute_handling: Defaults to ignoring dataclass field metadata.
        converters: Mapping from type to a callable producing a replacement
            value; looked up along the value's MRO.
    """

    exclude_property_names: tuple[str, ...] = ()
    property_filter: PathFilter | None = None
    null_value_handling: NullValueHandling = NullValueHandling.IGNORE
    default_value_handling: DefaultValueHandling = DefaultValueHandling.IGNORE
    reference_loop_handling: ReferenceLoopHandling = ReferenceLoopHandling.IGNORE
    date_format: str | None = None
    datetime_converter: Callable[[datetime], datetime] | None = None
    attribute_handling: AttributeHandling = AttributeHandling.IGNORE
    converters: Mapping[type, Callable[[Any], Any]] | None = None

    def __post_init__(self) -> None:
        # Zero-argument super() is unavailable in slotted dataclasses.
        JsonDiffOptions.__post_init__(self)
        object.__setattr__(
            self,
            "exclude_property_names",
            _pattern_tuple("exclude_property_names", self.exclude_property_names),
        )
        _check_callable("property_filter", self.property_filter)
        _check_callable("datetime_converter", self.datetime_converter)
        object.__setattr__(
            self, "null_value_handling", NullValueHandling(self.null_value_handling)
        )
        object.__setattr__(
            self,
            "default_value_handling",
            DefaultValueHandling(self.default_value_handling),
        )
        object.__setattr__(
            self,
            "reference_loop_handling",
            ReferenceLoopHandling(self.reference_loop_handling),
        )
        object.__setattr__(
            self, "attribute_handling", AttributeHandling(self.attribute_handling)
        )
        if self.converters is not None:
            for target, converter in self.converters.items():
                if not isinstance(target, type):
                    msg = f"converters keys must be types, got {target!r}"
                    raise TypeError(msg)
                _check_callable(f"converters[{target.__name__}]", converter)
            object.__setattr__(
                self, "converters", MappingProxyType(dict(self.converters))
            )
