"""TreeBuilder: converts arbitrary Python objects into JSON tree values.

Uses recursive dispatch to turn mappings, dataclasses, plain objects,
iterables and scalars into the native tree value model understood by
``JsonDiffer``:

- mappings           -> objects (keys ``str()``-ed, every entry kept)
- dataclasses        -> objects from their fields in declaration order
- other objects      -> objects from their public attributes and properties
- lists, sets, ...   -> arrays
- bytes-like         -> bytes
- Enum members       -> their name
- UUID, timedelta, paths -> their str() form
- other numbers      -> their str() form (Fraction, complex, ...)
- dates and times    -> text (ISO-8601 to whole seconds unless ``date_format``)

Object members (never mapping entries) pass through the member policies of
``DeepEqualDiffOptions``: name exclusion and custom filter, null and default
value handling, and dataclass field metadata.  Any member or element that
refers back to an object on the current conversion path is dropped, or raises
``ReferenceLoopError`` under ``ReferenceLoopHandling.ERROR``, so the resulting
tree is always finite.
"""

from __future__ import annotations

import dataclasses
import logging
import numbers
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from functools import cached_property
from pathlib import PurePath
from typing import Any
from uuid import UUID

from json_deep_equal.algorithm.config import (
    AttributeHandling,
    DeepEqualDiffOptions,
    DefaultValueHandling,
    NullValueHandling,
    ReferenceLoopHandling,
)
from json_deep_equal.algorithm.filters import CandidateFilter, build_name_filter
from json_deep_equal.exceptions import ReferenceLoopError
from json_deep_equal.tree.nodes import JsonValue

__all__ = ["JSON_METADATA_KEY", "TreeBuilder"]

logger = logging.getLogger(__name__)

# Dataclass field metadata key read under AttributeHandling.INCLUDE
JSON_METADATA_KEY = "json"

_SCALAR_TYPES = (bool, int, float, Decimal, str)
_BYTES_TYPES = (bytes, bytearray, memoryview)
# Converted to their str() form
_TEXT_TYPES = (UUID, timedelta, PurePath)


class _Skip:
    """Marker for a member or element left out of the tree."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<skip>"


_SKIP = _Skip()


def _is_default(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, Enum) or not isinstance(value, _SCALAR_TYPES):
        return False
    if isinstance(value, str):
        return False
    return bool(value == 0)


@dataclass
class TreeBuilder:
    """Converts Python object graphs into tree values under fixed options.

    The dispatch order matters: converters first, then ``Enum`` (``StrEnum``
    and ``IntEnum`` members are also str/int), then scalars with ``bool``
    before ``int``, then ``datetime`` before ``date``.

    Example::

        builder = TreeBuilder(DeepEqualDiffOptions(exclude_property_names=["Id"]))
        builder.build(Person(id=1, name="Ada", manager=None))
        # {"name": "Ada"}
    """

    options: DeepEqualDiffOptions = field(default_factory=DeepEqualDiffOptions)
    _name_filter: CandidateFilter | None = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self._name_filter = build_name_filter(self.options)

    def build(self, value: Any) -> JsonValue:
        """Convert a Python value to a tree value.

        Args:
            value: Any supported Python value; ``None`` converts to ``None``.

        Returns:
            The equivalent tree value, built from fresh containers.

        Raises:
            ReferenceLoopError: If a reference loop is found and the options
                ask for an error.
        """
        return self._build(value, set(), convert=True)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _find_converter(self, value: Any) -> Any:
        converters = self.options.converters
        if not converters:
            return None
        for klass in type(value).__mro__:
            converter = converters.get(klass)
            if converter is not None:
                return converter
        return None

    def _build(self, value: Any, active: set[int], *, convert: bool) -> Any:
        if convert:
            converter = self._find_converter(value)
            if converter is not None:
                # The converter's own result is not converted again.
                return self._build(converter(value), active, convert=False)

        if value is None:
            return None
        if isinstance(value, Enum):
            return value.name
        if isinstance(value, _SCALAR_TYPES):
            return value
        if isinstance(value, (datetime, date, time)):
            return self._build_temporal(value)
        if isinstance(value, _BYTES_TYPES):
            return bytes(value)
        if isinstance(value, _TEXT_TYPES):
            return str(value)
        if isinstance(value, numbers.Number):
            # Number kinds JSON has no literal for
            return str(value)

        if id(value) in active:
            # A converter handed back an object that is still being converted
            return self._loop(value, "")

        active.add(id(value))
        try:
            if isinstance(value, Mapping):
                return self._build_mapping(value, active)
            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                return self._build_members(self._dataclass_members(value), active)
            if isinstance(value, Iterable):
                return self._build_array(value, active)
            return self._build_members(self._attribute_members(value), active)
        finally:
            active.discard(id(value))

    def _build_temporal(self, value: datetime | date | time) -> str:
        if isinstance(value, datetime) and self.options.datetime_converter is not None:
            value = self.options.datetime_converter(value)
        if self.options.date_format is not None:
            return value.strftime(self.options.date_format)
        if isinstance(value, date) and not isinstance(value, datetime):
            return value.isoformat()
        return value.isoformat(timespec="seconds")

    def _build_child(self, value: Any, name: str, active: set[int]) -> Any:
        """Convert a member or element, or return ``_SKIP`` for a loop."""
        if id(value) in active:
            return self._loop(value, name)
        return self._build(value, active, convert=True)

    def _loop(self, value: Any, name: str) -> _Skip:
        if self.options.reference_loop_handling == ReferenceLoopHandling.ERROR:
            raise ReferenceLoopError(
                f"Self referencing loop detected for {name!r} "
                f"with type {type(value).__name__!r}"
            )
        logger.debug("Skipping self referencing loop for %r", name)
        return _SKIP

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _build_mapping(
        self, mapping: Mapping[Any, Any], active: set[int]
    ) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, item in mapping.items():
            name = str(key.name) if isinstance(key, Enum) else str(key)
            converted = self._build_child(item, name, active)
            if converted is not _SKIP:
                result[name] = converted
        return result

    def _build_array(self, items: Iterable[Any], active: set[int]) -> list[Any]:
        result: list[Any] = []
        for index, item in enumerate(items):
            converted = self._build_child(item, str(index), active)
            if converted is not _SKIP:
                result.append(converted)
        return result

    def _build_members(
        self, members: Iterator[tuple[str, Any]], active: set[int]
    ) -> dict[str, Any]:
        options = self.options
        result: dict[str, Any] = {}
        for name, member in members:
            if self._name_filter is not None and not self._name_filter.keep(name):
                continue
            if member is None and options.null_value_handling == NullValueHandling.IGNORE:
                continue
            if (
                options.default_value_handling == DefaultValueHandling.IGNORE
                and _is_default(member)
            ):
                continue
            converted = self._build_child(member, name, active)
            if converted is not _SKIP:
                result[name] = converted
        return result

    # ------------------------------------------------------------------
    # Member discovery
    # ------------------------------------------------------------------

    def _dataclass_members(self, instance: Any) -> Iterator[tuple[str, Any]]:
        honour_metadata = self.options.attribute_handling == AttributeHandling.INCLUDE
        for dataclass_field in dataclasses.fields(instance):
            name = dataclass_field.name
            if honour_metadata:
                settings = dataclass_field.metadata.get(JSON_METADATA_KEY, {})
                if settings.get("ignore", False):
                    continue
                name = settings.get("name", name)
            yield name, getattr(instance, dataclass_field.name)

    @staticmethod
    def _attribute_members(instance: Any) -> Iterator[tuple[str, Any]]:
        """Public members: __dict__ entries, then __slots__, then properties.

        Properties are collected along the MRO, so state kept in private
        attributes behind a public ``@property`` (or ``cached_property``)
        still reaches the tree.
        """
        names: list[str] = list(getattr(instance, "__dict__", {}))
        for klass in type(instance).__mro__:
            slots = klass.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            names.extend(slot for slot in slots if slot not in names)
        for klass in type(instance).__mro__:
            names.extend(
                name
                for name, attribute in vars(klass).items()
                if isinstance(attribute, (property, cached_property))
                and name not in names
            )

        for name in names:
            if name.startswith("_") or not hasattr(instance, name):
                continue
            yield name, getattr(instance, name)
