"""JsonDiffNode dataclass: one difference between two JSON trees.

This module provides the record type yielded by the diff engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any

from json_deep_equal.display import DiffDisplay, build_display

__all__ = ["JsonDiffNode"]


@dataclass(frozen=True)
class JsonDiffNode:
    """A difference at a path between two JSON documents.

    A missing value on either side is recorded as ``None``.  The display
    fields are computed on first access and cached for the life of the record.
    Records hash by path, so they can be collected in sets whatever their values.

    Attributes:
        path: JSON pointer to the difference, ``""`` for the root.  Unordered
            array mismatches use the pseudo-segments ``*`` (unmatched
            elements) and ``length`` (element counts).
        expected_value: Value from the expected document at ``path``.
        actual_value: Value from the actual document at ``path``.
    """

    path: str
    expected_value: Any = None
    actual_value: Any = None

    @cached_property
    def _display(self) -> DiffDisplay:
        return build_display(self.path, self.expected_value, self.actual_value)

    @property
    def diff_index(self) -> int | None:
        """First differing character position in the serialized values."""
        return self._display.diff_index

    @property
    def expected_value_display(self) -> str:
        """Serialized expected value, truncated around the diff index if long."""
        return self._display.expected_display

    @property
    def expected_value_display_diff_index(self) -> int | None:
        return self._display.expected_display_diff_index

    @property
    def actual_value_display(self) -> str:
        """Serialized actual value, truncated around the diff index if long."""
        return self._display.actual_display

    @property
    def actual_value_display_diff_index(self) -> int | None:
        return self._display.actual_display_diff_index

    def __hash__(self) -> int:
        # Values may be lists or dicts; equal records always share a path.
        return hash(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "expected": self.expected_value,
            "actual": self.actual_value,
        }

    def __str__(self) -> str:
        return self._display.text
