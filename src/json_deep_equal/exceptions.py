"""Exception types raised by json-deep-equal.

- ``JsonEqualError``: two values that should be equal are not.
- ``JsonNotEqualError``: two values that should differ are equal.
- ``ReferenceLoopError``: an object graph refers back to itself and the
  conversion options ask for an error.

The assertion errors subclass ``AssertionError`` so test runners report them
as assertion failures rather than errors.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_deep_equal.result import JsonDiffNode

__all__ = ["JsonEqualError", "JsonNotEqualError", "ReferenceLoopError"]

# Most differences rendered into one failure message
MAX_REPORTED_DIFFERENCES = 20


class JsonEqualError(AssertionError):
    """Raised when two values that should be equal have differences.

    Attributes:
        method_name: Name of the failing assertion, e.g. ``"assert_deep_equal"``.
        differences: The differences found, at most
            ``MAX_REPORTED_DIFFERENCES + 1`` of them.
    """

    def __init__(self, method_name: str, differences: Sequence[JsonDiffNode]) -> None:
        self.method_name = method_name
        self.differences: tuple[JsonDiffNode, ...] = tuple(differences)
        super().__init__(self._build_message())

    @property
    def has_more_differences(self) -> bool:
        """True when more differences exist than the message reports."""
        return len(self.differences) > MAX_REPORTED_DIFFERENCES

    def _build_message(self) -> str:
        count = len(self.differences)
        if self.has_more_differences:
            summary = f"{MAX_REPORTED_DIFFERENCES}+ differences"
        elif count == 1:
            summary = "1 difference"
        else:
            summary = f"{count} differences"

        lines = [f"{self.method_name}() Failure: {summary}"]
        lines.extend(str(difference) for difference in self.differences)
        return "\n".join(lines)


class JsonNotEqualError(AssertionError):
    """Raised when two values that should differ are equal."""

    def __init__(self, method_name: str) -> None:
        self.method_name = method_name
        super().__init__(f"{method_name}() Failure")


class ReferenceLoopError(ValueError):
    """Raised when an object graph refers back to an object being converted."""
