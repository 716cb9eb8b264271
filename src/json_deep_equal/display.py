"""Aligned, truncated before/after rendering of a single difference.

Rendering of a difference at ``/Test`` between two long strings::

    /Test:
                                       ↓ (pos 659)
        Expected: …4925025125225325425525625725825926026126226326426526626726826…
        Actual:   …4925025125225325425501234567891011121314151617181920212223242…
                                       ↑ (pos 659)

Both values are serialized to compact JSON text.  ``diff_index`` is the first
character position where the two texts differ.  A text longer than
``MAX_DISPLAY_LENGTH`` is cut to a window of ``BEFORE_DIFF_LENGTH`` characters
before the diff index and ``AFTER_DIFF_LENGTH`` after it, with ``…`` marking
each cut, and the pointer column is shifted to match the window.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_deep_equal.tree.nodes import NodeType, node_type, to_json_text

__all__ = [
    "AFTER_DIFF_LENGTH",
    "BEFORE_DIFF_LENGTH",
    "ELLIPSIS",
    "MAX_DISPLAY_LENGTH",
    "DiffDisplay",
    "build_display",
    "find_diff_index",
    "truncate_display",
]

BEFORE_DIFF_LENGTH = 20
AFTER_DIFF_LENGTH = 40
MAX_DISPLAY_LENGTH = BEFORE_DIFF_LENGTH + 1 + AFTER_DIFF_LENGTH
ELLIPSIS = "…"

# Width of "    Expected: " and "    Actual:   "
_LABEL_WIDTH = 14

# Only values of these kinds have a meaningful character alignment
_POINTER_KINDS = frozenset(
    {NodeType.OBJECT, NodeType.ARRAY, NodeType.STRING, NodeType.BYTES}
)


@dataclass(frozen=True, slots=True)
class DiffDisplay:
    """Computed display of one difference.

    Attributes:
        diff_index: First differing character position in the full serialized
            texts, or None when the texts are identical.
        expected_display: Expected text, possibly truncated.
        expected_display_diff_index: ``diff_index`` within ``expected_display``.
        actual_display: Actual text, possibly truncated.
        actual_display_diff_index: ``diff_index`` within ``actual_display``.
        text: The full multi-line rendering.
    """

    diff_index: int | None
    expected_display: str
    expected_display_diff_index: int | None
    actual_display: str
    actual_display_diff_index: int | None
    text: str


def find_diff_index(expected: str, actual: str) -> int | None:
    """Return the first index where the texts differ.

    If one text is a strict prefix of the other, that is the length of the
    shorter one.  Identical texts have no diff index.
    """
    for index, (a, b) in enumerate(zip(expected, actual)):
        if a != b:
            return index
    if len(expected) != len(actual):
        return min(len(expected), len(actual))
    return None


def truncate_display(value: str, diff_index: int | None) -> tuple[str, int | None]:
    """Cut a serialized value down to the window around ``diff_index``.

    Returns:
        ``(display, display_diff_index)``.  Values within
        ``MAX_DISPLAY_LENGTH`` come back whole with the index unchanged.
        Without a diff index the head of the value is kept.
    """
    if len(value) <= MAX_DISPLAY_LENGTH:
        return value, diff_index

    if diff_index is None:
        return value[:MAX_DISPLAY_LENGTH] + ELLIPSIS, None

    start = max(diff_index - BEFORE_DIFF_LENGTH, 0)
    end = min(diff_index + AFTER_DIFF_LENGTH + 1, len(value))
    display = value[start:end]

    display_diff_index = diff_index
    if start > 0:
        # shifted by the cut, plus one for the leading ellipsis
        display_diff_index = diff_index + 1 - start
        display = ELLIPSIS + display
    if end < len(value):
        display += ELLIPSIS
    return display, display_diff_index


def _pointer_line(arrow: str, column: int, diff_index: int) -> str:
    return " " * (_LABEL_WIDTH + column) + f"{arrow} (pos {diff_index})"


def build_display(path: str, expected: Any, actual: Any) -> DiffDisplay:
    """Serialize both values and render the difference block.

    Raises:
        TypeError: If either value is not a tree value.
    """
    expected_text = to_json_text(expected)
    actual_text = to_json_text(actual)
    diff_index = find_diff_index(expected_text, actual_text)
    expected_display, expected_index = truncate_display(expected_text, diff_index)
    actual_display, actual_index = truncate_display(actual_text, diff_index)

    kind = node_type(expected)
    show_pointers = (
        diff_index is not None
        and expected_index is not None
        and actual_index is not None
        and kind == node_type(actual)
        and kind in _POINTER_KINDS
    )

    lines: list[str] = []
    if path:
        lines.append(f"{path}:")
    if show_pointers:
        lines.append(_pointer_line("↓", expected_index, diff_index))  # type: ignore[arg-type]
    lines.append(f"    Expected: {expected_display}")
    lines.append(f"    Actual:   {actual_display}")
    if show_pointers:
        lines.append(_pointer_line("↑", actual_index, diff_index))  # type: ignore[arg-type]

    return DiffDisplay(
        diff_index=diff_index,
        expected_display=expected_display,
        expected_display_diff_index=expected_index,
        actual_display=actual_display,
        actual_display_diff_index=actual_index,
        text="\n".join(lines),
    )
