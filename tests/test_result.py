"""Tests for JsonDiffNode and its rendering.

Covers:
- Record fields, equality, hashing, immutability and to_dict()
- Rendering of scalar values (no pointer lines)
- Pointer lines for strings, bytes and containers of the same kind,
  including recursive containers
- Truncation of long values around the first differing character
- find_diff_index / truncate_display helpers
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from decimal import Decimal
from typing import Any

import pytest

from json_deep_equal.display import (
    ELLIPSIS,
    MAX_DISPLAY_LENGTH,
    find_diff_index,
    truncate_display,
)
from json_deep_equal.result import JsonDiffNode

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _digits(count: int, start: int = 0) -> str:
    return "".join(str(i) for i in range(start, start + count))


def _cycle(count: int) -> str:
    return "".join(str(i % 10) for i in range(count))


def _block(*lines: str) -> str:
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------


class TestJsonDiffNodeRecord:
    def test_defaults_are_none(self) -> None:
        node = JsonDiffNode("/a")
        assert node.expected_value is None
        assert node.actual_value is None

    def test_equality(self) -> None:
        assert JsonDiffNode("/a", 1, 2) == JsonDiffNode("/a", 1, 2)
        assert JsonDiffNode("/a", 1, 2) != JsonDiffNode("/b", 1, 2)

    def test_hashable_with_container_values(self) -> None:
        node = JsonDiffNode("/a", {"x": [1]}, [2])
        assert hash(node) == hash(JsonDiffNode("/a", {"x": [1]}, [2]))
        records = {node, JsonDiffNode("/a", {"x": [1]}, [2]), JsonDiffNode("/a", 1, 2)}
        assert len(records) == 2

    def test_frozen(self) -> None:
        node = JsonDiffNode("/a", 1, 2)
        with pytest.raises(FrozenInstanceError):
            node.path = "/b"  # type: ignore[misc]

    def test_to_dict(self) -> None:
        assert JsonDiffNode("/a", [1], None).to_dict() == {
            "path": "/a",
            "expected": [1],
            "actual": None,
        }

    def test_display_properties(self) -> None:
        node = JsonDiffNode("/a", "ab", "ac")
        assert node.diff_index == 2
        assert node.expected_value_display == '"ab"'
        assert node.actual_value_display == '"ac"'
        assert node.expected_value_display_diff_index == 2
        assert node.actual_value_display_diff_index == 2

    def test_diff_index_of_prefix_and_identical_text(self) -> None:
        node = JsonDiffNode("/a", 1, 1.0)
        assert node.diff_index == 1
        assert JsonDiffNode("/a", "x", "x").diff_index is None


# ---------------------------------------------------------------------------
# Scalar rendering
# ---------------------------------------------------------------------------


class TestScalarRendering:
    @pytest.mark.parametrize(
        ("value", "expected_text"),
        [
            (2, "2"),
            (2.0, "2.0"),
            (2.123, "2.123"),
            ("", '""'),
            ("2", '"2"'),
            ("Hello world!", '"Hello world!"'),
            ('"hi"', '"\\"hi\\""'),
            ("domain\\user", '"domain\\\\user"'),
            (None, "null"),
            (True, "true"),
            (False, "false"),
        ],
    )
    def test_value_against_null(self, value: object, expected_text: str) -> None:
        assert str(JsonDiffNode("/Test", value, None)) == _block(
            "/Test:",
            f"    Expected: {expected_text}",
            "    Actual:   null",
        )

    def test_decimal_values(self) -> None:
        node = JsonDiffNode("/Test", Decimal("2.123"), Decimal("2.0"))
        assert str(node) == _block(
            "/Test:",
            "    Expected: 2.123",
            "    Actual:   2.0",
        )

    def test_numbers_have_no_pointer(self) -> None:
        assert str(JsonDiffNode("/Test", 5, 4)) == _block(
            "/Test:",
            "    Expected: 5",
            "    Actual:   4",
        )

    def test_root_path_has_no_header(self) -> None:
        assert str(JsonDiffNode("", 1, 2)) == _block(
            "    Expected: 1",
            "    Actual:   2",
        )

    def test_mixed_kinds_have_no_pointer(self) -> None:
        assert str(JsonDiffNode("/Test", "1", 1)) == _block(
            "/Test:",
            '    Expected: "1"',
            "    Actual:   1",
        )


# ---------------------------------------------------------------------------
# Pointer rendering
# ---------------------------------------------------------------------------


class TestPointerRendering:
    def test_string_values(self) -> None:
        node = JsonDiffNode("/Test", "Hello, World", "Hello, blorld")
        assert str(node) == _block(
            "/Test:",
            " " * 22 + "↓ (pos 8)",
            '    Expected: "Hello, World"',
            '    Actual:   "Hello, blorld"',
            " " * 22 + "↑ (pos 8)",
        )

    def test_case_difference(self) -> None:
        node = JsonDiffNode("/Test", "Hello, World", "Hello, world")
        assert node.diff_index == 8

    def test_identical_strings_have_no_pointer(self) -> None:
        node = JsonDiffNode("/Test", "Hello, World", "Hello, World")
        assert str(node) == _block(
            "/Test:",
            '    Expected: "Hello, World"',
            '    Actual:   "Hello, World"',
        )

    def test_enum_names(self) -> None:
        node = JsonDiffNode("/Test", "OrdinalIgnoreCase", "Ordinal")
        assert str(node) == _block(
            "/Test:",
            " " * 22 + "↓ (pos 8)",
            '    Expected: "OrdinalIgnoreCase"',
            '    Actual:   "Ordinal"',
            " " * 22 + "↑ (pos 8)",
        )

    def test_bytes_values(self) -> None:
        node = JsonDiffNode("/Test", bytes([1, 171, 128, 3]), bytes([2]))
        assert str(node) == _block(
            "/Test:",
            " " * 16 + "↓ (pos 2)",
            '    Expected: "AauAAw=="',
            '    Actual:   "Ag=="',
            " " * 16 + "↑ (pos 2)",
        )

    def test_object_values(self) -> None:
        node = JsonDiffNode("/Test", {"a": 1}, {"a": 2})
        assert str(node) == _block(
            "/Test:",
            " " * 19 + "↓ (pos 5)",
            '    Expected: {"a":1}',
            '    Actual:   {"a":2}',
            " " * 19 + "↑ (pos 5)",
        )

    def test_recursive_unmatched_element(self) -> None:
        looped: dict[str, Any] = {"x": 2}
        looped["self"] = looped
        node = JsonDiffNode("/*", [{"x": 1}], [looped])
        assert str(node) == _block(
            "/*:",
            " " * 20 + "↓ (pos 6)",
            '    Expected: [{"x":1}]',
            '    Actual:   [{"x":2,"self":{...}}]',
            " " * 20 + "↑ (pos 6)",
        )


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


class TestTruncatedRendering:
    def test_difference_in_middle(self) -> None:
        expected = _digits(512)
        actual = _digits(256) + _digits(256)
        assert str(JsonDiffNode("/Test", expected, actual)) == _block(
            "/Test:",
            " " * 35 + "↓ (pos 659)",
            "    Expected: …4925025125225325425525625725825926026126226326426526626726826…",
            "    Actual:   …4925025125225325425501234567891011121314151617181920212223242…",
            " " * 35 + "↑ (pos 659)",
        )

    def test_barely_truncated(self) -> None:
        expected = _cycle(20) + "a" + _cycle(40)
        actual = _cycle(20) + "b" + _cycle(40)
        assert str(JsonDiffNode("/Test", expected, actual)) == _block(
            "/Test:",
            " " * 35 + "↓ (pos 21)",
            "    Expected: …01234567890123456789a0123456789012345678901234567890123456789…",
            "    Actual:   …01234567890123456789b0123456789012345678901234567890123456789…",
            " " * 35 + "↑ (pos 21)",
        )

    def test_not_truncated(self) -> None:
        expected = _cycle(19) + "a" + _cycle(39)
        actual = _cycle(19) + "b" + _cycle(39)
        assert str(JsonDiffNode("/Test", expected, actual)) == _block(
            "/Test:",
            " " * 34 + "↓ (pos 20)",
            '    Expected: "0123456789012345678a012345678901234567890123456789012345678"',
            '    Actual:   "0123456789012345678b012345678901234567890123456789012345678"',
            " " * 34 + "↑ (pos 20)",
        )

    def test_difference_at_start(self) -> None:
        node = JsonDiffNode("/Test", _digits(512), _digits(512, start=1))
        assert str(node) == _block(
            "/Test:",
            " " * 15 + "↓ (pos 1)",
            '    Expected: "01234567891011121314151617181920212223242…',
            '    Actual:   "12345678910111213141516171819202122232425…',
            " " * 15 + "↑ (pos 1)",
        )

    def test_difference_at_end(self) -> None:
        node = JsonDiffNode("/Test", _digits(512) + "ab", _digits(512) + "ac")
        assert str(node) == _block(
            "/Test:",
            " " * 35 + "↓ (pos 1428)",
            '    Expected: …5506507508509510511ab"',
            '    Actual:   …5506507508509510511ac"',
            " " * 35 + "↑ (pos 1428)",
        )
        assert node.expected_value_display_diff_index == 21


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestFindDiffIndex:
    @pytest.mark.parametrize(
        ("expected", "actual", "index"),
        [
            ("abc", "abd", 2),
            ("abc", "xbc", 0),
            ("ab", "abc", 2),
            ("abc", "ab", 2),
            ("", "a", 0),
            ("abc", "abc", None),
        ],
    )
    def test_find_diff_index(self, expected: str, actual: str, index: int | None) -> None:
        assert find_diff_index(expected, actual) == index


class TestTruncateDisplay:
    def test_short_value_is_unchanged(self) -> None:
        value = "x" * MAX_DISPLAY_LENGTH
        assert truncate_display(value, 30) == (value, 30)

    def test_long_value_without_index_keeps_head(self) -> None:
        value = "x" * 100
        display, index = truncate_display(value, None)
        assert display == "x" * MAX_DISPLAY_LENGTH + ELLIPSIS
        assert index is None

    def test_window_around_index(self) -> None:
        value = _cycle(200)
        display, index = truncate_display(value, 100)
        assert display == ELLIPSIS + value[80:141] + ELLIPSIS
        assert index == 21
        assert display[index] == value[100]
