"""JsonDiffer: recursive lock-step comparison of two JSON trees.

Architecture:
- OBJECT/OBJECT: every expected property is compared with the same-named
  actual property (exact name match, missing -> None); actual-only properties
  are then compared against None.  Property order is irrelevant.
- ARRAY/ARRAY: elements are compared by index, extra elements against None.
  With ``ignore_array_element_order`` each expected element is greedily
  matched to the first unmatched actual element with zero differences; the
  leftovers are reported together at ``<path>/*`` and a count mismatch at
  ``<path>/length``.
- Anything else: one difference at the current path unless the two values
  are exactly equal.

Differences are produced lazily by generators, so a consumer that stops
pulling stops the walk.  Every record passes the path filter where it is
created.  The walk keeps the ``(expected, actual)`` container pairs of the
current recursion path and treats a pair seen again as equal, which makes
self-referencing trees terminate.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from itertools import islice
from typing import Any

from json_deep_equal.algorithm.config import JsonDiffOptions
from json_deep_equal.algorithm.filters import build_path_filter
from json_deep_equal.result import JsonDiffNode
from json_deep_equal.tree.nodes import NodeType, deep_equals, node_type, parse_json

__all__ = ["DiffEnumeration", "JsonDiffer"]

logger = logging.getLogger(__name__)

_LINE_ENDING = re.compile(r"\r\n?")
_WHITE_SPACE = re.compile(r"\s+")

# Recursion-path pairs of (id(expected), id(actual)) containers
_ActivePairs = set[tuple[int, int]]


class JsonDiffer:
    """Finds the differences between two JSON trees under fixed options.

    A differ holds no per-call state: every ``enumerate`` call starts a fresh
    walk, so one instance may serve several calls (and threads) at once.

    Example::

        from json_deep_equal.differ import JsonDiffer
        from json_deep_equal.algorithm.config import JsonDiffOptions

        differ = JsonDiffer(JsonDiffOptions(ignore_array_element_order=True))
        list(differ.enumerate([1, 2, 3], [3, 2, 1]))   # []
        list(differ.enumerate([1, 2, 3], [1, 2]))
        # [JsonDiffNode(path='/*', expected_value=[3], actual_value=[]),
        #  JsonDiffNode(path='/length', expected_value=3, actual_value=2)]
    """

    def __init__(self, options: JsonDiffOptions | None = None) -> None:
        self._options: JsonDiffOptions = (
            options if options is not None else JsonDiffOptions()
        )
        self._path_filter = build_path_filter(self._options)

    @property
    def options(self) -> JsonDiffOptions:
        return self._options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def enumerate(self, expected: Any, actual: Any) -> Iterator[JsonDiffNode]:
        """Lazily yield the differences between two tree values.

        Args:
            expected: The expected tree value (None for a missing document).
            actual:   The tree value compared against it.

        Yields:
            One ``JsonDiffNode`` per diverging path, in document order.
        """
        logger.debug("Enumerating differences with %r", self._options)
        if self._options.normalizes_text:
            expected = self._normalize_tree(expected, {})
            actual = self._normalize_tree(actual, {})
        yield from self._enumerate(expected, actual, "", set())

    def prepare_json(
        self, expected_json: str | None, actual_json: str | None
    ) -> tuple[Any, Any]:
        """Normalize raw JSON text per the options and parse both documents.

        Raises:
            json.JSONDecodeError: If either text is not valid JSON.
        """
        if expected_json is not None and actual_json is not None:
            expected_json = self._normalize_text(expected_json)
            actual_json = self._normalize_text(actual_json)
        return parse_json(expected_json), parse_json(actual_json)

    # ------------------------------------------------------------------
    # Text normalization
    # ------------------------------------------------------------------

    def _normalize_text(self, text: str) -> str:
        if self._options.ignore_line_ending_differences:
            text = _LINE_ENDING.sub("\n", text)
        if self._options.ignore_white_space_differences:
            text = _WHITE_SPACE.sub(" ", text)
        if self._options.ignore_case:
            text = text.lower()
        return text

    def _normalize_tree(self, value: Any, memo: dict[int, Any]) -> Any:
        """Copy a tree with every string value and property name normalized.

        ``memo`` maps already-copied containers to their copies so shared and
        self-referencing containers keep their shape.
        """
        kind = node_type(value)
        if kind == NodeType.STRING:
            return self._normalize_text(value)
        if kind not in (NodeType.OBJECT, NodeType.ARRAY):
            return value
        if id(value) in memo:
            return memo[id(value)]

        if kind == NodeType.OBJECT:
            copied_object: dict[str, Any] = {}
            memo[id(value)] = copied_object
            for name, member in value.items():
                copied_object[self._normalize_text(str(name))] = self._normalize_tree(
                    member, memo
                )
            return copied_object

        copied_array: list[Any] = []
        memo[id(value)] = copied_array
        copied_array.extend(self._normalize_tree(item, memo) for item in value)
        return copied_array

    # ------------------------------------------------------------------
    # Recursive comparison
    # ------------------------------------------------------------------

    def _emit(self, path: str, expected: Any, actual: Any) -> Iterator[JsonDiffNode]:
        if self._path_filter is None or self._path_filter.keep(path):
            yield JsonDiffNode(path, expected, actual)

    def _equivalent_empty(self, expected: Any, actual: Any) -> bool:
        for value, other in ((expected, actual), (actual, expected)):
            if other is not None:
                continue
            if self._options.ignore_empty_arrays and isinstance(value, (list, tuple)):
                if not value:
                    return True
            if self._options.ignore_empty_objects and isinstance(value, dict):
                if not value:
                    return True
        return False

    def _enumerate(
        self, expected: Any, actual: Any, path: str, active: _ActivePairs
    ) -> Iterator[JsonDiffNode]:
        if expected is actual or self._equivalent_empty(expected, actual):
            return

        expected_type = node_type(expected)
        actual_type = node_type(actual)
        if expected_type != actual_type or expected_type not in (
            NodeType.OBJECT,
            NodeType.ARRAY,
        ):
            if not deep_equals(expected, actual):
                yield from self._emit(path, expected, actual)
            return

        pair = (id(expected), id(actual))
        if pair in active:
            logger.debug("Cycle detected at %r, treating revisit as equal", path)
            return

        active.add(pair)
        try:
            if expected_type == NodeType.OBJECT:
                yield from self._enumerate_objects(expected, actual, path, active)
            else:
                yield from self._enumerate_arrays(expected, actual, path, active)
        finally:
            active.discard(pair)

    def _enumerate_objects(
        self,
        expected: dict[str, Any],
        actual: dict[str, Any],
        path: str,
        active: _ActivePairs,
    ) -> Iterator[JsonDiffNode]:
        matched = 0
        for name, expected_value in expected.items():
            if name in actual:
                matched += 1
                actual_value = actual[name]
            else:
                actual_value = None
            yield from self._enumerate(
                expected_value, actual_value, f"{path}/{name}", active
            )

        if matched == len(actual):
            return
        for name, actual_value in actual.items():
            if name in expected:
                continue
            yield from self._enumerate(None, actual_value, f"{path}/{name}", active)

    def _enumerate_arrays(
        self,
        expected: list[Any],
        actual: list[Any],
        path: str,
        active: _ActivePairs,
    ) -> Iterator[JsonDiffNode]:
        if not expected and not actual:
            return
        if self._options.ignore_array_element_order:
            yield from self._enumerate_unordered(expected, actual, path, active)
            return

        common = min(len(expected), len(actual))
        for index in range(common):
            yield from self._enumerate(
                expected[index], actual[index], f"{path}/{index}", active
            )
        for index in range(common, len(expected)):
            yield from self._enumerate(expected[index], None, f"{path}/{index}", active)
        for index in range(common, len(actual)):
            yield from self._enumerate(None, actual[index], f"{path}/{index}", active)

    def _enumerate_unordered(
        self,
        expected: list[Any],
        actual: list[Any],
        path: str,
        active: _ActivePairs,
    ) -> Iterator[JsonDiffNode]:
        # Quadratic greedy matching: first zero-difference candidate wins.
        element_path = f"{path}/*"
        unmatched_expected: list[Any] = []
        unmatched_actual = list(actual)
        for expected_element in expected:
            match_index = next(
                (
                    index
                    for index, candidate in enumerate(unmatched_actual)
                    if not self._has_differences(
                        expected_element, candidate, element_path, active
                    )
                ),
                None,
            )
            if match_index is None:
                unmatched_expected.append(expected_element)
            else:
                del unmatched_actual[match_index]

        if unmatched_expected or unmatched_actual:
            yield from self._emit(element_path, unmatched_expected, unmatched_actual)
        if len(expected) != len(actual):
            yield from self._emit(f"{path}/length", len(expected), len(actual))

    def _has_differences(
        self, expected: Any, actual: Any, path: str, active: _ActivePairs
    ) -> bool:
        differences = self._enumerate(expected, actual, path, active)
        try:
            return next(differences, None) is not None
        finally:
            differences.close()


class DiffEnumeration(Iterable[JsonDiffNode]):
    """Restartable lazy sequence of differences.

    Each iteration re-runs the comparison from scratch; nothing is computed
    until iteration starts, and only as far as the consumer pulls.
    """

    __slots__ = ("_actual", "_differ", "_expected")

    def __init__(self, differ: JsonDiffer, expected: Any, actual: Any) -> None:
        self._differ = differ
        self._expected = expected
        self._actual = actual

    def __iter__(self) -> Iterator[JsonDiffNode]:
        return self._differ.enumerate(self._expected, self._actual)

    def __bool__(self) -> bool:
        """True when there is at least one difference."""
        return any(True for _ in islice(self, 1))

    def take(self, count: int) -> list[JsonDiffNode]:
        """Return at most ``count`` differences without computing the rest."""
        return list(islice(self, count))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(expected={self._expected!r}, "
            f"actual={self._actual!r}, options={self._differ.options!r})"
        )
