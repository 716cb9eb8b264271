"""Public API functions for json-deep-equal.

This module provides the user-facing functions: enumerate_differences,
enumerate_json_differences, enumerate_deep_differences and is_equivalent.
Each call creates a fresh JsonDiffer (and TreeBuilder) so no state is shared
between calls.  Inputs are parsed or converted eagerly; the differences
themselves are computed lazily, as the returned sequence is iterated.
"""

from __future__ import annotations

from typing import Any

from json_deep_equal.algorithm.config import DeepEqualDiffOptions, JsonDiffOptions
from json_deep_equal.differ import DiffEnumeration, JsonDiffer
from json_deep_equal.tree.builder import TreeBuilder

__all__ = [
    "enumerate_deep_differences",
    "enumerate_differences",
    "enumerate_json_differences",
    "is_equivalent",
]


def enumerate_differences(
    expected: Any,
    actual: Any,
    options: JsonDiffOptions | None = None,
) -> DiffEnumeration:
    """Find the differences between two JSON tree values.

    Args:
        expected: The expected tree value (dict, list, str, int, float,
                  Decimal, bytes, bool or None).
        actual:   The tree value to be compared against.
        options:  Comparison options. Defaults to ``JsonDiffOptions()`` when None.

    Returns:
        A restartable lazy sequence of ``JsonDiffNode``; empty when the two
        values are equal under the options.
    """
    return DiffEnumeration(JsonDiffer(options), expected, actual)


def enumerate_json_differences(
    expected_json: str | None,
    actual_json: str | None,
    options: JsonDiffOptions | None = None,
) -> DiffEnumeration:
    """Find the differences between two JSON documents given as text.

    ``None`` text stands for a missing document and compares like ``null``.

    Raises:
        json.JSONDecodeError: If either text is not valid JSON.
    """
    differ = JsonDiffer(options)
    expected, actual = differ.prepare_json(expected_json, actual_json)
    return DiffEnumeration(differ, expected, actual)


def enumerate_deep_differences(
    expected: Any,
    actual: Any,
    options: DeepEqualDiffOptions | None = None,
) -> DiffEnumeration:
    """Find the differences between two Python objects via their JSON form.

    Both objects are converted with ``TreeBuilder`` under the options' member
    policies, then compared as trees.

    Raises:
        ReferenceLoopError: If an object graph loops back on itself and
            ``options.reference_loop_handling`` is ``ERROR``.
    """
    if options is None:
        options = DeepEqualDiffOptions()
    builder = TreeBuilder(options)
    expected_tree = builder.build(expected) if expected is not None else None
    actual_tree = builder.build(actual) if actual is not None else None
    return DiffEnumeration(JsonDiffer(options), expected_tree, actual_tree)


def is_equivalent(
    expected: Any,
    actual: Any,
    options: JsonDiffOptions | None = None,
) -> bool:
    """Return True if two JSON tree values have no differences.

    Stops at the first difference found.
    """
    return not enumerate_differences(expected, actual, options)
