"""Test assertions built on the difference enumerators.

Equal-assertions pull at most ``MAX_REPORTED_DIFFERENCES + 1`` differences,
so a failure message costs a bounded amount of work however far apart the
two values are.  Not-equal assertions stop at the first difference.
"""

from __future__ import annotations

from itertools import islice
from typing import Any

from json_deep_equal.algorithm.config import DeepEqualDiffOptions, JsonDiffOptions
from json_deep_equal.api import enumerate_deep_differences, enumerate_json_differences
from json_deep_equal.differ import DiffEnumeration
from json_deep_equal.exceptions import (
    MAX_REPORTED_DIFFERENCES,
    JsonEqualError,
    JsonNotEqualError,
)

__all__ = [
    "assert_deep_equal",
    "assert_deep_not_equal",
    "assert_json_equal",
    "assert_json_not_equal",
]


def _raise_if_different(method_name: str, differences: DiffEnumeration) -> None:
    found = list(islice(differences, MAX_REPORTED_DIFFERENCES + 1))
    if found:
        raise JsonEqualError(method_name, found)


def _raise_if_same(method_name: str, differences: DiffEnumeration) -> None:
    if not differences:
        raise JsonNotEqualError(method_name)


def assert_json_equal(
    expected_json: str | None,
    actual_json: str | None,
    options: JsonDiffOptions | None = None,
) -> None:
    """Assert that two JSON documents given as text are equal.

    Raises:
        JsonEqualError: Listing up to 20 differences (``20+`` when capped).
        json.JSONDecodeError: If either text is not valid JSON.
    """
    _raise_if_different(
        "assert_json_equal",
        enumerate_json_differences(expected_json, actual_json, options),
    )


def assert_json_not_equal(
    expected_json: str | None,
    actual_json: str | None,
    options: JsonDiffOptions | None = None,
) -> None:
    """Assert that two JSON documents given as text differ.

    Raises:
        JsonNotEqualError: When no difference is found.
    """
    _raise_if_same(
        "assert_json_not_equal",
        enumerate_json_differences(expected_json, actual_json, options),
    )


def assert_deep_equal(
    expected: Any,
    actual: Any,
    options: DeepEqualDiffOptions | None = None,
) -> None:
    """Assert that two Python objects are equal by their JSON form.

    Usage::

        assert_deep_equal(expected_company, actual_company)
        assert_deep_equal(
            expected_company,
            actual_company,
            DeepEqualDiffOptions(exclude_property_names=["Id", "*DateTime"]),
        )

    Raises:
        JsonEqualError: Listing up to 20 differences (``20+`` when capped).
    """
    _raise_if_different(
        "assert_deep_equal", enumerate_deep_differences(expected, actual, options)
    )


def assert_deep_not_equal(
    expected: Any,
    actual: Any,
    options: DeepEqualDiffOptions | None = None,
) -> None:
    """Assert that two Python objects differ by their JSON form.

    Raises:
        JsonNotEqualError: When no difference is found.
    """
    _raise_if_same(
        "assert_deep_not_equal", enumerate_deep_differences(expected, actual, options)
    )
