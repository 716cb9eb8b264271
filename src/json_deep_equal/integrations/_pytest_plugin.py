"""pytest plugin for json-deep-equal.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_deep_equal import assertions


@pytest.fixture(scope="session")
def assert_deep_equal() -> Any:
    """Fixture that returns the deep-equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (every call builds a fresh TreeBuilder and JsonDiffer).

    Usage in tests::

        def test_order(assert_deep_equal):
            assert_deep_equal(expected_order, place_order(cart))

        def test_ignores_ids(assert_deep_equal):
            options = DeepEqualDiffOptions(exclude_property_names=["Id"])
            assert_deep_equal(expected_order, place_order(cart), options)

    Returns:
        ``assert_deep_equal(expected, actual, options=None) -> None``, raising
        ``JsonEqualError`` (an ``AssertionError``) that lists the differences.
    """
    return assertions.assert_deep_equal


@pytest.fixture(scope="session")
def assert_json_equal() -> Any:
    """Fixture that returns the JSON text equality asserter.

    Usage in tests::

        def test_payload(assert_json_equal):
            assert_json_equal('{"id": 1}', response.text)

    Returns:
        ``assert_json_equal(expected_json, actual_json, options=None) -> None``.
    """
    return assertions.assert_json_equal
