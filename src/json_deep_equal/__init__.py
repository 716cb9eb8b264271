"""JSON deep equal - structural differences between JSON documents and objects."""

from __future__ import annotations

import logging

from json_deep_equal.algorithm.config import (
    AttributeHandling,
    DeepEqualDiffOptions,
    DefaultValueHandling,
    JsonDiffOptions,
    NullValueHandling,
    ReferenceLoopHandling,
)
from json_deep_equal.api import (
    enumerate_deep_differences,
    enumerate_differences,
    enumerate_json_differences,
    is_equivalent,
)
from json_deep_equal.assertions import (
    assert_deep_equal,
    assert_deep_not_equal,
    assert_json_equal,
    assert_json_not_equal,
)
from json_deep_equal.differ import DiffEnumeration, JsonDiffer
from json_deep_equal.exceptions import (
    JsonEqualError,
    JsonNotEqualError,
    ReferenceLoopError,
)
from json_deep_equal.result import JsonDiffNode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "AttributeHandling",
    "DeepEqualDiffOptions",
    "DefaultValueHandling",
    "DiffEnumeration",
    "JsonDiffNode",
    "JsonDiffOptions",
    "JsonDiffer",
    "JsonEqualError",
    "JsonNotEqualError",
    "NullValueHandling",
    "ReferenceLoopError",
    "ReferenceLoopHandling",
    "assert_deep_equal",
    "assert_deep_not_equal",
    "assert_json_equal",
    "assert_json_not_equal",
    "enumerate_deep_differences",
    "enumerate_differences",
    "enumerate_json_differences",
    "is_equivalent",
]
