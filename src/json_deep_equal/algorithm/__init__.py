"""algorithm subpackage: options, glob matching and filters.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_deep_equal.algorithm import JsonDiffOptions, compile_glob

    matcher = compile_glob("**/Employees/*/FullName")
    matcher.matches("/Company/Employees/3/FullName")   # True
    options = JsonDiffOptions(exclude_property_paths=[matcher.pattern])
"""

from __future__ import annotations

from json_deep_equal.algorithm.config import (
    AttributeHandling,
    DeepEqualDiffOptions,
    DefaultValueHandling,
    JsonDiffOptions,
    NullValueHandling,
    PathFilter,
    ReferenceLoopHandling,
)
from json_deep_equal.algorithm.filters import build_name_filter, build_path_filter
from json_deep_equal.algorithm.glob import compile_glob

__all__ = [
    "AttributeHandling",
    "DeepEqualDiffOptions",
    "DefaultValueHandling",
    "JsonDiffOptions",
    "NullValueHandling",
    "PathFilter",
    "ReferenceLoopHandling",
    "build_name_filter",
    "build_path_filter",
    "compile_glob",
]
