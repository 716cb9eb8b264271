"""Exclusion filters for property names and difference paths.

A filter is an ordered pipeline of stages.  Each stage narrows the candidates
that survived the previous one:

1. literal exclusions (case-insensitive equality),
2. glob exclusions (see ``json_deep_equal.algorithm.glob``),
3. a user-supplied custom filter.

Every stage exposes both ``apply(candidates)`` (the iterable-to-iterable form
users write custom filters in) and ``keep(candidate)`` (the per-candidate form
the diff engine and tree builder call while producing output lazily).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from json_deep_equal.algorithm.glob import GlobMatcher, LiteralMatcher, compile_glob

if TYPE_CHECKING:
    from json_deep_equal.algorithm.config import (
        DeepEqualDiffOptions,
        JsonDiffOptions,
        PathFilter,
    )

__all__ = [
    "AggregateFilter",
    "CandidateFilter",
    "CustomFilter",
    "ExclusionFilter",
    "build_name_filter",
    "build_path_filter",
]


class CandidateFilter:
    """Base for filter stages: ``apply`` is derived from ``keep``."""

    def keep(self, candidate: str) -> bool:
        raise NotImplementedError

    def apply(self, candidates: Iterable[str]) -> Iterator[str]:
        return (candidate for candidate in candidates if self.keep(candidate))

    def __call__(self, candidates: Iterable[str]) -> Iterator[str]:
        return self.apply(candidates)


class ExclusionFilter(CandidateFilter):
    """Drops candidates matching any of the given literal or glob patterns.

    ``None`` and empty patterns are inert.  Literal patterns are checked before
    glob patterns.
    """

    def __init__(self, patterns: Iterable[str | None]) -> None:
        matchers = [m for m in (compile_glob(p) for p in patterns) if m is not None]
        self._literals: tuple[LiteralMatcher, ...] = tuple(
            m for m in matchers if isinstance(m, LiteralMatcher)
        )
        self._globs: tuple[GlobMatcher, ...] = tuple(
            m for m in matchers if isinstance(m, GlobMatcher)
        )

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(m.pattern for m in (*self._literals, *self._globs))

    def keep(self, candidate: str) -> bool:
        if any(m.matches(candidate) for m in self._literals):
            return False
        return not any(m.matches(candidate) for m in self._globs)

    def __bool__(self) -> bool:
        return bool(self._literals or self._globs)


class CustomFilter(CandidateFilter):
    """Adapts a user ``Iterable[str] -> Iterable[str]`` callable to a stage.

    ``keep`` hands the callable a single candidate at a time, so a custom
    filter is expected to decide per candidate.
    """

    def __init__(self, func: PathFilter) -> None:
        self._func = func

    def keep(self, candidate: str) -> bool:
        return candidate in set(self._func([candidate]))

    def apply(self, candidates: Iterable[str]) -> Iterator[str]:
        return iter(self._func(candidates))


class AggregateFilter(CandidateFilter):
    """Chains filter stages; a later stage only sees earlier survivors."""

    def __init__(self, *filters: CandidateFilter) -> None:
        if not filters:
            raise ValueError("Must have at least one filter")
        self.inner_filters: tuple[CandidateFilter, ...] = filters

    def keep(self, candidate: str) -> bool:
        return all(f.keep(candidate) for f in self.inner_filters)

    def apply(self, candidates: Iterable[str]) -> Iterator[str]:
        result: Iterable[str] = candidates
        for f in self.inner_filters:
            result = f.apply(result)
        return iter(result)


def _combine(
    patterns: Iterable[str], custom: PathFilter | None
) -> CandidateFilter | None:
    stages: list[CandidateFilter] = []
    exclusions = ExclusionFilter(patterns)
    if exclusions:
        stages.append(exclusions)
    if custom is not None:
        stages.append(CustomFilter(custom))

    if not stages:
        return None
    if len(stages) == 1:
        return stages[0]
    return AggregateFilter(*stages)


def build_path_filter(options: JsonDiffOptions) -> CandidateFilter | None:
    """Build the filter applied to difference paths, or None if nothing filters."""
    return _combine(options.exclude_property_paths, options.property_path_filter)


def build_name_filter(options: DeepEqualDiffOptions) -> CandidateFilter | None:
    """Build the filter applied to object member names, or None if nothing filters."""
    return _combine(options.exclude_property_names, options.property_filter)
