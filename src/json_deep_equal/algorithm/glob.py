"""Glob pattern matchers for property names and slash-delimited paths.

Wildcards:
- ``**`` matches any run of characters, separators included (zero or more
  path segments).
- ``*``  matches any run of characters within one segment.
- ``?``  matches exactly one non-separator character.

A pattern starting with a separator (``/`` or ``\\``) is anchored to the start
of the candidate.  Any other pattern matches a suffix of the candidate that
begins at the start or right after a separator, so ``Employees/*/FullName``
matches ``/Company/Employees/0/FullName``.  Matching is case-insensitive.

A pattern without wildcards is a literal: it matches a candidate equal to it
ignoring case.  Compiled matchers are cached per pattern text.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from cachetools import LRUCache, cached

__all__ = [
    "GlobMatcher",
    "LiteralMatcher",
    "Matcher",
    "compile_glob",
    "is_absolute_pattern",
    "is_glob_pattern",
]

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?")
_SEPARATORS = ("/", "\\")

# Regex fragments for each wildcard token
_ANY_SEGMENTS = ".*"
_WITHIN_SEGMENT = r"[^/\\]*"
_ONE_CHAR = r"[^/\\]"
_SEGMENT_START = r"(?:^|[/\\])"

# Wildcards first so "**" wins over "*"
_TOKEN = re.compile(r"\*\*|\*|\?|[^*?]+")


@runtime_checkable
class Matcher(Protocol):
    """Anything that can test a property name or path against a pattern."""

    pattern: str

    def matches(self, candidate: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class LiteralMatcher:
    """Exact, case-insensitive match against a pattern without wildcards."""

    pattern: str

    def matches(self, candidate: str) -> bool:
        return candidate.casefold() == self.pattern.casefold()


@dataclass(frozen=True, slots=True)
class GlobMatcher:
    """Compiled glob pattern.

    Attributes:
        pattern: The original glob text.
        regex:   The compiled, case-insensitive expression.
    """

    pattern: str
    regex: re.Pattern[str]

    def matches(self, candidate: str) -> bool:
        return self.regex.search(candidate) is not None


def is_glob_pattern(pattern: str | None) -> bool:
    """Return True if the pattern contains a wildcard character."""
    return pattern is not None and any(ch in _GLOB_CHARS for ch in pattern)


def is_absolute_pattern(pattern: str | None) -> bool:
    """Return True if the pattern starts with a path separator."""
    if not pattern:
        return False
    return pattern[0] in _SEPARATORS


def _translate(pattern: str) -> str:
    parts: list[str] = ["^" if is_absolute_pattern(pattern) else _SEGMENT_START]
    for token in _TOKEN.findall(pattern):
        if token == "**":
            parts.append(_ANY_SEGMENTS)
        elif token == "*":
            parts.append(_WITHIN_SEGMENT)
        elif token == "?":
            parts.append(_ONE_CHAR)
        else:
            parts.append(re.escape(token))
    parts.append("$")
    return "".join(parts)


@cached(cache=LRUCache(maxsize=512), lock=threading.RLock())
def compile_glob(pattern: str | None) -> Matcher | None:
    """Compile a pattern into a matcher.

    Args:
        pattern: Glob or literal pattern text.

    Returns:
        A ``GlobMatcher`` for patterns containing ``*`` or ``?``, a
        ``LiteralMatcher`` otherwise, or ``None`` for a ``None`` or empty
        pattern (which never matches anything).
    """
    if not pattern:
        return None
    if not is_glob_pattern(pattern):
        return LiteralMatcher(pattern)

    expression = _translate(pattern)
    logger.debug("Compiled glob %r to %r", pattern, expression)
    return GlobMatcher(pattern, re.compile(expression, re.IGNORECASE))
