"""
Exclude pattern matching.

A pattern containing ``*`` is a glob, matched case-insensitively against
the whole normalized path (``*`` also matches ``/`` and leading dots, so
``**/node_modules/**`` excludes every file below any node_modules folder).
Any other pattern is a plain substring test.

The classifier, the identity resolver and the upload workflow all go
through ExcludeMatcher, so a pattern means the same thing everywhere.
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from frenglish.utils import normalize_path


def is_glob(pattern: str) -> bool:
    return "*" in pattern


@dataclass
class ExcludeMatcher:
    """Compiled set of exclude patterns.

    Usage:
        matcher = ExcludeMatcher.from_patterns(["**/excluded/**", "node_modules"])
        matcher.matches("/base/en/excluded/a.json")  # True
    """
    patterns: tuple[str, ...] = ()
    _globs: list[tuple[str, re.Pattern]] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    _substrings: list[str] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        for pattern in self.patterns:
            if not pattern:
                continue
            pattern = normalize_path(pattern)
            if is_glob(pattern):
                regex = re.compile(fnmatch.translate(pattern.lower()), re.DOTALL)
                self._globs.append((pattern, regex))
            else:
                self._substrings.append(pattern)

    @classmethod
    def from_patterns(cls, patterns: Optional[Iterable[str]]) -> ExcludeMatcher:
        return cls(tuple(patterns or ()))

    def __bool__(self) -> bool:
        return bool(self._globs or self._substrings)

    def match(self, path: str) -> Optional[str]:
        """Return the first pattern that excludes ``path``, or None."""
        normalized = normalize_path(path)
        lowered = normalized.lower()
        for pattern, regex in self._globs:
            if regex.match(lowered):
                return pattern
        for substring in self._substrings:
            if substring in normalized:
                return substring
        return None

    def matches(self, path: str) -> bool:
        return self.match(path) is not None

