"""
Glob pattern matcher for project-relative file paths.

Supports a deliberately small glob dialect:
- ``*`` matches any run of characters within one path segment
- ``**`` matches across segments; ``**/`` also matches zero directories
- ``?`` matches exactly one non-separator character

Everything else is literal (no brace expansion, no character classes), and
patterns are anchored to the whole forward-slash path.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence


def to_posix(path: str) -> str:
    """Convert platform path separators to forward slashes."""
    return path.replace("\\", "/")


def glob_to_regex(glob: str) -> "re.Pattern[str]":
    """Translate a glob into a compiled, fully anchored regular expression.

    Metacharacters are escaped first so compilation cannot fail for any
    input string; the escaped wildcards are then expanded.

    Args:
        glob: Glob pattern using forward or backward slashes

    Returns:
        Compiled pattern intended for ``fullmatch`` against posix paths

    Examples:
        >>> bool(glob_to_regex("src/**").fullmatch("src/a/b.ts"))
        True
        >>> bool(glob_to_regex("*.py").fullmatch("pkg/mod.py"))
        False
    """
    pattern = re.escape(to_posix(glob))
    pattern = pattern.replace(r"\*\*/", "(?:.*/)?")
    pattern = pattern.replace(r"\*\*", ".*")
    pattern = pattern.replace(r"\*", "[^/]*")
    pattern = pattern.replace(r"\?", "[^/]")
    return re.compile(f"^{pattern}$", re.DOTALL)


class GlobMatcher:
    """A single compiled glob pattern.

    Examples:
        >>> GlobMatcher("**/*.test.ts").test("src/a.test.ts")
        True
        >>> GlobMatcher("src/*.ts").test("src\\\\a.ts")
        True
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.regex = glob_to_regex(pattern)

    def test(self, path: str) -> bool:
        return self.regex.fullmatch(to_posix(path)) is not None

    def __repr__(self) -> str:
        return f"GlobMatcher({self.pattern!r})"


def matches_any(path: str, patterns: Optional[Sequence[str]]) -> bool:
    """True when no patterns are given or at least one pattern matches."""
    if not patterns:
        return True
    return any(GlobMatcher(p).test(path) for p in patterns)


def matches_none(path: str, patterns: Optional[Sequence[str]]) -> bool:
    """True when no patterns are given or none of the patterns match."""
    if not patterns:
        return True
    return not any(GlobMatcher(p).test(path) for p in patterns)


@dataclass
class FilterSet:
    """Paired include/exclude globs deciding which files are visible.

    A missing or empty list on either side matches everything, never nothing.
    Patterns are compiled once when the filter set is built.
    """

    include_globs: Optional[List[str]] = None
    exclude_globs: Optional[List[str]] = None
    _includes: List[GlobMatcher] = field(init=False, repr=False, compare=False)
    _excludes: List[GlobMatcher] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._includes = [GlobMatcher(p) for p in self.include_globs or []]
        self._excludes = [GlobMatcher(p) for p in self.exclude_globs or []]

    @property
    def is_active(self) -> bool:
        """Whether any include or exclude pattern is present."""
        return bool(self._includes or self._excludes)

    def is_visible(self, path: str) -> bool:
        if self._includes and not any(m.test(path) for m in self._includes):
            return False
        return not any(m.test(path) for m in self._excludes)
