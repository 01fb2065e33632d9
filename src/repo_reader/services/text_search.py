"""
Multi-file text and regex search.

Scans the filtered project files line by line against one compiled pattern,
aggregates distinct matching lines per file, and renders a sorted, paginated
text report (or just the matching file list).
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TypeVar, Union

from .file_enumerator import list_files
from .glob_matcher import FilterSet
from .path_normalizer import ensure_project_root, resolve_under

logger = logging.getLogger(__name__)

# Files larger than this are treated as binary or generated and skipped
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024

# Upper bound on concurrent per-file reads within one search
SEARCH_CONCURRENCY = 8

NO_RESULTS_MESSAGE = "No results found."

_LINE_BREAK = re.compile(r"\r?\n")

T = TypeVar("T")


@dataclass(frozen=True)
class MatchLine:
    """One matching line within one file."""

    path: str
    line_number: int
    text: str


@dataclass(frozen=True)
class SearchPattern:
    """Outcome of compiling a user query.

    ``compiled`` is ``None`` both for blank queries and for invalid regular
    expressions; ``error`` distinguishes the latter.
    """

    compiled: Optional["re.Pattern[str]"] = None
    error: Optional[str] = None


def make_text_search_pattern(
    query: str,
    case_sensitive: bool = False,
    whole_word: bool = False,
    regex: bool = False,
) -> SearchPattern:
    """Build the search pattern for a query.

    Literal queries are escaped; ``whole_word`` wraps the pattern in word
    boundaries; matching is case-insensitive unless ``case_sensitive``.
    """
    q = query.strip()
    if not q:
        return SearchPattern()

    pattern = q if regex else re.escape(q)
    if whole_word:
        pattern = rf"\b(?:{pattern})\b"
    flags = 0 if case_sensitive else re.IGNORECASE

    try:
        return SearchPattern(compiled=re.compile(pattern, flags))
    except re.error as e:
        return SearchPattern(error=f"Invalid regular expression: {e}")


def scan_file(
    root: Path, relative: str, pattern: "re.Pattern[str]"
) -> List[MatchLine]:
    """Return the distinct matching lines of one file in line order.

    Oversized and unreadable files yield no matches. A final trailing newline
    does not count as an extra line.
    """
    path = resolve_under(root, relative)
    try:
        if path.stat().st_size > MAX_FILE_SIZE_BYTES:
            logger.debug(f"Skipping oversized file: {relative}")
            return []
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            content = f.read()
    except OSError as e:
        logger.debug(f"Skipping unreadable file {relative}: {e}")
        return []

    lines = _LINE_BREAK.split(content) if content else []
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()

    # Each line is searched from position 0 independently
    return [
        MatchLine(path=relative, line_number=number, text=text)
        for number, text in enumerate(lines, start=1)
        if pattern.search(text) is not None
    ]


def paginate(
    items: Sequence[T], page: Optional[int] = 1, page_size: Optional[int] = None
) -> List[T]:
    """Slice one 1-based page; no ``page_size`` returns everything."""
    if not page_size or page_size <= 0:
        return list(items)
    page = max(1, page or 1)
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


def group_by_path(matches: List[MatchLine]) -> Dict[str, List[MatchLine]]:
    """Sort matches by path then line and group them per file."""
    grouped: Dict[str, List[MatchLine]] = {}
    for match in sorted(matches, key=lambda m: (m.path, m.line_number)):
        grouped.setdefault(match.path, []).append(match)
    return grouped


def format_section(path: str, lines: List[MatchLine]) -> str:
    body = "\n".join(f"  {m.line_number}:{m.text}" for m in lines)
    return f"{path}\n{body}"


def search(
    project_clone_location: Union[str, Path],
    query: str,
    case_sensitive: bool = False,
    whole_word: bool = False,
    regex: bool = False,
    include_globs: Optional[List[str]] = None,
    exclude_globs: Optional[List[str]] = None,
    page: Optional[int] = 1,
    page_size: Optional[int] = None,
    files_only: bool = False,
) -> str:
    """Search operation: matching lines (or files) across the project.

    Args:
        project_clone_location: Project root directory
        query: Literal text, or a regular expression when ``regex`` is set
        case_sensitive: Match case exactly
        whole_word: Require word boundaries around the match
        regex: Treat ``query`` as a regular expression
        include_globs: Globs a searched file must match
        exclude_globs: Globs a searched file must not match
        page: 1-based page number
        page_size: Files (or file sections) per page; unset returns all
        files_only: List matching paths instead of matching lines

    Returns:
        Report text; an empty string for a blank query, an
        ``Invalid regular expression`` message for a malformed pattern, or
        ``No results found.`` when nothing matches on the requested page.
    """
    root = ensure_project_root(Path(project_clone_location))

    built = make_text_search_pattern(query, case_sensitive, whole_word, regex)
    if built.error:
        return built.error
    if built.compiled is None:
        return ""
    compiled = built.compiled

    files = list_files(root, filters=FilterSet(include_globs, exclude_globs))
    matches: List[MatchLine] = []
    with ThreadPoolExecutor(max_workers=SEARCH_CONCURRENCY) as executor:
        for found in executor.map(lambda rel: scan_file(root, rel, compiled), files):
            matches.extend(found)

    grouped = group_by_path(matches)
    logger.debug(
        f"Search for {query!r} matched {len(matches)} lines in {len(grouped)} files"
    )

    if files_only:
        page_items = paginate(list(grouped), page, page_size)
    else:
        sections = [format_section(p, lines) for p, lines in grouped.items()]
        page_items = paginate(sections, page, page_size)

    if not page_items:
        return NO_RESULTS_MESSAGE
    return "\n".join(page_items) if files_only else "\n\n".join(page_items)
