"""
Document resolution and reading.

Resolves a caller's file reference to exactly one project file, first by
direct path and then by fuzzy name matching over the filtered file list, and
returns its content, optionally narrowed to a window around one line.
"""

import logging
import posixpath
import re
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import (
    AmbiguousReferenceError,
    DocumentNotFoundError,
    NotAllowedByFilterError,
)
from .file_enumerator import list_files
from .glob_matcher import FilterSet
from .path_normalizer import (
    ensure_project_root,
    normalize_relative_path,
    resolve_under,
)

logger = logging.getLogger(__name__)

DEFAULT_LINE_RANGE = 3
MAX_AMBIGUOUS_EXAMPLES = 10

_LINE_BREAK = re.compile(r"\r?\n")


def strip_extension(path: str) -> str:
    return posixpath.splitext(path)[0]


def find_candidates(files: List[str], reference: str) -> List[str]:
    """Return the sorted relative paths a normalized reference may denote.

    A reference containing a separator is compared against whole relative
    paths; a bare name is compared against basenames. Either side may omit
    the extension.
    """
    has_dir = "/" in reference
    target = reference if has_dir else posixpath.basename(reference)
    target_no_ext = strip_extension(target)

    candidates = set()
    for rel in files:
        subject = rel if has_dir else posixpath.basename(rel)
        if subject == target or strip_extension(subject) == target_no_ext:
            candidates.add(rel)

    return sorted(candidates)


def resolve_document(
    root: Path, file_path: str, filters: Optional[FilterSet] = None
) -> str:
    """Resolve ``file_path`` to a single visible project-relative path.

    Raises:
        NotAllowedByFilterError: Direct path exists but is filtered out
        DocumentNotFoundError: No candidate matches
        AmbiguousReferenceError: More than one candidate matches
    """
    filters = filters or FilterSet()
    normalized = normalize_relative_path(file_path)

    if normalized:
        direct = resolve_under(root, normalized)
        try:
            is_file = direct.is_file()
        except OSError:
            is_file = False
        if is_file:
            if not filters.is_visible(normalized):
                raise NotAllowedByFilterError(
                    f"File not allowed by filters: {file_path}"
                )
            return normalized

    candidates: List[str] = []
    if normalized:
        candidates = find_candidates(list_files(root, filters=filters), normalized)

    if not candidates:
        raise DocumentNotFoundError(f"File not found: {file_path}")
    if len(candidates) > 1:
        examples = candidates[:MAX_AMBIGUOUS_EXAMPLES]
        listing = "\n - ".join(examples)
        raise AmbiguousReferenceError(
            f"Ambiguous file reference: {file_path}. "
            f"Found {len(candidates)} matches. Examples:\n - {listing}",
            candidates=examples,
            total=len(candidates),
        )

    logger.debug(f"Resolved {file_path!r} to {candidates[0]!r}")
    return candidates[0]


def slice_lines(content: str, line: int, line_range: Optional[int] = None) -> str:
    """Cut a symmetric window of lines around ``line`` with a header.

    The target is clamped into the file and the window to the file bounds.
    A final trailing newline does not count as an extra line.
    """
    lines = _LINE_BREAK.split(content) if content else []
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()

    radius = DEFAULT_LINE_RANGE if line_range is None else max(0, int(line_range))
    total = len(lines)
    if total == 0:
        return f"Lines 0-0 of 0 (target 0, range {radius})"

    target = min(max(int(line), 1), total)
    start = max(1, target - radius)
    end = min(total, target + radius)

    header = f"Lines {start}-{end} of {total} (target {target}, range {radius})"
    return "\n".join([header] + lines[start - 1 : end])


def read_document(
    project_clone_location: Union[str, Path],
    file_path: str,
    line: Optional[int] = None,
    range: Optional[int] = None,
    include_globs: Optional[List[str]] = None,
    exclude_globs: Optional[List[str]] = None,
) -> str:
    """Read operation: content of the uniquely referenced file.

    Args:
        project_clone_location: Project root directory
        file_path: Relative path, bare file name, or either without extension
        line: Optional 1-based line to center a window on
        range: Lines shown before and after ``line`` (default 3)
        include_globs: Globs a readable file must match
        exclude_globs: Globs a readable file must not match

    Returns:
        Full file content, or the requested window with a header line
    """
    root = ensure_project_root(Path(project_clone_location))
    relative = resolve_document(
        root, file_path, FilterSet(include_globs, exclude_globs)
    )
    path = resolve_under(root, relative)

    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            content = f.read()
    except FileNotFoundError as e:
        raise DocumentNotFoundError(f"File not found: {file_path}") from e

    if line is None:
        return content
    return slice_lines(content, line, range)
