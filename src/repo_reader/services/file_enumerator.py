"""
File enumeration over a project directory.

Walks a subtree of the project, skipping well-known metadata and dependency
directories, and returns every visible regular file as a forward-slash path
relative to the project root.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .glob_matcher import FilterSet
from .path_normalizer import normalize_relative_path, resolve_under

logger = logging.getLogger(__name__)

# Exact entry names, not globs
DEFAULT_IGNORES = frozenset({".git", "node_modules", ".DS_Store"})


def should_ignore(name: str) -> bool:
    return name in DEFAULT_IGNORES


def list_files(
    root: Path,
    sub_path: Optional[str] = None,
    filters: Optional[FilterSet] = None,
) -> List[str]:
    """List visible files below ``root/sub_path``.

    Paths are relative to ``root`` (not ``sub_path``) so they can be matched
    against project-wide globs. Directories that cannot be read are skipped
    and the walk continues with their siblings. Order is unspecified.

    Args:
        root: Project root directory
        sub_path: Optional subdirectory to restrict the walk to
        filters: Include/exclude globs; ``None`` means everything is visible

    Returns:
        Project-relative posix paths of visible regular files
    """
    root = Path(root)
    filters = filters or FilterSet()
    relative_sub = normalize_relative_path(sub_path or "")
    start = resolve_under(root, relative_sub)
    results: List[str] = []

    def walk(directory: Path, relative_dir: str) -> None:
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return

        for entry in entries:
            if should_ignore(entry.name):
                continue
            relative = f"{relative_dir}/{entry.name}" if relative_dir else entry.name
            try:
                if entry.is_symlink() and entry.is_dir():
                    # Not followed to avoid cycles
                    continue
                if entry.is_dir():
                    walk(entry, relative)
                elif entry.is_file() and filters.is_visible(relative):
                    results.append(relative)
            except OSError as e:
                logger.debug(f"Skipping entry {entry}: {e}")

    if start.is_dir():
        walk(start, relative_sub)
    else:
        logger.debug(f"Nothing to enumerate, not a directory: {start}")

    return results
