"""
Normalization of caller-supplied paths into project-relative form.

Converts backslashes, strips drive letters and leading/trailing slashes, and
drops empty, ``.`` and ``..`` segments so the result never escapes the
project root.
"""

import logging
import re
from pathlib import Path

from ..exceptions import RootNotADirectoryError, RootNotFoundError

logger = logging.getLogger(__name__)

_DRIVE_LETTER = re.compile(r"^[A-Za-z]:")


def normalize_relative_path(file_path: str) -> str:
    """Normalize a user path to a forward-slash project-relative path.

    Args:
        file_path: Path as typed by the caller (posix or Windows style)

    Returns:
        Relative posix path, or an empty string for the project root

    Examples:
        >>> normalize_relative_path("C:\\\\repo\\\\src\\\\main.py")
        'repo/src/main.py'
        >>> normalize_relative_path("/../src/./a.ts/")
        'src/a.ts'
    """
    if not file_path:
        return ""

    s = file_path.strip().replace("\\", "/")
    s = _DRIVE_LETTER.sub("", s)
    s = s.strip("/")
    if not s:
        return ""

    raw_parts = [seg for seg in s.split("/") if seg]
    parts = [seg for seg in raw_parts if seg not in (".", "..")]
    if len(parts) != len(raw_parts):
        logger.debug(f"Dropped traversal segments from path: {file_path!r}")

    return "/".join(parts)


def resolve_under(root: Path, relative_path: str) -> Path:
    """Join a normalized relative path onto the project root."""
    if not relative_path:
        return root
    return root.joinpath(*relative_path.split("/"))


def ensure_project_root(root: Path) -> Path:
    """Validate that the project root exists and is a directory."""
    if not root.exists():
        raise RootNotFoundError(f"Project path not found: {root}")
    if not root.is_dir():
        raise RootNotADirectoryError(f"Project path is not a directory: {root}")
    return root
