"""
Shared pytest fixtures for Repo Reader tests.

Provides a factory that lays out a project directory from a mapping of
relative paths to file contents.
"""

from pathlib import Path
from typing import Callable, Dict

import pytest


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Create ``files`` (relative posix path -> content) below ``root``."""
    for relative, content in files.items():
        target = root.joinpath(*relative.split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_project(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Factory fixture returning a populated project directory."""

    def _make(files: Dict[str, str], name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files)

    return _make
