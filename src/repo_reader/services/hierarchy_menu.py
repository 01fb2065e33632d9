"""
Hierarchy menu rendering for project directories.

Produces an ASCII tree similar to the ``tree`` command. Two tree sources feed
one renderer: a live directory walk, used when no globs are active, and a
tree synthesized from the filtered file list, used when globs are present
because a top-down walk cannot know whether a deep descendant survives a
full-path filter.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .file_enumerator import list_files, should_ignore
from .glob_matcher import FilterSet
from .path_normalizer import normalize_relative_path, resolve_under

logger = logging.getLogger(__name__)

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


@dataclass
class TreeNode:
    """A folder or file in the intermediate tree."""

    name: str
    is_directory: bool
    children: List["TreeNode"] = field(default_factory=list)

    def sort_children(self) -> None:
        """Order folders before files, each case-insensitively."""
        self.children.sort(
            key=lambda n: (not n.is_directory, n.name.lower(), n.name)
        )


def normalize_depth(depth: Optional[Union[int, float]]) -> Optional[int]:
    """Map a requested depth to a level budget, ``None`` meaning unlimited.

    ``None``, ``-1``, any other non-positive value and anything that is not a
    finite number are unlimited.
    """
    if depth is None:
        return None
    try:
        levels = int(depth)
    except (TypeError, ValueError, OverflowError):
        return None
    return levels if levels > 0 else None


def _expands(depth_left: Optional[int]) -> bool:
    return depth_left is None or depth_left > 1


def _next_depth(depth_left: Optional[int]) -> Optional[int]:
    return None if depth_left is None else depth_left - 1


class TreeSource(ABC):
    """Builds the intermediate tree that ``render_lines`` draws."""

    @abstractmethod
    def build(self, depth: Optional[int]) -> TreeNode:
        """Return the root node, expanded at least ``depth`` levels."""


class LiveWalk(TreeSource):
    """Tree read straight from the filesystem, bounded by the depth budget."""

    def __init__(self, directory: Path):
        self.directory = directory

    def build(self, depth: Optional[int]) -> TreeNode:
        root = TreeNode(name=self.directory.name, is_directory=True)
        # Unreadable start directory propagates to the caller
        root.children = self._read_children(self.directory, depth)
        return root

    def _read_children(
        self, directory: Path, depth_left: Optional[int]
    ) -> List[TreeNode]:
        nodes: List[TreeNode] = []
        for entry in directory.iterdir():
            if should_ignore(entry.name):
                continue
            try:
                is_dir = entry.is_dir() and not entry.is_symlink()
                is_file = entry.is_file()
            except OSError:
                continue
            if is_dir:
                node = TreeNode(name=entry.name, is_directory=True)
                if _expands(depth_left):
                    try:
                        node.children = self._read_children(
                            entry, _next_depth(depth_left)
                        )
                    except OSError as e:
                        logger.debug(f"Cannot read directory {entry}: {e}")
                nodes.append(node)
            elif is_file:
                nodes.append(TreeNode(name=entry.name, is_directory=False))
        return nodes


class SyntheticFromPaths(TreeSource):
    """Tree reconstructed from relative file paths alone."""

    def __init__(self, root_name: str, paths: Iterable[str]):
        self.root_name = root_name
        self.paths = list(paths)

    def build(self, depth: Optional[int]) -> TreeNode:
        root = TreeNode(name=self.root_name, is_directory=True)
        folders: Dict[str, TreeNode] = {"": root}

        for path in self.paths:
            segments = [s for s in path.split("/") if s]
            if not segments:
                continue
            parent = root
            prefix = ""
            for segment in segments[:-1]:
                prefix = f"{prefix}/{segment}" if prefix else segment
                folder = folders.get(prefix)
                if folder is None:
                    folder = TreeNode(name=segment, is_directory=True)
                    folders[prefix] = folder
                    parent.children.append(folder)
                parent = folder
            parent.children.append(TreeNode(name=segments[-1], is_directory=False))

        return root


def render_lines(
    node: TreeNode, prefix: str = "", depth_left: Optional[int] = None
) -> List[str]:
    """Draw the children of ``node`` as tree lines."""
    node.sort_children()
    lines: List[str] = []
    count = len(node.children)

    for index, child in enumerate(node.children):
        is_last = index == count - 1
        lines.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{child.name}")
        if child.is_directory and _expands(depth_left):
            lines.extend(
                render_lines(
                    child,
                    prefix + (SPACE if is_last else PIPE),
                    _next_depth(depth_left),
                )
            )

    return lines


def render_tree(
    root: Path,
    sub_path: Optional[str] = None,
    depth: Optional[Union[int, float]] = None,
    filters: Optional[FilterSet] = None,
) -> str:
    """Render the project (or one of its subdirectories) as an ASCII tree.

    The first line is always the project root's base name. Any failure to
    read the starting directory degrades to returning that line alone.

    Args:
        root: Project root directory
        sub_path: Optional subdirectory whose contents are shown
        depth: Level budget; ``None``/``-1``/non-positive means unlimited
        filters: Include/exclude globs matched against full relative paths

    Returns:
        Newline-joined tree text
    """
    root = Path(root)
    root_name = root.resolve().name
    relative_sub = normalize_relative_path(sub_path or "")
    levels = normalize_depth(depth)
    filters = filters or FilterSet()

    try:
        if filters.is_active:
            files = list_files(root, relative_sub, filters)
            if relative_sub:
                cut = len(relative_sub) + 1
                files = [f[cut:] for f in files if f.startswith(relative_sub + "/")]
            source: TreeSource = SyntheticFromPaths(root_name, files)
        else:
            source = LiveWalk(resolve_under(root, relative_sub))
        tree = source.build(levels)
        child_lines = render_lines(tree, "", levels)
    except (OSError, ValueError) as e:
        logger.debug(f"Falling back to root-only menu for {root}: {e}")
        return root_name

    return "\n".join([root_name] + child_lines)


def hierarchy_menu(
    project_clone_location: Union[str, Path],
    depth: Optional[Union[int, float]] = None,
    sub_path: Optional[str] = None,
    include_globs: Optional[List[str]] = None,
    exclude_globs: Optional[List[str]] = None,
) -> str:
    """Menu operation: tree of the project honoring depth and globs."""
    return render_tree(
        Path(project_clone_location),
        sub_path=sub_path,
        depth=depth,
        filters=FilterSet(include_globs, exclude_globs),
    )
