"""
Agent-facing query tools bound to one project.

Applies the resolved configuration as defaults (``files`` as include globs,
``depth`` as menu depth) before delegating to the query services.
"""

from dataclasses import dataclass
from typing import List, Optional

from .local_reference import LocalReference
from .services.document_reader import read_document
from .services.hierarchy_menu import hierarchy_menu
from .services.text_search import search


@dataclass(frozen=True)
class ToolDescription:
    """Name and description of one exposed tool."""

    name: str
    description: str


class RepoReaderTools:
    """The menu, read-document and search tools for one local reference."""

    def __init__(self, reference: LocalReference):
        self.reference = reference

    @property
    def name(self) -> str:
        return self.reference.config.name

    def _includes(self, include_globs: Optional[List[str]]) -> Optional[List[str]]:
        if include_globs:
            return include_globs
        return self.reference.config.files or None

    def describe(self) -> List[ToolDescription]:
        name = self.name
        return [
            ToolDescription(
                f"{name}-menu",
                f"Get a menu of {name}. Use it to understand the structure of {name}.",
            ),
            ToolDescription(
                f"{name}-read-document",
                f"Read a document of {name} by path or file name, "
                "optionally around a line.",
            ),
            ToolDescription(
                f"{name}-search",
                f"Search text or regular expressions across the files of {name}.",
            ),
        ]

    def hierarchy_menu(
        self,
        depth: Optional[int] = None,
        sub_path: Optional[str] = None,
        include_globs: Optional[List[str]] = None,
        exclude_globs: Optional[List[str]] = None,
    ) -> str:
        return hierarchy_menu(
            self.reference.project_clone_location,
            depth=depth if depth is not None else self.reference.config.depth,
            sub_path=sub_path,
            include_globs=self._includes(include_globs),
            exclude_globs=exclude_globs,
        )

    def read_document(
        self,
        file_path: str,
        line: Optional[int] = None,
        range: Optional[int] = None,
        include_globs: Optional[List[str]] = None,
        exclude_globs: Optional[List[str]] = None,
    ) -> str:
        return read_document(
            self.reference.project_clone_location,
            file_path,
            line=line,
            range=range,
            include_globs=self._includes(include_globs),
            exclude_globs=exclude_globs,
        )

    def search(
        self,
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
        return search(
            self.reference.project_clone_location,
            query,
            case_sensitive=case_sensitive,
            whole_word=whole_word,
            regex=regex,
            include_globs=self._includes(include_globs),
            exclude_globs=exclude_globs,
            page=page,
            page_size=page_size,
            files_only=files_only,
        )
