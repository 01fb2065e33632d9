"""Query services operating over a filtered view of a project directory."""

from .glob_matcher import FilterSet, GlobMatcher, matches_any, matches_none
from .file_enumerator import list_files
from .hierarchy_menu import hierarchy_menu
from .document_reader import read_document
from .text_search import search

__all__ = [
    "FilterSet",
    "GlobMatcher",
    "matches_any",
    "matches_none",
    "list_files",
    "hierarchy_menu",
    "read_document",
    "search",
]
