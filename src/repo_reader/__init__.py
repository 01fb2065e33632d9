"""
Repo Reader - read-only repository browsing tools for AI agents.

Exposes a local working copy of a repository as three text-returning
query operations: a hierarchy menu, a document reader and a multi-file
text/regex search, all operating over a glob-filtered view of the files.
"""

__version__ = "0.1.0"
__author__ = "Seba Battig"
