"""Exception classes for repository query operations."""

from typing import List, Optional


class RepoReaderError(Exception):
    """Base exception for repo reader errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ProjectRootError(RepoReaderError):
    """Exception raised when the project root cannot be used."""

    pass


class RootNotFoundError(ProjectRootError):
    """Exception raised when the project root does not exist."""

    pass


class RootNotADirectoryError(ProjectRootError):
    """Exception raised when the project root is not a directory."""

    pass


class DocumentError(RepoReaderError):
    """Base exception for document resolution failures."""

    pass


class DocumentNotFoundError(DocumentError):
    """Exception raised when no file matches the requested reference."""

    pass


class AmbiguousReferenceError(DocumentError):
    """Exception raised when a reference matches more than one file."""

    def __init__(self, message: str, candidates: List[str], total: int):
        super().__init__(message)
        self.candidates = candidates
        self.total = total


class NotAllowedByFilterError(DocumentError):
    """Exception raised when a file exists but is hidden by the filters."""

    pass


class ConfigError(RepoReaderError):
    """Exception raised when an explicitly supplied configuration is unusable."""

    pass
