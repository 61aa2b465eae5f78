"""Error taxonomy shared by c1 operations."""

from __future__ import annotations


class C1Error(RuntimeError):
    """Base class for failures surfaced to the user."""


class ParseError(C1Error):
    """Raised when project.toml is malformed or lacks mandatory fields."""


class InvalidName(C1Error, ValueError):
    """Raised when a module, project, or dependency name fails validation."""


class AlreadyExists(C1Error, FileExistsError):
    """Raised when a target path for a project or module is already present."""


class ProjectNotFound(C1Error, FileNotFoundError):
    """Raised when an operation needs project.toml and none is present."""


class CollaboratorFailure(C1Error):
    """Raised when git or cmake exits non-zero or cannot be launched."""

    def __init__(self, message: str, diagnostic: str = "") -> None:
        super().__init__(message)
        self.diagnostic = diagnostic

    def __str__(self) -> str:
        base = super().__str__()
        detail = self.diagnostic.strip()
        return f"{base}\n{detail}" if detail else base


class MarkerMissing(C1Error):
    """Raised when a build-file insertion marker cannot be located."""

    def __init__(self, marker: str) -> None:
        super().__init__(f"marker '{marker}' not found in build file")
        self.marker = marker


__all__ = [
    "AlreadyExists",
    "C1Error",
    "CollaboratorFailure",
    "InvalidName",
    "MarkerMissing",
    "ParseError",
    "ProjectNotFound",
]
