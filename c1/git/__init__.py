"""Git collaborator and dependency synchronisation."""

from .client import CloneResult, GitClient
from .sync import DependencySynchronizer

__all__ = ["CloneResult", "DependencySynchronizer", "GitClient"]
