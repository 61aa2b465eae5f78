"""CMake build-tool collaborator."""

from .cmake import CMakeBuilder

__all__ = ["CMakeBuilder"]
