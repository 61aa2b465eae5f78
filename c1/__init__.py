"""c1: scaffolding and dependency management for C projects."""

__version__ = "0.1.0"
