"""Reading, writing, and surgically editing project.toml."""

from .codec import MANIFEST_FILENAME, format_dependency, load, load_file, save
from .editor import upsert_dependency

__all__ = [
    "MANIFEST_FILENAME",
    "format_dependency",
    "load",
    "load_file",
    "save",
    "upsert_dependency",
]
