"""Marker-based registration of module files in CMakeLists.txt."""

from .injector import (
    BUILD_FILENAME,
    HEADERS_MARKER,
    SOURCES_MARKER,
    BuildFileInjector,
    InjectionResult,
    append_header,
    append_source,
)

__all__ = [
    "BUILD_FILENAME",
    "HEADERS_MARKER",
    "SOURCES_MARKER",
    "BuildFileInjector",
    "InjectionResult",
    "append_header",
    "append_source",
]
