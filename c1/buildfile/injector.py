"""Append file references above the c1 markers of a generated build file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..errors import MarkerMissing

BUILD_FILENAME = "CMakeLists.txt"
SOURCES_MARKER = "# @c1_sources"
HEADERS_MARKER = "# @c1_headers"


def append_source(text: str, relative_path: str) -> str:
    return _insert_above_marker(text, SOURCES_MARKER, relative_path)


def append_header(text: str, relative_path: str) -> str:
    return _insert_above_marker(text, HEADERS_MARKER, relative_path)


def _insert_above_marker(text: str, marker: str, entry: str) -> str:
    """Place ``entry`` on its own line directly above the first ``marker``.

    The entry reuses the marker's indentation and the marker itself is kept,
    so repeated calls stack entries in call order.
    """
    position = text.find(marker)
    if position == -1:
        raise MarkerMissing(marker)
    line_start = text.rfind("\n", 0, position) + 1
    indent = text[line_start:position]
    if indent.strip():
        # Marker shares its line with other content; keep that content intact.
        indent = ""
    return f"{text[:position]}{entry}\n{indent}{text[position:]}"


@dataclass
class InjectionResult:
    """Updated build-file text plus the markers that could not be found."""

    text: str
    missing: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.missing


class BuildFileInjector:
    """Registers a module's source and header with the build file."""

    def __init__(self, sources_dir: str = "src", include_dir: str = "include") -> None:
        self.sources_dir = sources_dir.rstrip("/")
        self.include_dir = include_dir.rstrip("/")

    def register_module(self, text: str, module: str) -> InjectionResult:
        result = InjectionResult(text=text)
        steps = (
            (append_source, f"{self.sources_dir}/{module}.c"),
            (append_header, f"{self.include_dir}/{module}.h"),
        )
        for append, relative_path in steps:
            try:
                result.text = append(result.text, relative_path)
            except MarkerMissing as exc:
                result.missing.append(exc.marker)
        return result


__all__ = [
    "BUILD_FILENAME",
    "HEADERS_MARKER",
    "SOURCES_MARKER",
    "BuildFileInjector",
    "InjectionResult",
    "append_header",
    "append_source",
]
