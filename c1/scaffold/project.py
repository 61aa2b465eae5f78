"""Generates the directory skeleton and starter files of a new project."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..buildfile import BUILD_FILENAME, HEADERS_MARKER, SOURCES_MARKER
from ..config import PathsConfig
from ..manifest import MANIFEST_FILENAME, save
from ..models import BuildSettings, Manifest, ProjectInfo
from .renderer import TemplateRenderer

DEFAULT_DESCRIPTION = "A C project created with c1"
DEFAULT_FLAGS = ("-O3", "-Wall")


def is_dir_empty(path: Path) -> bool:
    """True when ``path`` is missing or holds only hidden entries."""
    if not path.exists():
        return True
    return all(entry.name.startswith(".") for entry in path.iterdir())


def c_standard(edition: str) -> str:
    """Map a manifest edition such as ``"99"`` or ``"c11"`` to CMAKE_C_STANDARD."""
    digits = edition.strip().lower().removeprefix("c")
    return digits or "99"


class ProjectScaffolder:
    """Writes every starter file into an explicit project root."""

    def __init__(
        self,
        paths: PathsConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.paths = paths or PathsConfig()
        self.renderer = renderer or TemplateRenderer()

    def manifest_for(self, name: str) -> Manifest:
        return Manifest(
            project=ProjectInfo(name=name, description=DEFAULT_DESCRIPTION),
            build=BuildSettings(flags=list(DEFAULT_FLAGS)),
        )

    def write(self, root: Path, name: str) -> List[Path]:
        """Create the skeleton under ``root`` and return the files written."""
        for directory in (
            self.paths.sources,
            self.paths.include,
            self.paths.external,
            self.paths.build,
        ):
            (root / directory).mkdir(parents=True, exist_ok=True)

        manifest = self.manifest_for(name)
        context = {
            "project_name": name,
            "description": manifest.project.description,
            "c_standard": c_standard(manifest.project.edition),
            "sources_dir": self.paths.sources,
            "include_dir": self.paths.include,
            "external_dir": self.paths.external,
            "build_dir": self.paths.build,
            "sources_marker": SOURCES_MARKER,
            "headers_marker": HEADERS_MARKER,
        }
        outputs = {
            "main.c": self.renderer.render("main.c", **context),
            BUILD_FILENAME: self.renderer.render("CMakeLists.txt", **context),
            MANIFEST_FILENAME: save(manifest),
            "README.md": self.renderer.render("README.md", **context),
            ".gitignore": self.renderer.render("gitignore", **context),
        }
        written: List[Path] = []
        for filename, content in outputs.items():
            path = root / filename
            path.write_text(content, encoding="utf-8")
            written.append(path)
        return written


__all__ = ["DEFAULT_DESCRIPTION", "DEFAULT_FLAGS", "ProjectScaffolder", "c_standard", "is_dir_empty"]
