"""Writes the source/header pair for a new module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import AlreadyExists
from ..naming import header_guard, validate_module_name
from .renderer import TemplateRenderer


@dataclass(frozen=True)
class ModuleFiles:
    name: str
    source: Path
    header: Path


def write_module(
    root: Path,
    name: str,
    *,
    sources_dir: str = "src",
    include_dir: str = "include",
    renderer: TemplateRenderer | None = None,
) -> ModuleFiles:
    """Create ``<sources_dir>/<name>.c`` and ``<include_dir>/<name>.h`` under ``root``.

    Nothing is written unless the name is valid and neither file exists.
    """
    validate_module_name(name)
    files = ModuleFiles(
        name=name,
        source=root / sources_dir / f"{name}.c",
        header=root / include_dir / f"{name}.h",
    )
    for path in (files.source, files.header):
        if path.exists():
            raise AlreadyExists(f"{path.relative_to(root).as_posix()} already exists")

    renderer = renderer or TemplateRenderer()
    header_text = renderer.render("module.h", module=name, guard=header_guard(name))
    source_text = renderer.render("module.c", module=name)

    files.source.parent.mkdir(parents=True, exist_ok=True)
    files.header.parent.mkdir(parents=True, exist_ok=True)
    files.source.write_text(source_text, encoding="utf-8")
    files.header.write_text(header_text, encoding="utf-8")
    return files


__all__ = ["ModuleFiles", "write_module"]
