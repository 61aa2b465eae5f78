"""Conversion between project.toml text and the Manifest model."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..errors import ParseError, ProjectNotFound
from ..models import (
    DEFAULT_COMPILER,
    DEFAULT_EDITION,
    DEFAULT_VERSION,
    BuildSettings,
    DependencySpec,
    Manifest,
    ProjectInfo,
)

MANIFEST_FILENAME = "project.toml"

_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")

_DEPENDENCY_HINT = (
    "# Add your dependencies here",
    "# Example:",
    '# arc-c = { git = "https://github.com/weynechen/arc-c.git", tag = "v0.5.0" }',
)


def load(text: str) -> Manifest:
    """Parse manifest text, applying defaults for every optional field."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ParseError(f"Error parsing {MANIFEST_FILENAME}: {exc}") from exc

    project_data = data.get("project")
    if not isinstance(project_data, dict):
        raise ParseError(f"{MANIFEST_FILENAME}: missing [project] table")
    name = project_data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ParseError(f"{MANIFEST_FILENAME}: missing or empty project.name")

    project = ProjectInfo(
        name=name,
        version=_optional_str(project_data, "version", DEFAULT_VERSION, "project"),
        edition=_optional_str(project_data, "edition", DEFAULT_EDITION, "project"),
        description=_optional_str(project_data, "description", "", "project"),
    )

    build_data = data.get("build", {})
    if not isinstance(build_data, dict):
        raise ParseError(f"{MANIFEST_FILENAME}: [build] must be a table")
    flags = build_data.get("flags", [])
    if not isinstance(flags, list) or not all(isinstance(flag, str) for flag in flags):
        raise ParseError(f"{MANIFEST_FILENAME}: build.flags must be a list of strings")
    build = BuildSettings(
        compiler=_optional_str(build_data, "compiler", DEFAULT_COMPILER, "build"),
        flags=list(flags),
    )

    deps_data = data.get("dependencies", {})
    if not isinstance(deps_data, dict):
        raise ParseError(f"{MANIFEST_FILENAME}: [dependencies] must be a table")
    dependencies = {name: _dependency(name, value) for name, value in deps_data.items()}

    return Manifest(project=project, build=build, dependencies=dependencies)


def load_file(root: Path) -> Manifest:
    """Load ``project.toml`` from a project root."""
    path = root / MANIFEST_FILENAME
    if not path.is_file():
        raise ProjectNotFound(f"{MANIFEST_FILENAME} not found in {root}")
    return load(path.read_text(encoding="utf-8"))


def save(manifest: Manifest) -> str:
    """Render a complete manifest. Used when a project is first created."""
    project = manifest.project
    lines: List[str] = [
        "[project]",
        f"name = {_quote(project.name)}",
        f"version = {_quote(project.version)}",
        f"edition = {_quote(project.edition)}",
        f"description = {_quote(project.description)}",
        "",
        "[dependencies]",
    ]
    if manifest.dependencies:
        for name, spec in manifest.dependencies.items():
            lines.append(format_dependency(name, spec))
    else:
        lines.extend(_DEPENDENCY_HINT)
    lines.extend(
        [
            "",
            "[build]",
            f"compiler = {_quote(manifest.build.compiler)}",
            "flags = [" + ", ".join(_quote(flag) for flag in manifest.build.flags) + "]",
        ]
    )
    return "\n".join(lines) + "\n"


def format_dependency(name: str, spec: DependencySpec) -> str:
    """Render one ``[dependencies]`` entry as a single inline-table line."""
    fields: Dict[str, str] = {"git": spec.git}
    if spec.branch:
        fields["branch"] = spec.branch
    if spec.tag:
        fields["tag"] = spec.tag
    inner = ", ".join(f"{key} = {_quote(value)}" for key, value in fields.items())
    return f"{format_key(name)} = {{ {inner} }}"


def format_key(key: str) -> str:
    if _BARE_KEY_RE.match(key):
        return key
    return _quote(key)


def _quote(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\t", "\\t")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )
    return f'"{escaped}"'


def _optional_str(table: Mapping[str, Any], key: str, default: str, section: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise ParseError(f"{MANIFEST_FILENAME}: {section}.{key} must be a string")
    return value


def _dependency(name: str, value: Any) -> DependencySpec:
    if not isinstance(value, dict):
        raise ParseError(f"{MANIFEST_FILENAME}: dependency '{name}' must be a table")
    git = value.get("git")
    if not isinstance(git, str) or not git.strip():
        raise ParseError(f"{MANIFEST_FILENAME}: no 'git' URL specified for '{name}'")
    refs: Dict[str, str] = {}
    for key in ("branch", "tag"):
        ref = value.get(key)
        if ref is None:
            continue
        if not isinstance(ref, str):
            raise ParseError(f"{MANIFEST_FILENAME}: {name}.{key} must be a string")
        refs[key] = ref
    return DependencySpec(git=git, branch=refs.get("branch"), tag=refs.get("tag"))


__all__ = ["MANIFEST_FILENAME", "format_dependency", "format_key", "load", "load_file", "save"]
