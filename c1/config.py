"""Tool configuration loading for c1 (.c1.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import C1Error

CONFIG_FILENAME = ".c1.yml"
BUILD_MODES = ("debug", "release")


class ConfigError(C1Error):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PathsConfig:
    """Project-relative directory names."""

    sources: str = "src"
    include: str = "include"
    external: str = "external"
    build: str = "build"


@dataclass
class ToolsConfig:
    """Executables used for the git and cmake collaborators."""

    git: str = "git"
    cmake: str = "cmake"


@dataclass
class BuildConfig:
    """Defaults for ``c1 build`` and ``c1 run``."""

    mode: str = "debug"
    generator: Optional[str] = None


@dataclass
class C1Config:
    """Represents the settings defined in .c1.yml."""

    root: Path
    paths: PathsConfig = field(default_factory=PathsConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    def path(self, kind: str) -> Path:
        """Resolve one of the ``paths`` entries against the project root."""
        return self.root / getattr(self.paths, kind)


def load_config(config_path: Path) -> C1Config:
    """Load configuration from a project directory or an explicit file."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return C1Config(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    paths = PathsConfig()
    paths_data = _as_dict(data.get("paths"))
    for key in ("sources", "include", "external", "build"):
        value = _as_str(paths_data.get(key))
        if value:
            setattr(paths, key, value)

    tools = ToolsConfig()
    tools_data = _as_dict(data.get("tools"))
    tools.git = _as_str(tools_data.get("git")) or tools.git
    tools.cmake = _as_str(tools_data.get("cmake")) or tools.cmake

    build = BuildConfig()
    build_data = _as_dict(data.get("build"))
    mode = (_as_str(build_data.get("mode")) or build.mode).lower()
    if mode not in BUILD_MODES:
        raise ConfigError(
            f"{CONFIG_FILENAME}: build.mode must be one of {', '.join(BUILD_MODES)}, got '{mode}'"
        )
    build.mode = mode
    build.generator = _as_str(build_data.get("generator"))

    return C1Config(root=root, paths=paths, tools=tools, build=build)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


__all__ = [
    "BUILD_MODES",
    "BuildConfig",
    "C1Config",
    "CONFIG_FILENAME",
    "ConfigError",
    "PathsConfig",
    "ToolsConfig",
    "load_config",
]
