"""Jinja environment wrapper for the bundled templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


class TemplateRenderer:
    """Renders the ``*.j2`` files shipped next to this module."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, name: str, **context: Any) -> str:
        return self._env.get_template(f"{name}.j2").render(**context)


__all__ = ["TemplateRenderer"]
