"""Pure helpers deriving names from URLs and validating identifiers."""

from __future__ import annotations

import re

from .errors import InvalidName

UNKNOWN_PACKAGE = "unknown"

_PACKAGE_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def derive_package_name(url: str) -> str:
    """Return the dependency key implied by a git URL.

    ``https://host/org/repo.git`` and ``git@host:org/repo.git`` both yield
    ``repo``. A bare name is returned as-is; a URL that ends in a separator
    falls back to ``"unknown"``.
    """
    trimmed = url.strip()
    if trimmed.endswith(".git"):
        trimmed = trimmed[: -len(".git")]
    if "/" in trimmed:
        name = trimmed.rsplit("/", 1)[1]
    elif ":" in trimmed:
        name = trimmed.rsplit(":", 1)[1]
    else:
        name = trimmed
    return name or UNKNOWN_PACKAGE


def validate_module_name(name: str) -> str:
    if not name or not all(ch.isalnum() or ch == "_" for ch in name):
        raise InvalidName(
            f"Invalid module name '{name}': use only letters, numbers, and underscores"
        )
    return name


def validate_package_name(name: str) -> str:
    """Validate a project or dependency name (letters, digits, ``_`` and ``-``)."""
    if not _PACKAGE_NAME_RE.match(name or ""):
        raise InvalidName(
            f"Invalid name '{name}': use only letters, numbers, underscores, and hyphens"
        )
    return name


def header_guard(name: str) -> str:
    return f"_{name.upper()}_H"


__all__ = [
    "UNKNOWN_PACKAGE",
    "derive_package_name",
    "header_guard",
    "validate_module_name",
    "validate_package_name",
]
