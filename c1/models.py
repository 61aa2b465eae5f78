"""Core data models shared across c1 components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

DEFAULT_VERSION = "0.1.0"
DEFAULT_EDITION = "99"
DEFAULT_COMPILER = "gcc"


@dataclass
class ProjectInfo:
    """Identity fields from the ``[project]`` table."""

    name: str
    version: str = DEFAULT_VERSION
    edition: str = DEFAULT_EDITION
    description: str = ""


@dataclass
class BuildSettings:
    """Compiler settings from the ``[build]`` table."""

    compiler: str = DEFAULT_COMPILER
    flags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DependencySpec:
    """A git-sourced dependency. ``branch`` wins over ``tag`` when both are set."""

    git: str
    branch: Optional[str] = None
    tag: Optional[str] = None

    def ref(self) -> Optional[Tuple[str, str]]:
        """Return the ``(kind, value)`` selector used for cloning, if any."""
        if self.branch:
            return ("branch", self.branch)
        if self.tag:
            return ("tag", self.tag)
        return None


@dataclass
class Manifest:
    """In-memory view of project.toml."""

    project: ProjectInfo
    build: BuildSettings = field(default_factory=BuildSettings)
    dependencies: Dict[str, DependencySpec] = field(default_factory=dict)


class SyncStatus(str, Enum):
    """Outcome kind of one dependency in a sync run."""

    CLONED = "cloned"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncOutcome:
    """Result of synchronising a single dependency."""

    name: str
    status: SyncStatus
    reason: str = ""


@dataclass
class SyncReport:
    """Per-dependency outcomes of a sync run, in manifest order."""

    outcomes: List[SyncOutcome] = field(default_factory=list)

    @property
    def nothing_to_sync(self) -> bool:
        return not self.outcomes

    @property
    def failed(self) -> List[SyncOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is SyncStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        if self.nothing_to_sync:
            return "nothing to sync"
        counts = {status: 0 for status in SyncStatus}
        for outcome in self.outcomes:
            counts[outcome.status] += 1
        return ", ".join(f"{counts[status]} {status.value}" for status in SyncStatus)


__all__ = [
    "BuildSettings",
    "DEFAULT_COMPILER",
    "DEFAULT_EDITION",
    "DEFAULT_VERSION",
    "DependencySpec",
    "Manifest",
    "ProjectInfo",
    "SyncOutcome",
    "SyncReport",
    "SyncStatus",
]
