"""Replace local dependency checkouts with fresh clones."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Mapping

from ..logging import get_logger
from ..models import DependencySpec, SyncOutcome, SyncReport, SyncStatus
from .client import GitClient

_UNSAFE_NAMES = {"", ".", ".."}


class DependencySynchronizer:
    """Clones every manifest dependency into ``root / name``.

    Existing checkouts are removed before cloning so repeated runs converge
    on the manifest. A failing entry is recorded and the batch continues.
    """

    def __init__(self, git: GitClient | None = None) -> None:
        self.git = git or GitClient()
        self.logger = get_logger("sync")

    def sync(self, dependencies: Mapping[str, DependencySpec], root: Path) -> SyncReport:
        report = SyncReport()
        if not dependencies:
            self.logger.info("No dependencies to sync")
            return report

        root.mkdir(parents=True, exist_ok=True)
        for name, spec in dependencies.items():
            report.outcomes.append(self._sync_one(name, spec, root))
        self.logger.debug("Sync finished: %s", report.summary())
        return report

    def _sync_one(self, name: str, spec: DependencySpec, root: Path) -> SyncOutcome:
        if name in _UNSAFE_NAMES or "/" in name or "\\" in name:
            self.logger.warning("Skipping %s: not usable as a directory name", name)
            return SyncOutcome(name, SyncStatus.SKIPPED, "name is not a valid directory name")

        self.logger.info("Syncing dependency: %s...", name)
        target_dir = root / name
        if target_dir.exists() or target_dir.is_symlink():
            self.logger.info("  Removing existing %s...", target_dir)
            try:
                _remove(target_dir)
            except OSError as exc:
                self.logger.error("  Failed to remove %s: %s", target_dir, exc)
                return SyncOutcome(name, SyncStatus.FAILED, f"could not remove {target_dir}: {exc}")

        ref = spec.ref()
        ref_kind, ref_value = ref if ref is not None else (None, None)
        if ref is not None:
            self.logger.debug("  Using %s %s", ref_kind, ref_value)
        result = self.git.clone(spec.git, target_dir, ref_kind, ref_value)
        if not result.success:
            self.logger.error("  Failed to clone %s", name)
            if result.diagnostic:
                self.logger.error("    %s", result.diagnostic)
            return SyncOutcome(name, SyncStatus.FAILED, result.diagnostic or "git clone failed")

        self.logger.info("  Cloned %s to %s", name, target_dir)
        return SyncOutcome(name, SyncStatus.CLONED)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


__all__ = ["DependencySynchronizer"]
