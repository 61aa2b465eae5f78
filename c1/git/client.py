"""Git command wrapper used for cloning dependencies and initialising projects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..process import CommandResult, Runner, run_command


@dataclass(frozen=True)
class CloneResult:
    """Whether a clone succeeded, with git's diagnostic output."""

    success: bool
    diagnostic: str = ""


class GitClient:
    """Invokes the git executable through an injectable runner."""

    def __init__(self, runner: Runner | None = None, *, executable: str = "git") -> None:
        self._runner = runner or run_command
        self.executable = executable

    def clone(
        self,
        url: str,
        target_dir: Path,
        ref_kind: Optional[str] = None,
        ref_value: Optional[str] = None,
    ) -> CloneResult:
        """Clone ``url`` into ``target_dir``, optionally pinned to a branch or tag.

        Branches and tags are both selected through ``--branch`` with
        ``--single-branch``; ``ref_kind`` only affects logging upstream.
        """
        args: List[str] = [self.executable, "clone"]
        if ref_kind is not None and ref_value:
            args.extend(["--branch", ref_value, "--single-branch"])
        args.extend([url, str(target_dir)])
        result = self._run(args, cwd=target_dir.parent)
        return CloneResult(success=result.ok, diagnostic=result.diagnostic)

    def init(self, repo_path: Path) -> bool:
        """Run ``git init`` in ``repo_path``; return whether it succeeded."""
        result = self._run([self.executable, "init"], cwd=repo_path)
        return result.ok

    def _run(self, args: List[str], *, cwd: Path) -> CommandResult:
        return self._runner(args, cwd=cwd, capture_output=True)


__all__ = ["CloneResult", "GitClient"]
