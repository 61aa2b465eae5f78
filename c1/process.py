"""Thin wrapper over subprocess used by the git and cmake collaborators."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of an external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        return (self.stderr or self.stdout).strip()


Runner = Callable[..., CommandResult]


def run_command(
    args: Iterable[str],
    *,
    cwd: Optional[Path] = None,
    capture_output: bool = True,
) -> CommandResult:
    """Run ``args`` to completion without raising on a non-zero exit.

    A missing executable is reported as exit status 127, mirroring a shell.
    """
    argv = list(args)
    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
            text=True,
            capture_output=capture_output,
        )
    except FileNotFoundError:
        return CommandResult(returncode=127, stderr=f"{argv[0]}: command not found")
    except OSError as exc:
        return CommandResult(returncode=126, stderr=f"{argv[0]}: {exc}")
    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


__all__ = ["CommandResult", "Runner", "run_command"]
