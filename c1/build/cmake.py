"""Configure, compile, and run projects through cmake."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import CollaboratorFailure
from ..logging import get_logger
from ..models import BuildSettings
from ..process import CommandResult, Runner, run_command

_BUILD_TYPES = {"debug": "Debug", "release": "Release"}


class CMakeBuilder:
    """Drives ``cmake`` for a single project root."""

    def __init__(
        self,
        runner: Runner | None = None,
        *,
        executable: str = "cmake",
        generator: Optional[str] = None,
    ) -> None:
        self._runner = runner or run_command
        self.executable = executable
        self.generator = generator
        self.logger = get_logger("cmake")

    def configure(
        self,
        source_dir: Path,
        build_dir: Path,
        mode: str = "debug",
        settings: BuildSettings | None = None,
    ) -> CommandResult:
        build_type = _BUILD_TYPES.get(mode.lower())
        if build_type is None:
            raise ValueError(f"Unknown build mode '{mode}'")
        args: List[str] = [
            self.executable,
            "-S",
            str(source_dir),
            "-B",
            str(build_dir),
            f"-DCMAKE_BUILD_TYPE={build_type}",
        ]
        if self.generator:
            args.extend(["-G", self.generator])
        if settings is not None:
            if settings.compiler:
                args.append(f"-DCMAKE_C_COMPILER={settings.compiler}")
            if settings.flags:
                args.append(f"-DCMAKE_C_FLAGS={' '.join(settings.flags)}")
        self.logger.info("Configuring %s build in %s", build_type, build_dir)
        return self._checked(args, cwd=source_dir, action="cmake configure")

    def compile(self, build_dir: Path) -> CommandResult:
        self.logger.info("Compiling in %s", build_dir)
        return self._checked(
            [self.executable, "--build", str(build_dir)],
            cwd=build_dir,
            action="cmake build",
        )

    def run_executable(self, executable: Path, args: Sequence[str] = ()) -> int:
        """Run a built program with inherited stdio and return its exit status."""
        if not executable.is_file():
            raise CollaboratorFailure(f"Executable not found: {executable}")
        self.logger.info("Running %s", executable)
        result = self._runner(
            [str(executable), *args], cwd=executable.parent, capture_output=False
        )
        if result.returncode in (126, 127) and result.stderr:
            raise CollaboratorFailure(f"Failed to launch {executable}", result.stderr)
        return result.returncode

    def _checked(self, args: List[str], *, cwd: Path, action: str) -> CommandResult:
        self.logger.debug("Running: %s", " ".join(args))
        result = self._runner(args, cwd=cwd, capture_output=True)
        if not result.ok:
            raise CollaboratorFailure(
                f"{action} failed with exit code {result.returncode}", result.diagnostic
            )
        if result.stdout.strip():
            self.logger.debug(result.stdout.rstrip())
        return result


__all__ = ["CMakeBuilder"]
