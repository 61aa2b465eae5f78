from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Dict, List, Mapping

import pytest

from c1.process import CommandResult


class FakeGit:
    """Stands in for the git executable; ``clone`` writes a marker file."""

    def __init__(self, failing: Mapping[str, str] | None = None) -> None:
        self.failing: Dict[str, str] = dict(failing or {})
        self.calls: List[List[str]] = []

    def __call__(self, args, *, cwd=None, capture_output=True) -> CommandResult:
        argv = list(args)
        self.calls.append(argv)
        if argv[1] == "clone":
            url, target = argv[-2], Path(argv[-1])
            if url in self.failing:
                return CommandResult(returncode=128, stderr=self.failing[url])
            target.mkdir(parents=True)
            (target / "CLONED_FROM").write_text(url, encoding="utf-8")
            return CommandResult(returncode=0)
        return CommandResult(returncode=0)

    @property
    def clones(self) -> List[List[str]]:
        return [call for call in self.calls if call[1] == "clone"]


class ProjectBuilder:
    """Writes project files into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "proj"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> Path:
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return self.root

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    return ProjectBuilder(tmp_path)
