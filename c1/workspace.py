"""Coordinates c1 operations against an explicit project root."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .build import CMakeBuilder
from .buildfile import BUILD_FILENAME, BuildFileInjector
from .config import C1Config, load_config
from .errors import AlreadyExists
from .git import DependencySynchronizer, GitClient
from .logging import get_logger
from .manifest import MANIFEST_FILENAME, load, load_file, upsert_dependency
from .models import DependencySpec, SyncReport
from .naming import derive_package_name, validate_package_name
from .process import Runner
from .scaffold import ModuleFiles, ProjectScaffolder, is_dir_empty, write_module


@dataclass
class ProjectOutcome:
    """Result of creating a project skeleton."""

    root: Path
    name: str
    files: List[Path]
    git_initialized: bool


@dataclass
class ModuleOutcome:
    """Result of ``create``; ``missing_markers`` lists skipped registrations."""

    files: ModuleFiles
    registered: bool
    missing_markers: List[str] = field(default_factory=list)


@dataclass
class AddOutcome:
    """Result of adding a dependency to the manifest and fetching it."""

    name: str
    spec: DependencySpec
    replaced: bool
    report: SyncReport


class Workspace:
    """Runs one c1 operation to completion; never changes the process cwd."""

    def __init__(
        self,
        git: GitClient | None = None,
        cmake_runner: Runner | None = None,
    ) -> None:
        self._git = git
        self._cmake_runner = cmake_runner
        self.logger = get_logger("workspace")

    # ------------------------------------------------------------------
    # Project creation

    def new_project(self, parent: Path, name: str) -> ProjectOutcome:
        """Create ``parent / name`` and scaffold a project inside it."""
        validate_package_name(name)
        root = parent / name
        if root.exists():
            raise AlreadyExists(f"Directory '{name}' already exists")
        root.mkdir(parents=True)
        self.logger.info("Creating project '%s' in '%s'...", name, root)
        return self._scaffold(root, name, C1Config(root=root.resolve()))

    def init_project(self, root: Path, name: Optional[str] = None) -> ProjectOutcome:
        """Scaffold a project in an existing directory that holds only hidden entries."""
        root = root.resolve()
        project_name = name or root.name
        validate_package_name(project_name)
        if not is_dir_empty(root):
            raise AlreadyExists(
                f"Directory '{root}' is not empty. c1 init must be run in an empty directory."
            )
        root.mkdir(parents=True, exist_ok=True)
        self.logger.info("Initializing project '%s'...", project_name)
        return self._scaffold(root, project_name, load_config(root))

    def _scaffold(self, root: Path, name: str, config: C1Config) -> ProjectOutcome:
        files = ProjectScaffolder(paths=config.paths).write(root, name)
        git_initialized = self._git_client(config).init(root)
        if git_initialized:
            self.logger.info("Initialized git repository")
        else:
            self.logger.warning("git init failed, skipping repository setup")
        return ProjectOutcome(root=root, name=name, files=files, git_initialized=git_initialized)

    # ------------------------------------------------------------------
    # Modules

    def create_module(self, root: Path, name: str) -> ModuleOutcome:
        config = load_config(root)
        files = write_module(
            root,
            name,
            sources_dir=config.paths.sources,
            include_dir=config.paths.include,
        )
        self.logger.info(
            "Created %s and %s",
            files.source.relative_to(root).as_posix(),
            files.header.relative_to(root).as_posix(),
        )

        build_file = root / BUILD_FILENAME
        if not build_file.is_file():
            self.logger.warning("%s not found, skipping automatic registration", BUILD_FILENAME)
            return ModuleOutcome(files=files, registered=False)

        injector = BuildFileInjector(config.paths.sources, config.paths.include)
        original = build_file.read_text(encoding="utf-8")
        result = injector.register_module(original, name)
        for marker in result.missing:
            self.logger.warning(
                "Marker '%s' not found in %s; add the file by hand", marker, BUILD_FILENAME
            )
        if result.text == original:
            return ModuleOutcome(files=files, registered=False, missing_markers=result.missing)
        build_file.write_text(result.text, encoding="utf-8")
        self.logger.info("Updated %s", BUILD_FILENAME)
        return ModuleOutcome(
            files=files, registered=result.complete, missing_markers=result.missing
        )

    # ------------------------------------------------------------------
    # Dependencies

    def add_dependency(
        self,
        root: Path,
        url: str,
        *,
        name: Optional[str] = None,
        branch: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> AddOutcome:
        """Record a git dependency in project.toml and clone it."""
        dep_name = validate_package_name(name or derive_package_name(url))
        spec = DependencySpec(git=url, branch=branch or None, tag=tag or None)

        manifest_path = root / MANIFEST_FILENAME
        current = load_file(root)
        original_text = manifest_path.read_text(encoding="utf-8")
        updated_text = upsert_dependency(original_text, dep_name, spec)
        load(updated_text)
        manifest_path.write_text(updated_text, encoding="utf-8")

        replaced = dep_name in current.dependencies
        self.logger.info(
            "%s dependency '%s' in %s",
            "Updated" if replaced else "Added",
            dep_name,
            MANIFEST_FILENAME,
        )
        config = load_config(root)
        report = self._synchronizer(config).sync({dep_name: spec}, config.path("external"))
        return AddOutcome(name=dep_name, spec=spec, replaced=replaced, report=report)

    def sync(self, root: Path) -> SyncReport:
        manifest = load_file(root)
        config = load_config(root)
        return self._synchronizer(config).sync(manifest.dependencies, config.path("external"))

    # ------------------------------------------------------------------
    # Build

    def build(self, root: Path, *, release: Optional[bool] = None) -> Path:
        """Configure and compile; return the path of the produced executable."""
        manifest = load_file(root)
        config = load_config(root)
        mode = config.build.mode if release is None else ("release" if release else "debug")
        build_dir = config.path("build")
        build_dir.mkdir(parents=True, exist_ok=True)

        builder = self._builder(config)
        builder.configure(root, build_dir, mode, manifest.build)
        builder.compile(build_dir)
        return build_dir / manifest.project.name

    def run(
        self,
        root: Path,
        args: Sequence[str] = (),
        *,
        release: Optional[bool] = None,
    ) -> int:
        executable = self.build(root, release=release)
        return self._builder(load_config(root)).run_executable(executable, args)

    def clean(self, root: Path) -> bool:
        """Empty the build directory; return False when there was nothing to remove."""
        load_file(root)
        build_dir = load_config(root).path("build")
        if not build_dir.exists():
            self.logger.info("Nothing to clean")
            return False
        shutil.rmtree(build_dir)
        build_dir.mkdir(parents=True)
        self.logger.info("Removed %s", build_dir)
        return True

    # ------------------------------------------------------------------
    # Collaborators

    def _git_client(self, config: C1Config) -> GitClient:
        return self._git or GitClient(executable=config.tools.git)

    def _synchronizer(self, config: C1Config) -> DependencySynchronizer:
        return DependencySynchronizer(self._git_client(config))

    def _builder(self, config: C1Config) -> CMakeBuilder:
        return CMakeBuilder(
            self._cmake_runner,
            executable=config.tools.cmake,
            generator=config.build.generator,
        )


__all__ = ["AddOutcome", "ModuleOutcome", "ProjectOutcome", "Workspace"]
