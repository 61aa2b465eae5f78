"""CLI entrypoints for c1 commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import C1Error
from .logging import configure_logging
from .models import SyncReport, SyncStatus
from .workspace import Workspace


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only report warnings and errors.",
    )


def _add_project_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-C",
        "--project",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _add_release_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--release",
        action="store_true",
        default=None,
        help="Build with CMAKE_BUILD_TYPE=Release instead of the configured mode.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="c1",
        description="A modern C project scaffolding and package management tool.",
    )
    _add_common_options(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser("new", help="Create a new C project in a new directory.")
    _add_common_options(new_parser, suppress_default=True)
    new_parser.add_argument("name", help="Project name; also the directory to create.")

    init_parser = subparsers.add_parser(
        "init", help="Initialize a C project in an empty directory."
    )
    _add_common_options(init_parser, suppress_default=True)
    init_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to initialize (defaults to current directory).",
    )
    init_parser.add_argument(
        "--name",
        default=None,
        help="Project name (defaults to the directory name).",
    )

    create_parser = subparsers.add_parser(
        "create", help="Create a new module (generates .c and .h files)."
    )
    _add_common_options(create_parser, suppress_default=True)
    _add_project_option(create_parser)
    create_parser.add_argument("name", help="Module name (letters, numbers, underscores).")

    add_parser = subparsers.add_parser(
        "add", help="Add a git dependency to project.toml and fetch it."
    )
    _add_common_options(add_parser, suppress_default=True)
    _add_project_option(add_parser)
    add_parser.add_argument("url", help="Git URL of the dependency.")
    add_parser.add_argument(
        "--name",
        default=None,
        help="Dependency name (defaults to the repository name from the URL).",
    )
    ref_group = add_parser.add_mutually_exclusive_group()
    ref_group.add_argument("--branch", default=None, help="Branch to check out.")
    ref_group.add_argument("--tag", default=None, help="Tag to check out.")

    sync_parser = subparsers.add_parser("sync", help="Sync dependencies from project.toml.")
    _add_common_options(sync_parser, suppress_default=True)
    _add_project_option(sync_parser)

    build_parser = subparsers.add_parser("build", help="Configure and compile the project.")
    _add_common_options(build_parser, suppress_default=True)
    _add_project_option(build_parser)
    _add_release_option(build_parser)

    run_parser = subparsers.add_parser("run", help="Build and run the project executable.")
    _add_common_options(run_parser, suppress_default=True)
    _add_project_option(run_parser)
    _add_release_option(run_parser)
    run_parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to the executable (after --).",
    )

    clean_parser = subparsers.add_parser("clean", help="Remove build outputs.")
    _add_common_options(clean_parser, suppress_default=True)
    _add_project_option(clean_parser)

    return parser


def main(argv: list[str] | None = None, *, workspace: Workspace | None = None) -> None:
    """CLI entrypoint for c1 commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(getattr(args, "quiet", False)),
        log_file=args.log_file,
    )
    workspace = workspace or Workspace()

    try:
        exit_code = _dispatch(args, workspace)
    except C1Error as exc:
        parser.exit(1, f"Error: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"Error: {exc}\nRun with --verbose for more details.\n")
    if exit_code:
        sys.exit(exit_code)


def _dispatch(args: argparse.Namespace, workspace: Workspace) -> int:
    if args.command == "new":
        outcome = workspace.new_project(Path.cwd(), args.name)
        print(f"✓ Project '{outcome.name}' created in {_relativize(outcome.root)}")
    elif args.command == "init":
        outcome = workspace.init_project(Path(args.path), args.name)
        print(f"✓ Project '{outcome.name}' initialized successfully!")
    elif args.command == "create":
        root = _project_root(args)
        module = workspace.create_module(root, args.name)
        print(
            f"✓ Created {_relativize(module.files.source)} and {_relativize(module.files.header)}"
        )
        if not module.registered:
            print("! Build file not fully updated; see warnings above")
    elif args.command == "add":
        root = _project_root(args)
        added = workspace.add_dependency(
            root, args.url, name=args.name, branch=args.branch, tag=args.tag
        )
        verb = "Updated" if added.replaced else "Added"
        print(f"✓ {verb} dependency '{added.name}'")
        return _print_report(added.report)
    elif args.command == "sync":
        return _print_report(workspace.sync(_project_root(args)))
    elif args.command == "build":
        executable = workspace.build(_project_root(args), release=args.release)
        print(f"✓ Built {_relativize(executable)}")
    elif args.command == "run":
        program_args = list(args.args)
        if program_args[:1] == ["--"]:
            program_args = program_args[1:]
        return workspace.run(_project_root(args), program_args, release=args.release)
    elif args.command == "clean":
        removed = workspace.clean(_project_root(args))
        print("✓ Build directory cleaned" if removed else "Nothing to clean")
    else:  # pragma: no cover - argparse enforces choices
        raise C1Error("Unknown command")
    return 0


def _print_report(report: SyncReport) -> int:
    if report.nothing_to_sync:
        print("No dependencies to sync")
        return 0
    for outcome in report.outcomes:
        if outcome.status is SyncStatus.CLONED:
            print(f"  ✓ {outcome.name}")
        elif outcome.status is SyncStatus.SKIPPED:
            print(f"  - {outcome.name} (skipped: {outcome.reason})")
        else:
            print(f"  ✗ {outcome.name}: {outcome.reason}")
    if report.ok:
        print(f"\n✓ Dependency sync complete ({report.summary()})")
        return 0
    print(f"\n✗ Dependency sync finished with failures ({report.summary()})")
    return 1


def _project_root(args: argparse.Namespace) -> Path:
    return Path(args.project).expanduser().resolve()


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
