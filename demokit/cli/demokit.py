"""demokit: command-line entry point for demo builds and repository setup."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from demokit.config.loader import load_settings
from demokit.config.schema import DemoKitSettings
from demokit.constants import PROBE_EXIT_EMPTY, PROBE_EXIT_HAS_HISTORY, PROBE_EXIT_NOT_FOUND
from demokit.core.project import DemoProject
from demokit.errors import DemoKitError
from demokit.helpers.git_remote import RemoteRepositoryStateClassifier, RemoteState
from demokit.logging_config import setup_logging
from demokit.project_setup.git_repo import LocalRepositoryProvisioner
from demokit.types.sequence import SequenceGroup, SequenceStep

_PROBE_EXIT_CODES = {
    RemoteState.REACHABLE_WITH_HISTORY: PROBE_EXIT_HAS_HISTORY,
    RemoteState.REACHABLE_EMPTY: PROBE_EXIT_EMPTY,
    RemoteState.UNREACHABLE: PROBE_EXIT_NOT_FOUND,
    RemoteState.INDETERMINATE: 1,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="demokit", description="Build and provision demo projects.")
    parser.add_argument("--log-level", help="Override DEMOKIT_LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("validate", "Build the demo in a fresh validation scratch org"),
        ("deploy", "Build the demo in the deployment org"),
    ):
        build = sub.add_parser(name, help=help_text)
        build.add_argument("--project", default=".", help="Directory inside the demo project")
        build.add_argument("--config", default="", help="Sequence file to use instead of demoConfig")

    clone = sub.add_parser("clone", help="Clone a remote repository into a local directory")
    clone.add_argument("uri", help="Git remote URI")
    clone.add_argument("--dir", default=".", help="Directory to clone into (created if missing)")

    probe = sub.add_parser("probe", help="Report whether a remote repository exists and has commits")
    probe.add_argument("uri", help="Git remote URI")
    probe.add_argument("--wait", type=float, default=None, help="Seconds to wait before probing")
    return parser


def _print_step(group: SequenceGroup, step: SequenceStep) -> None:
    print(f"  [{group.group_id}] {step.step_name} ({step.action})")


async def _run_build(args: argparse.Namespace, settings: DemoKitSettings) -> int:
    project = DemoProject.resolve(args.project, args.config, settings=settings)
    if args.command == "validate":
        report = await project.validate_demo(_print_step)
    else:
        report = await project.deploy_demo(_print_step)
    print(json.dumps(report.to_dict(), indent=2))
    return 0 if report.status == "success" else 1


def _run_clone(args: argparse.Namespace, settings: DemoKitSettings) -> int:
    target = LocalRepositoryProvisioner(git_binary=settings.git_binary).clone(args.uri, args.dir)
    print(f"demokit clone: cloned {args.uri} into {target}")
    return 0


async def _run_probe(args: argparse.Namespace, settings: DemoKitSettings) -> int:
    classifier = RemoteRepositoryStateClassifier(git_binary=settings.git_binary)
    delay = args.wait if args.wait is not None else settings.probe_delay_seconds
    verdict = await classifier.classify(args.uri, delay)
    print(json.dumps(verdict.to_dict(), indent=2))
    return _PROBE_EXIT_CODES[verdict.state]


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse ``argv``, run the command, and return the process exit code."""
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(args.log_level, default=settings.log_level)

    try:
        if args.command in ("validate", "deploy"):
            return asyncio.run(_run_build(args, settings))
        if args.command == "clone":
            return _run_clone(args, settings)
        return asyncio.run(_run_probe(args, settings))
    except DemoKitError as exc:
        print(f"demokit {args.command}: {exc}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
