"""Pytest configuration for demokit tests."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from demokit.runtime.shell import CommandResult, ShellCommandRunner

PROJECT_SETTINGS: dict[str, str] = {
    "demoAlias": "MyDemo",
    "demoConfig": "demo-config.json",
    "demoTitle": "My Demo",
    "demoType": "ADK-SINGLE",
    "demoVersion": "0.0.1",
    "gitHubUrl": "https://github.com/my-org/my-repo",
    "gitRemoteUri": "https://github.com/my-org/my-repo.git",
    "partnerAlias": "AppyInc",
    "partnerName": "Appy Apps Incorporated",
    "schemaVersion": "0.0.1",
}

LOCAL_SETTINGS: dict[str, str] = {
    "devHubAlias": "MyDevHub",
    "demoValidationOrgAlias": "demo-validate",
    "demoDeploymentOrgAlias": "demo-deploy",
}

SEQUENCE: dict[str, Any] = {
    "options": {"scratchDefJson": "demo-scratch-def.json"},
    "sequenceGroups": [
        {
            "groupId": "deploy-pkg",
            "groupName": "Deploy Package",
            "description": "Deploys the managed package",
            "sequenceSteps": [
                {
                    "stepName": "Install Package",
                    "description": "Installs the package version",
                    "action": "install-package",
                    "options": {"packageVersionId": "04t000000000000"},
                }
            ],
        }
    ],
}


class FakeRunner(ShellCommandRunner):
    """Shell runner that records commands instead of running them.

    ``exit_codes`` maps a git subcommand (``clone``, ``ls-remote``, ...) to the
    exit code it should report; unlisted commands exit 0.
    """

    def __init__(self, cwd: Path, exit_codes: dict[str, int] | None = None) -> None:
        super().__init__(cwd)
        self.exit_codes = dict(exit_codes or {})
        self.calls: list[tuple[Path, tuple[str, ...]]] = []
        self.installed: set[str] = {"git"}
        self.on_run: Callable[[tuple[str, ...]], None] | None = None

    def run(self, args: Sequence[str]) -> CommandResult:
        command = tuple(args)
        self.calls.append((self.cwd, command))
        if self.on_run is not None:
            self.on_run(command)
        code = self.exit_codes.get(command[1] if len(command) > 1 else command[0], 0)
        return CommandResult(code, "ok\n" if code == 0 else "", "" if code == 0 else f"fatal: exit {code}\n")

    async def run_async(self, args: Sequence[str]) -> CommandResult:
        return self.run(args)

    def which(self, binary: str) -> str | None:
        return f"/usr/bin/{binary}" if binary in self.installed else None

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [command for _, command in self.calls]


@pytest.fixture
def fake_runner(tmp_path: Path) -> FakeRunner:
    return FakeRunner(tmp_path)


@pytest.fixture
def project_settings() -> dict[str, Any]:
    return copy.deepcopy(PROJECT_SETTINGS)


@pytest.fixture
def sequence_doc() -> dict[str, Any]:
    return copy.deepcopy(SEQUENCE)


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Write a demo project to disk and return its root.

    Keyword arguments replace the default manifest section, local section and
    sequence; pass ``None`` to skip writing that file.
    """

    def _make(
        project: dict[str, Any] | None = PROJECT_SETTINGS,
        local: dict[str, Any] | None = LOCAL_SETTINGS,
        sequence: Any = SEQUENCE,
        sequence_file: str = "demo-config.json",
    ) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        if project is not None:
            manifest = {"packageDirectories": [{"path": "force-app"}], "plugins": {"demokit": {"demo": project}}}
            (root / "sfdx-project.json").write_text(json.dumps(manifest), encoding="utf-8")
        if local is not None:
            local_dir = root / ".demokit-config"
            local_dir.mkdir(exist_ok=True)
            (local_dir / "demokit-config.json").write_text(json.dumps({"demo": local}), encoding="utf-8")
        if sequence is not None:
            config_dir = root / "demo-config"
            config_dir.mkdir(exist_ok=True)
            (config_dir / sequence_file).write_text(json.dumps(sequence), encoding="utf-8")
        return root

    return _make


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEMOKIT_SETTINGS_PATH", str(tmp_path / "no-settings.yml"))
    monkeypatch.setenv("DEMOKIT_ENV_PATH", str(tmp_path / "no.env"))
    monkeypatch.delenv("DEMOKIT_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def _reset_demokit_logger():
    yield
    logger = logging.getLogger("demokit")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def pytest_collection_modifyitems(config, items):
    """Set per-marker timeouts: unit=1s, integration=5s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))
