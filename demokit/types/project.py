"""Resolved view of a local demo project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from demokit.config.schema import LocalDeveloperConfig, ProjectLevelConfig
from demokit.constants import PROJECT_MANIFEST
from demokit.errors import InvalidConfigError


def ensure_complete(project: ProjectLevelConfig) -> None:
    """Raise InvalidConfigError naming every missing or empty project setting."""
    missing = project.missing_keys()
    if missing:
        raise InvalidConfigError(
            f"Configuration for 'demo' in {PROJECT_MANIFEST} has missing/invalid settings ({', '.join(missing)}).",
            keys=missing,
        )


@dataclass(frozen=True)
class ProjectConfig:
    project: ProjectLevelConfig
    local: LocalDeveloperConfig


@dataclass(frozen=True)
class ProjectContext:
    """Absolute project path plus its merged configuration."""

    path: Path
    config: ProjectConfig

    def __post_init__(self) -> None:
        if not self.path.is_absolute():
            raise ValueError(f"Project path must be absolute, got {self.path}")
        ensure_complete(self.config.project)
