"""Demo project resolution and the validate/deploy orchestrator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from demokit.config.loader import load_json_section
from demokit.config.schema import DemoKitSettings, LocalDeveloperConfig, ProjectLevelConfig
from demokit.constants import (
    LOCAL_CONFIG_DIR,
    LOCAL_CONFIG_FILE,
    LOCAL_CONFIG_SECTION,
    PROJECT_CONFIG_PATH,
    PROJECT_MANIFEST,
)
from demokit.core.executor import DryRunExecutor, SequenceExecutor
from demokit.core.intent import ExecutionIntentController
from demokit.core.sequence_assembler import assemble_sequence, build_sequence_context
from demokit.core.sequence_validation import load_sequence
from demokit.errors import ConfigNotFoundError, MissingArgumentsError
from demokit.types.intent import ExecutionIntent
from demokit.types.project import ProjectConfig, ProjectContext, ensure_complete
from demokit.types.sequence import SequenceObserver, StatusReport

logger = logging.getLogger(__name__)


def find_project_root(directory: Path | str) -> Path:
    """Return the closest directory at or above ``directory`` holding the project manifest."""
    start = Path(directory).expanduser().resolve()
    for candidate in (start, *start.parents):
        if (candidate / PROJECT_MANIFEST).is_file():
            return candidate
    raise ConfigNotFoundError(
        start / PROJECT_MANIFEST,
        f"No {PROJECT_MANIFEST} found in {start} or any parent directory",
    )


def local_config_path(project_root: Path) -> Path:
    return project_root / LOCAL_CONFIG_DIR / LOCAL_CONFIG_FILE


def resolve_project_context(directory: Path | str = ".", demo_config_override: str = "") -> ProjectContext:
    """Resolve path and configuration of the demo project containing ``directory``.

    Args:
        directory: Any directory inside the project.
        demo_config_override: Replaces the configured sequence filename when given.

    Raises:
        ConfigNotFoundError: No project manifest, or no local config file.
        UnparsedConfigError: A config file or section cannot be parsed.
        InvalidConfigError: Project settings are missing or empty (all are listed).
    """
    root = find_project_root(directory)
    logger.debug("Project root: %s", root)

    local_path = local_config_path(root)
    if not local_path.is_file():
        raise ConfigNotFoundError(local_path)

    project_config = load_json_section(root / PROJECT_MANIFEST, PROJECT_CONFIG_PATH, ProjectLevelConfig)
    ensure_complete(project_config)
    if demo_config_override:
        logger.debug("Overriding demoConfig with %s", demo_config_override)
        project_config = project_config.model_copy(update={"demo_config": demo_config_override})

    local_config = load_json_section(local_path, (LOCAL_CONFIG_SECTION,), LocalDeveloperConfig)
    return ProjectContext(path=root, config=ProjectConfig(project=project_config, local=local_config))


class DemoProject:
    """A resolved demo project and the actions that can be run against it.

    Each instance runs at most one sequence: the first validate/deploy call
    fixes the intent for the lifetime of the object.
    """

    def __init__(
        self,
        context: ProjectContext,
        *,
        executor: Optional[SequenceExecutor] = None,
        settings: Optional[DemoKitSettings] = None,
    ) -> None:
        if context is None:
            raise MissingArgumentsError("Expected a resolved ProjectContext but got None")
        self._context = context
        self._executor: SequenceExecutor = executor or DryRunExecutor()
        self._settings = settings or DemoKitSettings()
        self._intent = ExecutionIntentController()

    @classmethod
    def resolve(
        cls,
        project_directory: Path | str = ".",
        demo_config_override: str = "",
        *,
        executor: Optional[SequenceExecutor] = None,
        settings: Optional[DemoKitSettings] = None,
    ) -> "DemoProject":
        context = resolve_project_context(project_directory, demo_config_override)
        return cls(context, executor=executor, settings=settings)

    @property
    def context(self) -> ProjectContext:
        return self._context

    @property
    def intent(self) -> ExecutionIntent:
        return self._intent.intent

    def set_intent(self, intent: ExecutionIntent | str) -> ExecutionIntent:
        return self._intent.set_intent(intent)

    async def validate_demo(self, observer: Optional[SequenceObserver] = None) -> StatusReport:
        """Run the demo build against the validation scratch org."""
        self._intent.set_intent(ExecutionIntent.VALIDATE_DEMO)
        return await self.deploy_demo(observer)

    async def deploy_demo(self, observer: Optional[SequenceObserver] = None) -> StatusReport:
        """Run the demo build for the active intent (DEPLOY_DEMO when none was set)."""
        self._intent.default_intent(ExecutionIntent.DEPLOY_DEMO)
        intent = self._intent.begin_execution()

        context = build_sequence_context(
            self._context,
            intent,
            log_level=self._settings.sequence_log_level,
            observer=observer,
        )
        sequence = load_sequence(context.config_path, self._context.config.project.demo_config)
        sequence = assemble_sequence(sequence, context, intent)

        logger.info(
            "Executing %d sequence group(s) for %s against %s",
            len(sequence.sequence_groups),
            intent.value,
            context.target_org_alias,
        )
        return await self._executor.execute(sequence, context)
