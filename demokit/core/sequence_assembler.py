"""Builds the per-run sequence context and the final command sequence."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from demokit.constants import (
    CREATE_SCRATCH_ORG,
    DELETE_SCRATCH_ORG,
    DEMO_CONFIG_DIR,
    DEMO_DATA_DIR,
    MDAPI_SOURCE_DIR,
    REBUILD_GROUP_ID,
    REBUILD_VALIDATION_ORG,
    SCRATCH_DEF_JSON,
)
from demokit.errors import InvalidIntentError
from demokit.types.intent import ExecutionIntent
from demokit.types.project import ProjectContext
from demokit.types.sequence import CommandSequence, SequenceContext, SequenceGroup, SequenceObserver, SequenceStep

logger = logging.getLogger(__name__)


def default_sequence_context(
    project: ProjectContext,
    *,
    log_level: str = "error",
    observer: Optional[SequenceObserver] = None,
) -> SequenceContext:
    """Context with fixed project subpaths and no target selected yet."""
    return SequenceContext(
        dev_hub_alias=project.config.local.dev_hub_alias,
        project_path=str(project.path),
        config_path=str(project.path / DEMO_CONFIG_DIR),
        mdapi_source_path=str(project.path / MDAPI_SOURCE_DIR),
        data_path=str(project.path / DEMO_DATA_DIR),
        log_level=log_level,
        observer=observer,
    )


def select_target(context: SequenceContext, project: ProjectContext, intent: ExecutionIntent) -> SequenceContext:
    """Pick the target org for ``intent``.

    VALIDATE_DEMO runs against the validation scratch org, DEPLOY_DEMO against
    the deployment org. Anything else here is a caller bug.
    """
    local = project.config.local
    if intent is ExecutionIntent.VALIDATE_DEMO:
        return replace(context, target_org_alias=local.demo_validation_org_alias, target_is_scratch_org=True)
    if intent is ExecutionIntent.DEPLOY_DEMO:
        return replace(context, target_org_alias=local.demo_deployment_org_alias, target_is_scratch_org=False)
    raise InvalidIntentError(f"The specified Execution Intent is not valid ({intent.value}).")


def build_sequence_context(
    project: ProjectContext,
    intent: ExecutionIntent,
    *,
    log_level: str = "error",
    observer: Optional[SequenceObserver] = None,
) -> SequenceContext:
    context = select_target(default_sequence_context(project, log_level=log_level, observer=observer), project, intent)
    logger.debug("Sequence context: %s", context)
    return context


def coerce_options(options: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``options`` with a definite boolean ``rebuildValidationOrg`` (default True)."""
    coerced = dict(options)
    if not isinstance(coerced.get(REBUILD_VALIDATION_ORG), bool):
        coerced[REBUILD_VALIDATION_ORG] = True
    return coerced


def build_rebuild_group(target_org_alias: Optional[str], scratch_def_json: Any) -> SequenceGroup:
    """Group that deletes the validation scratch org and creates a fresh one."""
    step_options = {"scratchOrgAlias": target_org_alias, "scratchDefJson": scratch_def_json}
    return SequenceGroup(
        group_id=REBUILD_GROUP_ID,
        group_name="Refresh Scratch Org",
        description="Deletes the current validation scratch org and creates a new one",
        sequence_steps=[
            SequenceStep(
                step_name="Delete Old Demo Validation Org",
                description="Deletes the current Demo Validation scratch org",
                action=DELETE_SCRATCH_ORG,
                options=dict(step_options),
            ),
            SequenceStep(
                step_name="Create New Demo Validation Org",
                description="Creates a new Demo Validation scratch org",
                action=CREATE_SCRATCH_ORG,
                options=dict(step_options),
            ),
        ],
    )


def assemble_sequence(
    sequence: CommandSequence,
    context: SequenceContext,
    intent: ExecutionIntent,
) -> CommandSequence:
    """Return the sequence to hand to the executor.

    The loaded ``sequence`` is left untouched. When validating with
    ``rebuildValidationOrg`` on, a refresh group is prepended so it runs
    before every configured group. Deploy runs never get the refresh group.
    """
    options = coerce_options(sequence.options)
    groups = list(sequence.sequence_groups)

    if intent is ExecutionIntent.VALIDATE_DEMO and options[REBUILD_VALIDATION_ORG] is True:
        groups.insert(0, build_rebuild_group(context.target_org_alias, options.get(SCRATCH_DEF_JSON)))
        logger.info("Prepended '%s' group targeting %s", REBUILD_GROUP_ID, context.target_org_alias)

    return sequence.model_copy(update={"options": options, "sequence_groups": groups})
