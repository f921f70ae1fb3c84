"""Sequence executor boundary.

The engine that runs steps against a remote org lives outside demokit; it
only has to satisfy :class:`SequenceExecutor`. :class:`DryRunExecutor` walks
a sequence without contacting any org.
"""

from __future__ import annotations

import logging
from typing import Protocol

from demokit.types.sequence import CommandSequence, SequenceContext, StatusReport

logger = logging.getLogger(__name__)


class SequenceExecutor(Protocol):
    async def execute(self, sequence: CommandSequence, context: SequenceContext) -> StatusReport: ...


class DryRunExecutor:
    """Records every step as planned, notifying the context's observer first."""

    async def execute(self, sequence: CommandSequence, context: SequenceContext) -> StatusReport:
        report = StatusReport(target_org_alias=context.target_org_alias)
        for group in sequence.sequence_groups:
            for step in group.sequence_steps:
                if context.observer is not None:
                    context.observer(group, step)
                logger.debug("[dry-run] %s / %s (%s)", group.group_id, step.step_name, step.action)
                report.record(group, step, "planned", f"would run '{step.action}' on {context.target_org_alias}")
        return report.finish()


__all__ = ["DryRunExecutor", "SequenceExecutor"]
