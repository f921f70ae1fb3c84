"""Shared value types."""

from demokit.types.intent import ExecutionIntent, RunState
from demokit.types.project import ProjectConfig, ProjectContext
from demokit.types.sequence import (
    CommandSequence,
    SequenceContext,
    SequenceGroup,
    SequenceObserver,
    SequenceStep,
    StatusReport,
    StepRecord,
)

__all__ = [
    "CommandSequence",
    "ExecutionIntent",
    "ProjectConfig",
    "ProjectContext",
    "RunState",
    "SequenceContext",
    "SequenceGroup",
    "SequenceObserver",
    "SequenceStep",
    "StatusReport",
    "StepRecord",
]
