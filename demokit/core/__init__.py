"""Demo build orchestration."""

from demokit.core.executor import DryRunExecutor, SequenceExecutor
from demokit.core.intent import ExecutionIntentController
from demokit.core.project import DemoProject, resolve_project_context

__all__ = [
    "DemoProject",
    "DryRunExecutor",
    "ExecutionIntentController",
    "SequenceExecutor",
    "resolve_project_context",
]
