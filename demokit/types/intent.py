"""Execution intent and run state."""

from enum import Enum


class ExecutionIntent(str, Enum):
    """The caller's declared purpose for a run."""

    NOT_SPECIFIED = "not_specified"
    VALIDATE_DEMO = "validate_demo"
    DEPLOY_DEMO = "deploy_demo"
    HEALTH_CHECK = "health_check"
    REPAIR_PROJECT = "repair_project"


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
