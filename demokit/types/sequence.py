"""Command sequence models and per-run context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SequenceStep(BaseModel):
    """One named, parameterized action."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    step_name: str = Field(alias="stepName")
    description: str = ""
    action: str
    options: Dict[str, Any] = {}


class SequenceGroup(BaseModel):
    """Ordered list of steps run as a unit."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    group_id: str = Field(alias="groupId")
    group_name: str = Field(alias="groupName")
    description: str = ""
    sequence_steps: List[SequenceStep] = Field(default_factory=list, alias="sequenceSteps")


class CommandSequence(BaseModel):
    """Declarative build sequence loaded from the demo config file.

    Instances are treated as immutable: transformations return a new copy.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    options: Dict[str, Any] = {}
    sequence_groups: List[SequenceGroup] = Field(alias="sequenceGroups")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


SequenceObserver = Callable[[SequenceGroup, SequenceStep], None]


@dataclass(frozen=True)
class SequenceContext:
    """Parameters for a single sequence run."""

    dev_hub_alias: str
    project_path: str
    config_path: str
    mdapi_source_path: str
    data_path: str
    target_org_alias: Optional[str] = None
    target_is_scratch_org: Optional[bool] = None
    log_level: str = "error"
    observer: Optional[SequenceObserver] = None


StepStatus = Literal["planned", "success", "failure", "skipped"]


@dataclass
class StepRecord:
    group_id: str
    step_name: str
    action: str
    status: StepStatus
    message: str = ""


@dataclass
class StatusReport:
    """Outcome of a sequence run as reported by the executor."""

    status: Literal["success", "failure"] = "success"
    target_org_alias: Optional[str] = None
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None
    steps: List[StepRecord] = field(default_factory=list)

    def record(self, group: SequenceGroup, step: SequenceStep, status: StepStatus, message: str = "") -> None:
        self.steps.append(StepRecord(group.group_id, step.step_name, step.action, status, message))
        if status == "failure":
            self.status = "failure"

    def finish(self) -> "StatusReport":
        self.finished_at = datetime.now(timezone.utc)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "targetOrgAlias": self.target_org_alias,
            "startedAt": self.started_at.isoformat(),
            "finishedAt": self.finished_at.isoformat() if self.finished_at else None,
            "steps": [
                {
                    "groupId": s.group_id,
                    "stepName": s.step_name,
                    "action": s.action,
                    "status": s.status,
                    "message": s.message,
                }
                for s in self.steps
            ],
        }
