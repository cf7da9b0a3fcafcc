"""Operation result models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..constants import CrudAction, ResourceKind
from .plan import CrudPlan


class DeployState(Enum):
    """Deploy lifecycle states"""
    IDLE = "idle"
    CONNECTED = "connected"
    RESOURCES_DISCOVERED = "resources_discovered"
    PLAN_COMPUTED = "plan_computed"
    SYNCING = "syncing"
    SYNCED = "synced"
    FAILED = "failed"


class SyncPhase(Enum):
    """Sync executor phases, in execution order"""
    DELETE = "delete"
    UPDATE = "update"
    CREATE = "create"


@dataclass(frozen=True)
class SyncStep:
    """A single remote mutation scheduled by the sync executor"""
    phase: SyncPhase
    kind: ResourceKind
    action: CrudAction
    path: str

    def describe(self) -> str:
        return f"{self.action.value} {self.kind.value} {self.path}"


@dataclass
class StepResult:
    """Outcome of one executed step"""
    step: SyncStep
    success: bool
    skipped: bool = False
    error: Optional[str] = None


@dataclass
class SyncReport:
    """Progress of a sync run

    On failure ``failed`` holds the step that raised; the steps after it
    were never attempted and are counted in ``pending``.
    """

    total: int = 0
    completed: List[StepResult] = field(default_factory=list)
    failed: Optional[StepResult] = None

    @property
    def success(self) -> bool:
        return self.failed is None

    @property
    def pending(self) -> int:
        attempted = len(self.completed) + (1 if self.failed else 0)
        return self.total - attempted

    @property
    def skipped(self) -> List[StepResult]:
        return [r for r in self.completed if r.skipped]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "total": self.total,
            "completed": len(self.completed),
            "skipped": len(self.skipped),
            "pending": self.pending,
        }
        if self.failed:
            data["failed"] = {
                "step": self.failed.step.describe(),
                "error": self.failed.error,
            }
        return data


@dataclass
class DeployResult:
    """Result of a deploy operation

    ``state`` is the final lifecycle state, set only by targets that walk the
    lifecycle. Failed deploys raise instead of returning a result.
    """
    success: bool
    target_type: str
    project_name: str = ""
    state: Optional[DeployState] = None
    plan: Optional[CrudPlan] = None
    report: Optional[SyncReport] = None
    artifact: Optional[str] = None
    dry_run: bool = False
    duration: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "success": self.success,
            "target_type": self.target_type,
            "project_name": self.project_name,
            "dry_run": self.dry_run,
            "duration": self.duration,
        }
        if self.state:
            data["state"] = self.state.value
        if self.plan:
            data["plan"] = self.plan.to_dict()
        if self.report:
            data["report"] = self.report.to_dict()
        if self.artifact:
            data["artifact"] = self.artifact
        if self.metadata:
            data["metadata"] = self.metadata
        return data
