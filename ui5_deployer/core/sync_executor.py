"""Sync executor

Applies a CRUD plan to the remote store in a fixed order:

1. delete files, then folders (deepest-first)
2. update files
3. create folders (shallowest-first), then files

Steps run strictly one after another. The first failure stops the run and
the original exception propagates; already applied steps are not undone.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..constants import CrudAction, ResourceKind
from ..models.plan import CrudPlan
from ..models.resource import ResourceHandle
from ..models.result import StepResult, SyncPhase, SyncReport, SyncStep
from .transport import ResourceTransport

logger = logging.getLogger(__name__)


def build_steps(plan: CrudPlan) -> List[SyncStep]:
    """
    Flatten a plan into the ordered list of remote mutations

    Folder updates are not remote operations and produce no step.

    Args:
        plan: CRUD plan

    Returns:
        Steps in execution order
    """
    steps = []

    def add(phase: SyncPhase, kind: ResourceKind, action: CrudAction, paths: Iterable[str]):
        steps.extend(SyncStep(phase, kind, action, path) for path in paths)

    add(SyncPhase.DELETE, ResourceKind.FILE, CrudAction.DELETE, plan.files.delete)
    add(SyncPhase.DELETE, ResourceKind.FOLDER, CrudAction.DELETE, plan.folders.delete)
    add(SyncPhase.UPDATE, ResourceKind.FILE, CrudAction.UPDATE, plan.files.update)
    add(SyncPhase.CREATE, ResourceKind.FOLDER, CrudAction.CREATE, plan.folders.create)
    add(SyncPhase.CREATE, ResourceKind.FILE, CrudAction.CREATE, plan.files.create)

    return steps


class SyncExecutor:
    """Runs the steps of a CRUD plan against a transport"""

    def __init__(self, transport: ResourceTransport, resources: Iterable[ResourceHandle]):
        """
        Initialize sync executor

        Args:
            transport: Remote store primitives
            resources: Local resources, used to read file content on demand
        """
        self.transport = transport
        self._resources: Dict[str, ResourceHandle] = {r.path: r for r in resources}
        self.report: Optional[SyncReport] = None

    async def run(self, plan: CrudPlan, report: Optional[SyncReport] = None) -> SyncReport:
        """
        Execute a plan

        Args:
            plan: CRUD plan to apply
            report: Report to fill in, so callers keep progress on failure

        Returns:
            Report of the executed steps

        Raises:
            Exception: Whatever the failing transport call raised
        """
        steps = build_steps(plan)
        self.report = report if report is not None else SyncReport()
        self.report.total = len(steps)

        for step in steps:
            try:
                result = await self._execute(step)
            except Exception as e:
                self.report.failed = StepResult(step=step, success=False, error=str(e))
                logger.error(f"Failed to {step.describe()}: {e}")
                raise
            self.report.completed.append(result)

        logger.debug(f"Sync finished: {self.report.to_dict()}")
        return self.report

    async def _execute(self, step: SyncStep) -> StepResult:
        if step.kind == ResourceKind.FOLDER:
            if step.action == CrudAction.DELETE:
                await self.transport.delete_folder(step.path)
            else:
                await self.transport.create_folder(step.path)
            return StepResult(step=step, success=True)

        if step.action == CrudAction.DELETE:
            await self.transport.delete_file(step.path)
            return StepResult(step=step, success=True)

        resource = self._resources.get(step.path)
        if resource is None:
            logger.warning(f"No local resource for {step.path}, skipping {step.action.value}")
            return StepResult(step=step, success=True, skipped=True)

        content = await resource.read_content()
        if step.action == CrudAction.UPDATE:
            await self.transport.update_file(step.path, content)
        else:
            await self.transport.create_file(step.path, content)
        return StepResult(step=step, success=True)
