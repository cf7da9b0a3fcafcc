# ui5_deployer/targets/base.py
"""Deploy target abstract base class"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.lifecycle import DeployLifecycle
from ..core.resource_lister import LocalResourceLister
from ..models.config import ProjectConfig
from ..models.plan import CrudPlan
from ..models.resource import ResourceHandle
from ..models.result import DeployResult, SyncReport


@dataclass
class DeployContext:
    """State shared between the deploy entry point and a target

    Targets record the plan and the sync report here as soon as they exist,
    so the caller can still inspect them when the deploy fails.
    """

    project: ProjectConfig
    resource_lister: LocalResourceLister
    lifecycle: DeployLifecycle = field(default_factory=DeployLifecycle)
    dry_run: bool = False
    plan: Optional[CrudPlan] = None
    report: Optional[SyncReport] = None

    def list_resources(self) -> List[ResourceHandle]:
        """Enumerate the local build output"""
        return self.resource_lister.list_resources()


class DeployTarget(ABC):
    """Base class for all deploy targets"""

    type_name: str = ""
    # Whole-application targets never leave IDLE
    tracks_lifecycle: bool = True

    def __init__(self, project: ProjectConfig):
        """
        Initialize deploy target

        Args:
            project: Project configuration
        """
        self.project = project
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def deployer(self):
        """Deployer section of the project configuration"""
        return self.project.deployer

    @abstractmethod
    async def deploy(self, context: DeployContext) -> DeployResult:
        """
        Deploy the project to the remote target

        Args:
            context: Deploy context

        Returns:
            Deploy result

        Raises:
            DeployerError: Or any transport exception, unmodified
        """
        pass

    def _result(self, context: DeployContext, **kwargs) -> DeployResult:
        """Build a successful result from the context"""
        return DeployResult(
            success=True,
            target_type=self.type_name,
            project_name=self.project.name,
            state=context.lifecycle.state if self.tracks_lifecycle else None,
            plan=context.plan,
            report=context.report,
            dry_run=context.dry_run,
            **kwargs
        )
