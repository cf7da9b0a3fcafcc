"""Deployer API for deploy operations"""

import logging
import time
from typing import Optional

from ..core.lifecycle import DeployLifecycle
from ..core.resource_lister import LocalResourceLister
from ..core.target_registry import TargetRegistry, create_default_registry
from ..models import DeployResult, ProjectConfig
from ..targets.base import DeployContext, DeployTarget
from ..utils.async_utils import run_async
from ..utils.formatting import format_elapsed

logger = logging.getLogger(__name__)


class Deployer:
    """Deploys projects to the target their configuration names"""

    def __init__(self, registry: Optional[TargetRegistry] = None):
        """
        Initialize deployer

        Args:
            registry: Target registry, the built-in targets by default
        """
        self.registry = registry or create_default_registry()

    def create_target(self, project: ProjectConfig) -> DeployTarget:
        """
        Instantiate the target for a project

        Raises:
            UnknownTargetTypeError: If the deployer type is not registered
        """
        target_class = self.registry.get(project.deployer.type)
        return target_class(project)

    def create_context(self, project: ProjectConfig, dry_run: bool = False) -> DeployContext:
        """Build the deploy context over the project's build output"""
        resource_lister = LocalResourceLister(project.source_dir, project.get_virtual_excludes())
        return DeployContext(
            project=project,
            resource_lister=resource_lister,
            lifecycle=DeployLifecycle(),
            dry_run=dry_run,
        )

    async def deploy_async(self,
                           project: ProjectConfig,
                           dry_run: bool = False,
                           context: Optional[DeployContext] = None) -> DeployResult:
        """
        Deploy a project

        Args:
            project: Project configuration
            dry_run: Compute the changes without applying them
            context: Deploy context, created from the project if omitted

        Returns:
            DeployResult: Deploy result

        Raises:
            DeployerError: Or any exception raised by the target, unmodified
        """
        logger.info(f"Deploying project {project.name}")
        start_time = time.monotonic()
        context = context or self.create_context(project, dry_run=dry_run)

        try:
            target = self.create_target(project)
            result = await target.deploy(context)
        except Exception as e:
            context.lifecycle.fail()
            logger.error(str(e))
            logger.error(f"Deploy failed in {format_elapsed(time.monotonic() - start_time)}")
            raise

        result.duration = time.monotonic() - start_time
        logger.debug(f"Finished deploying project {project.name}")
        logger.info(f"Deploy succeeded in {format_elapsed(result.duration)}")
        return result

    def deploy(self, project: ProjectConfig, dry_run: bool = False) -> DeployResult:
        """Synchronous wrapper of :meth:`deploy_async`"""
        return run_async(self.deploy_async(project, dry_run=dry_run))


async def deploy_async(project: ProjectConfig,
                       registry: Optional[TargetRegistry] = None,
                       dry_run: bool = False) -> DeployResult:
    """
    Deploy a project from async code

    Args:
        project: Project configuration
        registry: Target registry, the built-in targets by default
        dry_run: Compute the changes without applying them

    Returns:
        DeployResult: Deploy result
    """
    return await Deployer(registry).deploy_async(project, dry_run=dry_run)


def deploy(project: ProjectConfig,
           registry: Optional[TargetRegistry] = None,
           dry_run: bool = False) -> DeployResult:
    """
    Deploy a project

    This is a convenience function that creates a Deployer instance
    and performs the deploy.

    Args:
        project: Project configuration
        registry: Target registry, the built-in targets by default
        dry_run: Compute the changes without applying them

    Returns:
        DeployResult: Deploy result

    Raises:
        DeployerError: If the deploy fails
    """
    return Deployer(registry).deploy(project, dry_run=dry_run)
