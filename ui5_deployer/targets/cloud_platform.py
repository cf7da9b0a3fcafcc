# ui5_deployer/targets/cloud_platform.py
"""SAP Cloud Platform deploy targets driven by the platform CLIs"""

import shutil
from pathlib import Path
from typing import List, Optional

from ..api.exceptions import ConfigError
from ..constants import CF_EXECUTABLE, NEO_EXECUTABLE, TargetType
from ..models.result import DeployResult
from ..utils.process_utils import run_command
from .base import DeployContext, DeployTarget

_MASK = "****"


def _resolve_executable(name: str, cli_path: str) -> str:
    """Prefer the executable inside the configured CLI directory"""
    if cli_path:
        candidate = shutil.which(name, path=cli_path)
        if candidate:
            return candidate
    return name


def _masked(args: List[str], secret: str) -> str:
    return " ".join(_MASK if secret and arg == secret else arg for arg in args)


class CloudFoundryTarget(DeployTarget):
    """Deploys with ``cf login`` followed by ``cf push``"""

    type_name = TargetType.SAP_CP_CF.value
    tracks_lifecycle = False

    @property
    def cloud_foundry(self):
        settings = self.deployer.cloud_foundry
        if settings is None:
            raise ConfigError("Deployer configuration requires 'sapCloudPlatform.cloudFoundry'")
        return settings

    @property
    def cli_dir(self) -> Optional[str]:
        return self.cloud_foundry.cli_path or None

    def build_login_command(self) -> List[str]:
        cf = self.cloud_foundry
        return [
            _resolve_executable(CF_EXECUTABLE, cf.cli_path), "login",
            "-a", self.deployer.connection.url,
            "-u", self.deployer.credentials.username,
            "-p", self.deployer.credentials.password,
            "-o", cf.org,
            "-s", cf.space,
        ]

    def build_push_command(self) -> List[str]:
        return [_resolve_executable(CF_EXECUTABLE, self.cloud_foundry.cli_path),
                "push", "-f", self.deployer.source_path]

    async def deploy(self, context: DeployContext) -> DeployResult:
        login = self.build_login_command()
        push = self.build_push_command()
        password = self.deployer.credentials.password
        if context.dry_run:
            self.logger.info(f"Dry run: would run {_masked(login, password)}")
            self.logger.info(f"Dry run: would run {_masked(push, password)}")
            return self._result(context)

        await run_command(login, cwd=self.cli_dir, logger=self.logger, display=_masked(login, password))
        message = await run_command(push, cwd=self.cli_dir, logger=self.logger)
        return self._result(context, metadata={"message": message})


class NeoTarget(DeployTarget):
    """Deploys an MTA archive with ``neo deploy-mta``"""

    type_name = TargetType.SAP_CP_NEO.value
    tracks_lifecycle = False

    @property
    def neo(self):
        settings = self.deployer.neo
        if settings is None:
            raise ConfigError("Deployer configuration requires 'sapCloudPlatform.neo'")
        return settings

    @property
    def mta_path(self) -> Path:
        return Path(self.project.path) / self.deployer.source_path

    def build_deploy_command(self) -> List[str]:
        return [
            _resolve_executable(NEO_EXECUTABLE, self.neo.cli_path), "deploy-mta",
            "--host", self.deployer.connection.url,
            "--account", self.neo.account,
            "--user", self.deployer.credentials.username,
            "--password", self.deployer.credentials.password,
            "--source", str(self.mta_path),
            "--synchronous",
        ]

    async def deploy(self, context: DeployContext) -> DeployResult:
        command = self.build_deploy_command()
        display = _masked(command, self.deployer.credentials.password)
        if context.dry_run:
            self.logger.info(f"Dry run: would run {display}")
            return self._result(context, artifact=str(self.mta_path))

        message = await run_command(command, cwd=self.neo.cli_path or None, logger=self.logger, display=display)
        return self._result(context, artifact=str(self.mta_path), metadata={"message": message})
