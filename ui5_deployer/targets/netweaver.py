# ui5_deployer/targets/netweaver.py
"""SAP NetWeaver deploy targets"""

from pathlib import Path
from typing import Optional

import httpx

from ..constants import TargetType
from ..core.reconciler import build_local_path_set, compute_plan
from ..core.resource_lister import RemoteResourceLister
from ..core.sync_executor import SyncExecutor
from ..models.config import ProjectConfig
from ..models.result import DeployResult, DeployState, SyncReport
from ..utils.file_utils import create_zip_archive
from ..utils.formatting import count_of, format_plan_counts, format_size
from .adt_client import AdtClient
from .base import DeployContext, DeployTarget
from .odata_client import ODataClient
from .sap_http import encode_uri_component


class NetWeaverAdtTarget(DeployTarget):
    """Deploys to the ABAP UI5 repository through the ADT filestore

    Only the difference between the local build and the BSP application is
    sent: stale remote resources are deleted, matching files updated and
    new ones created.
    """

    type_name = TargetType.SAP_NETWEAVER.value

    def __init__(self, project: ProjectConfig, http_transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize NetWeaver ADT target

        Args:
            project: Project configuration
            http_transport: Custom httpx transport for the ADT client
        """
        super().__init__(project)
        self.http_transport = http_transport

    def create_client(self) -> AdtClient:
        return AdtClient(self.deployer, logger=self.logger, transport=self.http_transport)

    async def deploy(self, context: DeployContext) -> DeployResult:
        lifecycle = context.lifecycle

        async with self.create_client() as client:
            await client.connect()
            lifecycle.advance(DeployState.CONNECTED)

            resources = context.list_resources()
            remote_lister = RemoteResourceLister(client, client.bsp_application)
            remote = await remote_lister.discover(encode_uri_component(client.bsp_application))
            lifecycle.advance(DeployState.RESOURCES_DISCOVERED)

            local = build_local_path_set(resource.path for resource in resources)
            context.plan = compute_plan(local, remote)
            lifecycle.advance(DeployState.PLAN_COMPUTED)
            self.logger.info(
                f"Found {count_of(len(resources), 'local file')} and "
                f"{count_of(len(remote), 'remote resource')}"
            )
            self.logger.info(f"Plan: {format_plan_counts(context.plan)}")

            if context.dry_run:
                self.logger.info("Dry run: no changes sent to the server")
                lifecycle.advance(DeployState.SYNCED)
                return self._result(context, metadata=self._metadata(client))

            lifecycle.advance(DeployState.SYNCING)
            context.report = SyncReport()
            await SyncExecutor(client, resources).run(context.plan, context.report)
            await client.app_index_calculation()
            lifecycle.advance(DeployState.SYNCED)

        return self._result(context, metadata=self._metadata(client))

    @staticmethod
    def _metadata(client: AdtClient) -> dict:
        return {
            "bsp_application": client.bsp_application,
            "transport_request": client.transport_request,
        }


class NetWeaverODataTarget(DeployTarget):
    """Deploys to the ABAP UI5 repository as one zip archive

    The archive replaces the whole BSP application, so no plan is computed
    and the lifecycle is not walked.
    """

    type_name = TargetType.SAP_NETWEAVER_ODATA.value
    tracks_lifecycle = False

    def __init__(self, project: ProjectConfig, http_transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(project)
        self.http_transport = http_transport

    def create_client(self) -> ODataClient:
        return ODataClient(self.deployer, logger=self.logger, transport=self.http_transport)

    @property
    def archive_path(self) -> Path:
        return self.project.source_dir / f"{self.project.name}-archive.zip"

    async def create_archive(self, context: DeployContext) -> Path:
        """
        Zip the local resources, uncompressed

        Args:
            context: Deploy context

        Returns:
            Path to the archive
        """
        archive_path = self.archive_path
        archive_name = "/" + archive_path.name
        entries = []
        for resource in context.list_resources():
            # A previous run leaves its archive in the source directory
            if resource.path == archive_name:
                continue
            entries.append((resource.path, await resource.read_content()))

        create_zip_archive(archive_path, entries)
        self.logger.info(
            f"Archive has been created: {archive_path} ({format_size(archive_path.stat().st_size)})"
        )
        return archive_path

    async def deploy(self, context: DeployContext) -> DeployResult:
        archive_path = await self.create_archive(context)
        if context.dry_run:
            self.logger.info("Dry run: archive not uploaded")
            return self._result(context, artifact=str(archive_path))

        async with self.create_client() as client:
            await client.connect()
            await client.sync_remote_server(archive_path)

        return self._result(context, artifact=str(archive_path))
