"""Tests for the SAP NetWeaver deploy targets."""

import zipfile
from unittest.mock import AsyncMock, patch

import pytest

from ui5_deployer.api.exceptions import TransportError
from ui5_deployer.core.lifecycle import DeployLifecycle
from ui5_deployer.core.resource_lister import LocalResourceLister
from ui5_deployer.models import DeployState, RemoteListing
from ui5_deployer.targets.adt_client import AdtClient
from ui5_deployer.targets.base import DeployContext
from ui5_deployer.targets.netweaver import NetWeaverAdtTarget, NetWeaverODataTarget
from ui5_deployer.targets.odata_client import ODataClient


def make_context(project, dry_run=False):
    return DeployContext(
        project=project,
        resource_lister=LocalResourceLister(project.source_dir, project.get_virtual_excludes()),
        lifecycle=DeployLifecycle(),
        dry_run=dry_run,
    )


def mock_adt_client(listings):
    client = AsyncMock(spec=AdtClient)
    client.bsp_application = "ZAPP"
    client.transport_request = "K900123"
    client.__aenter__.return_value = client
    client.list_entries.side_effect = lambda folder: listings.get(folder, RemoteListing())
    return client


REMOTE = {
    "ZAPP": RemoteListing(folders=["ZAPP%2fold"], files=["ZAPP%2findex.html"]),
    "ZAPP%2fold": RemoteListing(files=["ZAPP%2fold%2fgone.js"]),
}


class TestNetWeaverAdtTarget:

    @pytest.mark.asyncio
    async def test_deploy_syncs_differences(self, abap_project):
        client = mock_adt_client(REMOTE)
        target = NetWeaverAdtTarget(abap_project)
        context = make_context(abap_project)

        with patch.object(target, "create_client", return_value=client):
            result = await target.deploy(context)

        client.connect.assert_awaited_once()
        client.delete_file.assert_awaited_once_with("/old/gone.js")
        client.delete_folder.assert_awaited_once_with("/old")
        client.update_file.assert_awaited_once_with("/index.html", b"<html></html>")
        client.create_folder.assert_awaited_once_with("/js")
        client.create_file.assert_awaited_once_with("/js/main.js", b"console.log('hi');")
        client.app_index_calculation.assert_awaited_once()
        client.close.assert_not_awaited()
        client.__aexit__.assert_awaited_once()

        assert result.success
        assert result.state == DeployState.SYNCED
        assert result.report.total == 5
        assert result.metadata["bsp_application"] == "ZAPP"
        assert context.lifecycle.history == [
            DeployState.IDLE,
            DeployState.CONNECTED,
            DeployState.RESOURCES_DISCOVERED,
            DeployState.PLAN_COMPUTED,
            DeployState.SYNCING,
            DeployState.SYNCED,
        ]

    @pytest.mark.asyncio
    async def test_discovery_starts_at_escaped_application(self, abap_project):
        client = mock_adt_client({})
        target = NetWeaverAdtTarget(abap_project)

        with patch.object(target, "create_client", return_value=client):
            await target.deploy(make_context(abap_project))

        assert client.list_entries.await_args_list[0].args == ("ZAPP",)

    @pytest.mark.asyncio
    async def test_dry_run_does_not_mutate(self, abap_project):
        client = mock_adt_client(REMOTE)
        target = NetWeaverAdtTarget(abap_project)
        context = make_context(abap_project, dry_run=True)

        with patch.object(target, "create_client", return_value=client):
            result = await target.deploy(context)

        for method in ("create_folder", "delete_folder", "create_file", "update_file",
                       "delete_file", "app_index_calculation"):
            getattr(client, method).assert_not_awaited()
        assert result.dry_run
        assert result.report is None
        assert result.plan.files.create == ["/js/main.js"]
        assert DeployState.SYNCING not in context.lifecycle.history
        assert context.lifecycle.state == DeployState.SYNCED

    @pytest.mark.asyncio
    async def test_sync_failure_keeps_progress(self, abap_project):
        client = mock_adt_client(REMOTE)
        client.update_file.side_effect = TransportError(500, "Internal Server Error")
        target = NetWeaverAdtTarget(abap_project)
        context = make_context(abap_project)

        with patch.object(target, "create_client", return_value=client):
            with pytest.raises(TransportError):
                await target.deploy(context)

        client.create_folder.assert_not_awaited()
        client.app_index_calculation.assert_not_awaited()
        assert context.report.failed.step.path == "/index.html"
        assert len(context.report.completed) == 2
        assert context.lifecycle.state == DeployState.SYNCING


class TestNetWeaverODataTarget:

    @pytest.mark.asyncio
    async def test_archive_contains_build_output(self, tmp_path, make_abap_project, write_tree):
        write_tree(tmp_path / "dist", {"index.html": b"<html/>", "js/main.js": b"main"})
        project = make_abap_project(tmp_path, deployer_type="sap-netweaver-odata")
        target = NetWeaverODataTarget(project)

        archive_path = await target.create_archive(make_context(project))

        assert archive_path == tmp_path / "dist" / "my.app-archive.zip"
        with zipfile.ZipFile(archive_path) as archive:
            assert sorted(archive.namelist()) == ["index.html", "js/main.js"]
            assert archive.read("js/main.js") == b"main"
            assert all(i.compress_type == zipfile.ZIP_STORED for i in archive.infolist())

    @pytest.mark.asyncio
    async def test_previous_archive_not_included(self, tmp_path, make_abap_project, write_tree):
        write_tree(tmp_path / "dist", {"index.html": b"<html/>", "my.app-archive.zip": b"old"})
        project = make_abap_project(tmp_path, deployer_type="sap-netweaver-odata")
        target = NetWeaverODataTarget(project)

        archive_path = await target.create_archive(make_context(project))

        with zipfile.ZipFile(archive_path) as archive:
            assert archive.namelist() == ["index.html"]

    @pytest.mark.asyncio
    async def test_deploy_uploads_archive(self, abap_project):
        client = AsyncMock(spec=ODataClient)
        client.__aenter__.return_value = client
        target = NetWeaverODataTarget(abap_project)

        with patch.object(target, "create_client", return_value=client):
            result = await target.deploy(make_context(abap_project))

        client.connect.assert_awaited_once()
        client.sync_remote_server.assert_awaited_once_with(target.archive_path)
        assert result.artifact == str(target.archive_path)
        assert result.success
        assert result.state is None
        assert "state" not in result.to_dict()
