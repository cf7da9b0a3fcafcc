"""Tests for the sync executor."""

from unittest.mock import AsyncMock, Mock

import pytest

from ui5_deployer.api.exceptions import TransportError
from ui5_deployer.constants import CrudAction, ResourceKind
from ui5_deployer.core.sync_executor import SyncExecutor, build_steps
from ui5_deployer.core.transport import ResourceTransport
from ui5_deployer.models import CrudOperations, CrudPlan, ResourceHandle, SyncPhase, SyncReport


def _transport():
    return AsyncMock(spec=ResourceTransport)


def _plan(**lists):
    folders = CrudOperations(
        create=lists.get("folders_create", []),
        update=lists.get("folders_update", []),
        delete=lists.get("folders_delete", []),
    )
    files = CrudOperations(
        create=lists.get("files_create", []),
        update=lists.get("files_update", []),
        delete=lists.get("files_delete", []),
    )
    return CrudPlan(folders=folders, files=files)


class TestBuildSteps:
    """Tests for flattening a plan into ordered steps."""

    def test_phase_order(self):
        plan = _plan(
            folders_create=["/new"],
            folders_delete=["/old"],
            files_create=["/new/a.js"],
            files_update=["/index.html"],
            files_delete=["/old/b.js"],
        )

        steps = build_steps(plan)

        assert [(s.action, s.kind, s.path) for s in steps] == [
            (CrudAction.DELETE, ResourceKind.FILE, "/old/b.js"),
            (CrudAction.DELETE, ResourceKind.FOLDER, "/old"),
            (CrudAction.UPDATE, ResourceKind.FILE, "/index.html"),
            (CrudAction.CREATE, ResourceKind.FOLDER, "/new"),
            (CrudAction.CREATE, ResourceKind.FILE, "/new/a.js"),
        ]
        assert [s.phase for s in steps] == [
            SyncPhase.DELETE, SyncPhase.DELETE, SyncPhase.UPDATE, SyncPhase.CREATE, SyncPhase.CREATE,
        ]

    def test_folder_updates_produce_no_step(self):
        assert build_steps(_plan(folders_update=["/js"])) == []


class TestSyncExecutor:
    """Tests for executing a plan against a transport."""

    @pytest.mark.asyncio
    async def test_calls_transport_in_order(self):
        transport = _transport()
        calls = Mock()
        transport.delete_file.side_effect = lambda p: calls("delete_file", p)
        transport.delete_folder.side_effect = lambda p: calls("delete_folder", p)
        transport.update_file.side_effect = lambda p, c: calls("update_file", p, c)
        transport.create_folder.side_effect = lambda p: calls("create_folder", p)
        transport.create_file.side_effect = lambda p, c: calls("create_file", p, c)
        resources = [
            ResourceHandle.from_bytes("/index.html", b"<html/>"),
            ResourceHandle.from_bytes("/js/main.js", b"main"),
        ]
        plan = _plan(
            folders_create=["/js"],
            folders_delete=["/old/deep", "/old"],
            files_create=["/js/main.js"],
            files_update=["/index.html"],
            files_delete=["/old/deep/x.js"],
        )

        report = await SyncExecutor(transport, resources).run(plan)

        assert [c.args for c in calls.call_args_list] == [
            ("delete_file", "/old/deep/x.js"),
            ("delete_folder", "/old/deep"),
            ("delete_folder", "/old"),
            ("update_file", "/index.html", b"<html/>"),
            ("create_folder", "/js"),
            ("create_file", "/js/main.js", b"main"),
        ]
        assert report.success
        assert report.total == 6
        assert len(report.completed) == 6
        assert report.pending == 0

    @pytest.mark.asyncio
    async def test_aborts_on_first_failure(self):
        transport = _transport()
        error = TransportError(500, "Internal Server Error")
        transport.delete_file.side_effect = [None, error, None]
        plan = _plan(
            files_delete=["/a.js", "/b.js", "/c.js"],
            files_update=["/index.html"],
            folders_create=["/js"],
            files_create=["/js/main.js"],
        )
        resources = [ResourceHandle.from_bytes("/index.html", b"x")]
        report = SyncReport()

        with pytest.raises(TransportError) as exc_info:
            await SyncExecutor(transport, resources).run(plan, report)

        assert exc_info.value is error
        assert transport.delete_file.await_count == 2
        transport.delete_folder.assert_not_awaited()
        transport.update_file.assert_not_awaited()
        transport.create_folder.assert_not_awaited()
        transport.create_file.assert_not_awaited()

        assert len(report.completed) == 1
        assert report.failed.step.path == "/b.js"
        assert report.failed.error == "500 - Internal Server Error"
        assert report.pending == 4
        assert not report.success

    @pytest.mark.asyncio
    async def test_missing_local_resource_is_skipped(self):
        transport = _transport()
        plan = _plan(files_update=["/gone.js"], files_create=["/new.js"])
        resources = [ResourceHandle.from_bytes("/new.js", b"new")]

        report = await SyncExecutor(transport, resources).run(plan)

        transport.update_file.assert_not_awaited()
        transport.create_file.assert_awaited_once_with("/new.js", b"new")
        assert [r.step.path for r in report.skipped] == ["/gone.js"]
        assert report.success

    @pytest.mark.asyncio
    async def test_content_read_at_execution_time(self):
        transport = _transport()
        loader = AsyncMock(return_value=b"fresh")
        resources = [ResourceHandle(path="/a.js", loader=loader)]
        executor = SyncExecutor(transport, resources)

        loader.assert_not_awaited()
        await executor.run(_plan(files_create=["/a.js"]))

        loader.assert_awaited_once()
        transport.create_file.assert_awaited_once_with("/a.js", b"fresh")

    @pytest.mark.asyncio
    async def test_empty_plan(self):
        transport = _transport()
        report = await SyncExecutor(transport, []).run(CrudPlan())
        assert report.total == 0
        assert report.success
