"""Tests for local and remote resource listing."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from ui5_deployer.core.resource_lister import LocalResourceLister, RemoteResourceLister
from ui5_deployer.core.transport import ResourceTransport
from ui5_deployer.models import RemoteListing


class TestLocalResourceLister:
    """Tests for enumerating the build output."""

    def test_lists_virtual_paths_sorted(self, tmp_path, write_tree):
        write_tree(tmp_path, {
            "js/main.js": b"main",
            "index.html": b"<html/>",
            "css/style.css": b"body{}",
        })

        resources = LocalResourceLister(tmp_path).list_resources()

        assert [r.path for r in resources] == ["/css/style.css", "/index.html", "/js/main.js"]

    def test_excludes_matching_paths(self, tmp_path, write_tree):
        write_tree(tmp_path, {
            "index.html": b"<html/>",
            "test/unit/a.js": b"test",
            "js/main.js": b"main",
        })

        resources = LocalResourceLister(tmp_path, excludes=["/test/**"]).list_resources()

        assert [r.path for r in resources] == ["/index.html", "/js/main.js"]

    @pytest.mark.asyncio
    async def test_content_loaded_from_disk(self, tmp_path, write_tree):
        write_tree(tmp_path, {"a.txt": b"first"})
        resource = LocalResourceLister(tmp_path).list_resources()[0]

        (tmp_path / "a.txt").write_bytes(b"second")

        assert await resource.read_content() == b"second"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LocalResourceLister(tmp_path / "missing").list_resources()


class TestRemoteResourceLister:
    """Tests for recursive remote discovery."""

    @pytest.mark.asyncio
    async def test_walks_folders_recursively(self):
        listings = {
            "ZAPP": RemoteListing(folders=["ZAPP%2fjs"], files=["ZAPP%2findex.html"]),
            "ZAPP%2fjs": RemoteListing(folders=["ZAPP%2fjs%2flib"], files=["ZAPP%2fjs%2fmain.js"]),
            "ZAPP%2fjs%2flib": RemoteListing(files=["ZAPP%2fjs%2flib%2fx.js"]),
        }
        transport = AsyncMock(spec=ResourceTransport)
        transport.list_entries.side_effect = lambda folder: listings[folder]

        remote = await RemoteResourceLister(transport, "ZAPP").discover("ZAPP")

        assert sorted(remote.folders) == ["/js", "/js/lib"]
        assert sorted(remote.files) == ["/index.html", "/js/lib/x.js", "/js/main.js"]
        assert transport.list_entries.await_count == 3
        assert len(remote) == 5

    @pytest.mark.asyncio
    async def test_empty_application(self):
        transport = AsyncMock(spec=ResourceTransport)
        transport.list_entries.return_value = RemoteListing()

        remote = await RemoteResourceLister(transport, "ZAPP").discover("ZAPP")

        assert remote.folders == [] and remote.files == []

    @pytest.mark.asyncio
    async def test_listing_error_propagates(self):
        transport = AsyncMock(spec=ResourceTransport)
        transport.list_entries.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await RemoteResourceLister(transport, "ZAPP").discover("ZAPP")

    @pytest.mark.asyncio
    async def test_sibling_folders_listed_concurrently(self):
        children = ["ZAPP%2fcss", "ZAPP%2fi18n", "ZAPP%2fjs"]
        in_flight = 0
        max_in_flight = 0

        async def list_entries(folder):
            nonlocal in_flight, max_in_flight
            if folder == "ZAPP":
                return RemoteListing(folders=children)
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return RemoteListing(files=[folder + "%2fa.js"])

        transport = AsyncMock(spec=ResourceTransport)
        transport.list_entries.side_effect = list_entries

        remote = await RemoteResourceLister(transport, "ZAPP").discover("ZAPP")

        assert max_in_flight == len(children)
        assert sorted(remote.files) == ["/css/a.js", "/i18n/a.js", "/js/a.js"]

    @pytest.mark.asyncio
    async def test_failed_sibling_cancels_pending_walks(self):
        cancelled = []

        async def list_entries(folder):
            if folder == "ZAPP":
                return RemoteListing(folders=["ZAPP%2fbroken", "ZAPP%2fslow"])
            if folder == "ZAPP%2fbroken":
                raise RuntimeError("listing failed")
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(folder)
                raise
            return RemoteListing()

        transport = AsyncMock(spec=ResourceTransport)
        transport.list_entries.side_effect = list_entries

        with pytest.raises(RuntimeError, match="listing failed"):
            await asyncio.wait_for(RemoteResourceLister(transport, "ZAPP").discover("ZAPP"), timeout=5)

        assert cancelled == ["ZAPP%2fslow"]
