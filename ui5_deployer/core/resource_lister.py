"""Local and remote resource listing"""

import asyncio
import fnmatch
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..constants import PATH_SEPARATOR
from ..models.resource import RemotePathSet, ResourceHandle
from .path_normalizer import normalize_remote_paths, unescape_separators
from .transport import ResourceTransport

logger = logging.getLogger(__name__)


class LocalResourceLister:
    """Enumerates the files of a build output directory

    Resource paths are virtual POSIX paths rooted at ``/``, e.g. the file
    ``dist/js/main.js`` of source directory ``dist`` is ``/js/main.js``.
    """

    def __init__(self, base_dir: Union[str, Path], excludes: Optional[List[str]] = None):
        """
        Initialize local resource lister

        Args:
            base_dir: Directory holding the build output
            excludes: Glob patterns on virtual paths (``/test/**``)
        """
        self.base_dir = Path(base_dir)
        self.excludes = excludes or []

    def is_excluded(self, virtual_path: str) -> bool:
        """Check a virtual path against the exclude patterns"""
        return any(fnmatch.fnmatch(virtual_path, pattern) for pattern in self.excludes)

    def list_resources(self) -> List[ResourceHandle]:
        """
        List all files below the base directory

        Returns:
            Resource handles sorted by path

        Raises:
            FileNotFoundError: If the base directory does not exist
        """
        if not self.base_dir.is_dir():
            raise FileNotFoundError(f"Source directory not found: {self.base_dir}")

        resources = []
        for fs_path in sorted(self.base_dir.rglob("*")):
            if not fs_path.is_file():
                continue
            virtual_path = PATH_SEPARATOR + fs_path.relative_to(self.base_dir).as_posix()
            if self.is_excluded(virtual_path):
                logger.debug(f"Excluded {virtual_path}")
                continue
            resources.append(ResourceHandle.from_file(virtual_path, fs_path))

        logger.debug(f"Found {len(resources)} local resources in {self.base_dir}")
        return resources


class RemoteResourceLister:
    """Recursively discovers remote folders and files

    Sibling folders are walked concurrently. When one walk fails the
    others are cancelled before the error propagates.
    """

    def __init__(self, transport: ResourceTransport, app_root: str):
        """
        Initialize remote resource lister

        Args:
            transport: Transport used for listing
            app_root: Application root prefix stripped from remote ids
        """
        self.transport = transport
        self.app_root = app_root

    async def discover(self, root_id: str) -> RemotePathSet:
        """
        Walk the remote tree below a root folder

        Args:
            root_id: Remote id of the root folder

        Returns:
            Normalized remote folder and file paths
        """
        path_set = RemotePathSet()
        await self._walk(root_id, path_set)
        logger.debug(
            f"Discovered {len(path_set.folders)} remote folders and "
            f"{len(path_set.files)} remote files"
        )
        return path_set

    async def _walk(self, folder_id: str, path_set: RemotePathSet) -> None:
        logger.info(f"Getting files from {unescape_separators(folder_id)}")
        listing = await self.transport.list_entries(folder_id)
        path_set.files.extend(normalize_remote_paths(listing.files, self.app_root))
        path_set.folders.extend(normalize_remote_paths(listing.folders, self.app_root))
        walks = [asyncio.ensure_future(self._walk(child, path_set)) for child in listing.folders]
        try:
            await asyncio.gather(*walks)
        except BaseException:
            # The caller closes the transport once this raises
            for walk in walks:
                walk.cancel()
            await asyncio.gather(*walks, return_exceptions=True)
            raise
