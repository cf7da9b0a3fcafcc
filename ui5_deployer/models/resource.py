"""Resource data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, List, Set

import aiofiles

ContentLoader = Callable[[], Awaitable[bytes]]


@dataclass(frozen=True)
class ResourceHandle:
    """One local file of the build output

    The content is not held in memory; every call to ``read_content``
    invokes the loader again.
    """

    path: str
    loader: ContentLoader = field(repr=False, compare=False)

    async def read_content(self) -> bytes:
        """Read the current content of the resource"""
        return await self.loader()

    @classmethod
    def from_file(cls, path: str, fs_path: Path) -> 'ResourceHandle':
        """Create a handle backed by a file on disk

        Args:
            path: Virtual POSIX path, relative to the deployment root
            fs_path: Location of the file on disk

        Returns:
            Resource handle
        """
        async def _load() -> bytes:
            async with aiofiles.open(fs_path, 'rb') as f:
                return await f.read()

        return cls(path=path, loader=_load)

    @classmethod
    def from_bytes(cls, path: str, content: bytes) -> 'ResourceHandle':
        """Create a handle serving fixed in-memory content"""
        async def _load() -> bytes:
            return content

        return cls(path=path, loader=_load)


@dataclass
class RemoteListing:
    """Direct children of one remote folder, as returned by the transport"""
    folders: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)


@dataclass
class RemotePathSet:
    """Remote folders and files relative to the deployment root"""
    folders: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.folders) + len(self.files)


@dataclass
class LocalPathSet:
    """Local file paths and the folder paths they imply"""
    files: List[str] = field(default_factory=list)
    folders: Set[str] = field(default_factory=set)
