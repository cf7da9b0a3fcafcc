# ui5_deployer/core/transport.py
"""Resource transport abstract base class"""

from abc import ABC, abstractmethod

from ..models.resource import RemoteListing


class ResourceTransport(ABC):
    """Remote store primitives used by the sync core

    Every method either completes or raises; there is no partial success.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Authenticate and prepare the remote store"""
        pass

    @abstractmethod
    async def list_entries(self, folder_path: str) -> RemoteListing:
        """
        List the direct children of a remote folder

        Args:
            folder_path: Remote folder id, as found in a previous listing

        Returns:
            Raw folder and file ids
        """
        pass

    @abstractmethod
    async def create_folder(self, path: str) -> None:
        """Create a remote folder"""
        pass

    @abstractmethod
    async def delete_folder(self, path: str) -> None:
        """Delete a remote folder and its children"""
        pass

    @abstractmethod
    async def create_file(self, path: str, content: bytes) -> None:
        """Create a remote file"""
        pass

    @abstractmethod
    async def update_file(self, path: str, content: bytes) -> None:
        """Replace the content of a remote file"""
        pass

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        """Delete a remote file"""
        pass

    async def close(self) -> None:
        """Release connections"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
