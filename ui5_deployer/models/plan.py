"""CRUD plan models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..constants import CrudAction, ResourceKind


@dataclass
class CrudOperations:
    """Create/update/delete path lists for one resource kind"""

    create: List[str] = field(default_factory=list)
    update: List[str] = field(default_factory=list)
    delete: List[str] = field(default_factory=list)

    def get(self, action: CrudAction) -> List[str]:
        """Get the path list for an action"""
        return getattr(self, action.value)

    @property
    def total(self) -> int:
        return len(self.create) + len(self.update) + len(self.delete)

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to dictionary"""
        return {
            "create": list(self.create),
            "update": list(self.update),
            "delete": list(self.delete),
        }


@dataclass
class CrudPlan:
    """Operations required to bring the remote tree in line with the local one

    ``folders.delete`` is ordered deepest-first; every other list is ordered
    shallowest-first. ``ambiguous`` maps a remote path to all local paths it
    matched when there was more than one.
    """

    folders: CrudOperations = field(default_factory=CrudOperations)
    files: CrudOperations = field(default_factory=CrudOperations)
    ambiguous: Dict[str, List[str]] = field(default_factory=dict)

    def for_kind(self, kind: ResourceKind) -> CrudOperations:
        """Get the operations for a resource kind"""
        return self.folders if kind == ResourceKind.FOLDER else self.files

    @property
    def is_empty(self) -> bool:
        """Check if the plan mutates nothing remotely

        Folder updates are not remote operations and do not count.
        """
        return not (self.folders.create or self.folders.delete or self.files.total)

    def summary(self) -> Dict[str, int]:
        """Count operations per kind and action"""
        counts = {}
        for kind in ResourceKind:
            operations = self.for_kind(kind)
            for action in CrudAction:
                counts[f"{kind.value}s.{action.value}"] = len(operations.get(action))
        return counts

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "folders": self.folders.to_dict(),
            "files": self.files.to_dict(),
        }
        if self.ambiguous:
            data["ambiguous"] = {remote: list(local) for remote, local in self.ambiguous.items()}
        return data
