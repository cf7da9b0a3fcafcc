# ui5_deployer/models/__init__.py
"""Data models for ui5-deployer"""

from .resource import ResourceHandle, RemoteListing, RemotePathSet, LocalPathSet
from .plan import CrudOperations, CrudPlan
from .result import DeployState, SyncPhase, SyncStep, StepResult, SyncReport, DeployResult
from .config import (
    ConnectionConfig,
    Credentials,
    AbapRepositoryConfig,
    CloudFoundryConfig,
    NeoConfig,
    DeployerConfig,
    ProjectConfig,
)

__all__ = [
    # Resource models
    "ResourceHandle",
    "RemoteListing",
    "RemotePathSet",
    "LocalPathSet",

    # Plan models
    "CrudOperations",
    "CrudPlan",

    # Result models
    "DeployState",
    "SyncPhase",
    "SyncStep",
    "StepResult",
    "SyncReport",
    "DeployResult",

    # Config models
    "ConnectionConfig",
    "Credentials",
    "AbapRepositoryConfig",
    "CloudFoundryConfig",
    "NeoConfig",
    "DeployerConfig",
    "ProjectConfig",
]
