# ui5_deployer/targets/__init__.py
"""Deploy target implementations"""

from .base import DeployContext, DeployTarget
from .netweaver import NetWeaverAdtTarget, NetWeaverODataTarget
from .cloud_platform import CloudFoundryTarget, NeoTarget

BUILTIN_TARGETS = [
    NetWeaverAdtTarget,
    NetWeaverODataTarget,
    CloudFoundryTarget,
    NeoTarget,
]

__all__ = [
    'DeployContext',
    'DeployTarget',
    'NetWeaverAdtTarget',
    'NetWeaverODataTarget',
    'CloudFoundryTarget',
    'NeoTarget',
    'BUILTIN_TARGETS',
]
