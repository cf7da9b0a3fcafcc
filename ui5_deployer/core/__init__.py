# ui5_deployer/core/__init__.py
"""Core reconciliation and sync logic"""

from .path_normalizer import normalize_remote_path, normalize_remote_paths, unescape_separators
from .reconciler import (
    MatchPredicate,
    suffix_match,
    derive_local_folders,
    build_local_path_set,
    compute_plan,
)
from .transport import ResourceTransport
from .resource_lister import LocalResourceLister, RemoteResourceLister
from .sync_executor import SyncExecutor, build_steps
from .lifecycle import DeployLifecycle

__all__ = [
    'normalize_remote_path',
    'normalize_remote_paths',
    'unescape_separators',
    'MatchPredicate',
    'suffix_match',
    'derive_local_folders',
    'build_local_path_set',
    'compute_plan',
    'ResourceTransport',
    'LocalResourceLister',
    'RemoteResourceLister',
    'SyncExecutor',
    'build_steps',
    'DeployLifecycle',
]
