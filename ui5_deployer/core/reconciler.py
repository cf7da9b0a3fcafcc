"""Reconciliation engine

Computes which remote folders and files must be created, updated or deleted
so the remote tree matches the local build output.

Two paths denote the same resource when the local path ends with the remote
path. Remote paths are relative to the application root while local paths
may carry extra leading segments, so exact equality would be too strict.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from ..constants import DEFAULT_ROOT_DEPTH, PATH_SEPARATOR
from ..models.plan import CrudOperations, CrudPlan
from ..models.resource import LocalPathSet, RemotePathSet

logger = logging.getLogger(__name__)

MatchPredicate = Callable[[str, str], bool]


def suffix_match(local_path: str, remote_path: str) -> bool:
    """Default match predicate: the local path ends with the remote path"""
    return local_path.endswith(remote_path)


def segment_count(path: str) -> int:
    """Number of separator-delimited segments, ``/a/b`` has 3"""
    return len(path.split(PATH_SEPARATOR))


def sort_root_to_bottom(paths: Iterable[str]) -> List[str]:
    """Sort shallowest-first, lexicographic within one depth"""
    return sorted(paths, key=lambda p: (segment_count(p), p))


def sort_bottom_to_root(paths: Iterable[str]) -> List[str]:
    """Sort deepest-first, keeping the incoming order within one depth"""
    return sorted(paths, key=segment_count, reverse=True)


def find_match(local_path: str,
               remote_paths: Sequence[str],
               predicate: MatchPredicate = suffix_match) -> Optional[str]:
    """Return the first remote path matching a local path, if any"""
    for remote_path in remote_paths:
        if predicate(local_path, remote_path):
            return remote_path
    return None


def has_local_match(remote_path: str,
                    local_paths: Sequence[str],
                    predicate: MatchPredicate = suffix_match) -> bool:
    """Check if any local path matches a remote path"""
    return any(predicate(local_path, remote_path) for local_path in local_paths)


def to_be_created(local_paths: Sequence[str],
                  remote_paths: Sequence[str],
                  predicate: MatchPredicate = suffix_match) -> List[str]:
    """Local paths that have no remote counterpart"""
    return [p for p in local_paths if find_match(p, remote_paths, predicate) is None]


def to_be_updated(local_paths: Sequence[str],
                  remote_paths: Sequence[str],
                  predicate: MatchPredicate = suffix_match) -> List[str]:
    """Local paths that already exist remotely"""
    return [p for p in local_paths if find_match(p, remote_paths, predicate) is not None]


def to_be_deleted(local_paths: Sequence[str],
                  remote_paths: Sequence[str],
                  predicate: MatchPredicate = suffix_match) -> List[str]:
    """Remote paths that no longer exist locally"""
    return [p for p in remote_paths if not has_local_match(p, local_paths, predicate)]


def find_ambiguous_matches(local_paths: Sequence[str],
                           remote_paths: Sequence[str],
                           predicate: MatchPredicate = suffix_match) -> Dict[str, List[str]]:
    """Remote paths claimed by more than one local path

    A local path claims the longest remote path it matches. With only
    ``/x.js`` remote, both ``/a/x.js`` and ``/b/x.js`` claim it. Such
    collisions are not resolved, only reported.
    """
    claims: Dict[str, List[str]] = {}
    for local_path in local_paths:
        matches = [r for r in remote_paths if predicate(local_path, r)]
        if matches:
            best = max(matches, key=len)
            claims.setdefault(best, []).append(local_path)
    return {remote: local for remote, local in claims.items() if len(local) > 1}


def derive_local_folders(file_paths: Iterable[str],
                         root_depth: int = DEFAULT_ROOT_DEPTH) -> Set[str]:
    """Synthesize the folder paths implied by a flat list of file paths

    Args:
        file_paths: Local file paths
        root_depth: Number of leading segments forming the deployment root;
            prefixes with that many segments or fewer are not recorded

    Returns:
        Set of unique folder paths
    """
    folders = set()
    for file_path in file_paths:
        parts = file_path.split(PATH_SEPARATOR)
        while len(parts) > root_depth:
            parts.pop()
            folders.add(PATH_SEPARATOR.join(parts))
    return folders


def build_local_path_set(file_paths: Iterable[str],
                         root_depth: int = DEFAULT_ROOT_DEPTH) -> LocalPathSet:
    """Build the local path set from resource paths"""
    files = list(file_paths)
    return LocalPathSet(files=files, folders=derive_local_folders(files, root_depth))


def _reconcile(local_paths: Sequence[str],
               remote_paths: Sequence[str],
               predicate: MatchPredicate) -> CrudOperations:
    return CrudOperations(
        create=to_be_created(local_paths, remote_paths, predicate),
        update=to_be_updated(local_paths, remote_paths, predicate),
        delete=to_be_deleted(local_paths, remote_paths, predicate),
    )


def compute_plan(local: LocalPathSet,
                 remote: RemotePathSet,
                 predicate: MatchPredicate = suffix_match) -> CrudPlan:
    """Compute the CRUD plan for folders and files

    Args:
        local: Local files and derived folders
        remote: Remote files and folders, normalized
        predicate: Resource identity test, ``predicate(local, remote)``

    Returns:
        CRUD plan; ``folders.delete`` deepest-first, everything else
        shallowest-first
    """
    local_files = sort_root_to_bottom(local.files)
    local_folders = sort_root_to_bottom(local.folders)
    remote_files = sort_root_to_bottom(remote.files)
    remote_folders = sort_root_to_bottom(remote.folders)

    folders = _reconcile(local_folders, remote_folders, predicate)
    folders.delete = sort_bottom_to_root(folders.delete)
    files = _reconcile(local_files, remote_files, predicate)

    ambiguous = find_ambiguous_matches(local_folders, remote_folders, predicate)
    ambiguous.update(find_ambiguous_matches(local_files, remote_files, predicate))
    for remote_path, matches in ambiguous.items():
        logger.warning(
            f"Remote resource {remote_path} matches {len(matches)} local resources: "
            f"{', '.join(matches)}"
        )

    plan = CrudPlan(folders=folders, files=files, ambiguous=ambiguous)
    logger.debug(f"Computed plan: {plan.summary()}")
    return plan
