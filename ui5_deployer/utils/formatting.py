"""Formatting helpers for deploy logs and CLI output"""

from typing import List

from ..constants import CrudAction, ResourceKind
from ..models.plan import CrudPlan

_SIZE_UNITS = ("B", "KB", "MB", "GB")

# Remote operations in the order the sync executor runs them
_PLAN_ORDER = (
    (ResourceKind.FILE, CrudAction.DELETE),
    (ResourceKind.FOLDER, CrudAction.DELETE),
    (ResourceKind.FILE, CrudAction.UPDATE),
    (ResourceKind.FOLDER, CrudAction.CREATE),
    (ResourceKind.FILE, CrudAction.CREATE),
)


def count_of(count: int, noun: str) -> str:
    """``count_of(1, 'file')`` -> ``'1 file'``, ``count_of(2, 'file')`` -> ``'2 files'``"""
    return f"{count} {noun if count == 1 else noun + 's'}"


def format_size(num_bytes: int) -> str:
    """Human readable size of an upload archive"""
    size = float(num_bytes)
    for unit in _SIZE_UNITS[:-1]:
        if size < 1024:
            break
        size /= 1024
    else:
        unit = _SIZE_UNITS[-1]
    return f"{int(size)} {unit}" if unit == "B" else f"{size:.1f} {unit}"


def format_elapsed(seconds: float) -> str:
    """
    Format the wall time of a deploy run

    Sub-second runs are shown in milliseconds, runs under a minute with one
    decimal and longer ones as minutes and whole seconds.

    Examples:
        >>> format_elapsed(0.25)
        '250ms'
        >>> format_elapsed(65)
        '1m 5s'
    """
    if seconds < 1:
        return f"{round(seconds * 1000)}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, rest = divmod(int(seconds), 60)
    return f"{minutes}m {rest}s"


def format_plan_counts(plan: CrudPlan) -> str:
    """
    Summarize the remote operations of a plan in execution order

    Folder updates are not sent to the server and are left out.

    Args:
        plan: Computed CRUD plan

    Returns:
        E.g. ``"1 file to delete, 2 folders to create"``, or
        ``"nothing to change"`` for an empty plan
    """
    parts: List[str] = []
    for kind, action in _PLAN_ORDER:
        count = len(plan.for_kind(kind).get(action))
        if count:
            parts.append(f"{count_of(count, kind.value)} to {action.value}")
    return ", ".join(parts) if parts else "nothing to change"
