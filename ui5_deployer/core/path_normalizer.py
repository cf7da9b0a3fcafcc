"""Remote path normalization

Remote listings identify resources by ids such as ``ZAPP%2fjs%2fmain.js``.
Local resources are addressed as ``/js/main.js``. The helpers here convert
the former into the latter so both sets can be compared.
"""

import re
from typing import Iterable, List

from ..constants import ESCAPED_FORWARD_SLASH, PATH_SEPARATOR

_ESCAPED_SLASH_RE = re.compile(re.escape(ESCAPED_FORWARD_SLASH), re.IGNORECASE)


def unescape_separators(raw_path: str) -> str:
    """Replace every escaped forward slash with a literal separator"""
    return _ESCAPED_SLASH_RE.sub(PATH_SEPARATOR, raw_path)


def normalize_remote_path(raw_path: str, app_root: str) -> str:
    """Convert a remote resource id into a deployment-root relative path

    Args:
        raw_path: Remote id, possibly with escaped separators
        app_root: Name of the application root folder (BSP application)

    Returns:
        Relative path in the same namespace as local resource paths

    Examples:
        >>> normalize_remote_path("ZAPP%2fjs%2fmain.js", "ZAPP")
        '/js/main.js'
    """
    path = unescape_separators(raw_path)
    if app_root and path.startswith(app_root):
        path = path[len(app_root):]
    return path


def normalize_remote_paths(raw_paths: Iterable[str], app_root: str) -> List[str]:
    """Normalize a batch of remote ids, keeping their order"""
    return [normalize_remote_path(raw, app_root) for raw in raw_paths]
