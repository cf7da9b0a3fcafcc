"""CLI commands"""

from . import deploy

__all__ = [
    "deploy",
]
