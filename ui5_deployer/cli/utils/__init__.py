"""CLI utility functions"""

from .output import (
    console,
    format_plan,
    format_sync_report,
    format_deploy_result,
    format_error,
)

__all__ = [
    'console',
    'format_plan',
    'format_sync_report',
    'format_deploy_result',
    'format_error',
]
