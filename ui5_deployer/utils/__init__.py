# ui5_deployer/utils/__init__.py
"""Utility functions for ui5-deployer"""

from .file_utils import is_binary_content, create_zip_archive
from .formatting import count_of, format_elapsed, format_plan_counts, format_size
from .async_utils import run_async
from .process_utils import run_command

__all__ = [
    'is_binary_content',
    'create_zip_archive',
    'format_size',
    'format_elapsed',
    'format_plan_counts',
    'count_of',
    'run_async',
    'run_command',
]
