"""Command line interface for ui5-deployer"""

from .main import cli, main

__all__ = ['cli', 'main']
