# ui5_deployer/services/__init__.py
"""Service layer for ui5-deployer"""

from .config_service import ConfigService

__all__ = ['ConfigService']
