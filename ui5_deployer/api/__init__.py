# ui5_deployer/api/__init__.py
"""Public API of ui5-deployer

The deploy entry points live in :mod:`ui5_deployer.api.deployer`.
"""

from .exceptions import (
    DeployerError,
    ConfigError,
    UnknownTargetTypeError,
    DuplicateTargetTypeError,
    TargetConnectionError,
    AdtValidationError,
    DiscoveryError,
    TransportError,
    CommandError,
    LifecycleError,
)

__all__ = [
    'DeployerError',
    'ConfigError',
    'UnknownTargetTypeError',
    'DuplicateTargetTypeError',
    'TargetConnectionError',
    'AdtValidationError',
    'DiscoveryError',
    'TransportError',
    'CommandError',
    'LifecycleError',
]
