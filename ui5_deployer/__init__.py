"""UI5 Deployer - Deploy UI5 applications to SAP systems.

Uploads the build output of a UI5 project to an ABAP repository through
the ADT filestore or the repository OData service, or deploys it with the
SAP Cloud Platform command line tools.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .api.deployer import Deployer, deploy, deploy_async
from .core.target_registry import TargetRegistry, create_default_registry
from .core.reconciler import compute_plan, build_local_path_set

# Data models
from .models import (
    ProjectConfig,
    DeployerConfig,
    CrudPlan,
    CrudOperations,
    SyncReport,
    DeployResult,
    DeployState,
)

# Exceptions
from .api.exceptions import (
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
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Deployer",
    "TargetRegistry",

    # Core API functions
    "deploy",
    "deploy_async",
    "create_default_registry",
    "compute_plan",
    "build_local_path_set",

    # Data models
    "ProjectConfig",
    "DeployerConfig",
    "CrudPlan",
    "CrudOperations",
    "SyncReport",
    "DeployResult",
    "DeployState",

    # Exceptions
    "DeployerError",
    "ConfigError",
    "UnknownTargetTypeError",
    "DuplicateTargetTypeError",
    "TargetConnectionError",
    "AdtValidationError",
    "DiscoveryError",
    "TransportError",
    "CommandError",
    "LifecycleError",
]
