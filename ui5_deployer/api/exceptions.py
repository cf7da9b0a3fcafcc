"""Exception definitions for ui5-deployer API"""

from typing import Optional

from ..constants import ErrorCode


class DeployerError(Exception):
    """Base exception for ui5-deployer"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(DeployerError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class UnknownTargetTypeError(DeployerError):
    """No deploy target registered under the requested name"""

    def __init__(self, type_name: str):
        super().__init__(f"Unknown type *{type_name}*", ErrorCode.UNKNOWN_TARGET_TYPE)
        self.type_name = type_name


class DuplicateTargetTypeError(DeployerError):
    """A deploy target is already registered under the name"""

    def __init__(self, type_name: str):
        super().__init__(f"Type already registered *{type_name}*", ErrorCode.DUPLICATE_TARGET_TYPE)
        self.type_name = type_name


class TargetConnectionError(DeployerError):
    """Connection or authentication against the target failed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONNECTION_FAILED)


class AdtValidationError(TargetConnectionError):
    """ADT discovery lacks a required service"""

    def __init__(self, missing_paths: list):
        message = "ADT does not have all required services available: " + ", ".join(missing_paths)
        super().__init__(message)
        self.error_code = ErrorCode.ADT_VALIDATION_FAILED
        self.missing_paths = missing_paths


class DiscoveryError(DeployerError):
    """Remote resource listing could not be read"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.DISCOVERY_FAILED)


class TransportError(DeployerError):
    """An HTTP call to the target failed"""

    def __init__(self, status_code: int, reason: str, url: Optional[str] = None):
        super().__init__(f"{status_code} - {reason}", ErrorCode.TRANSPORT_FAILED)
        self.status_code = status_code
        self.reason = reason
        self.url = url


class CommandError(DeployerError):
    """A CLI subprocess exited with a non-zero code"""

    def __init__(self, command: str, returncode: int):
        super().__init__(f"Child process exited with code {returncode}", ErrorCode.COMMAND_FAILED)
        self.command = command
        self.returncode = returncode


class LifecycleError(DeployerError):
    """Illegal deploy lifecycle transition"""

    def __init__(self, current: str, requested: str):
        message = f"Cannot move deploy lifecycle from {current} to {requested}"
        super().__init__(message, ErrorCode.LIFECYCLE_VIOLATION)
        self.current = current
        self.requested = requested
