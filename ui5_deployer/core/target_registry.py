"""Registry of deploy target types"""

from typing import Dict, List, Type

from ..api.exceptions import DuplicateTargetTypeError, UnknownTargetTypeError
from ..targets.base import DeployTarget


class TargetRegistry:
    """Maps a target type name to its implementation

    A registry is a plain value; build one at startup and pass it to
    :func:`ui5_deployer.api.deployer.deploy`.
    """

    def __init__(self):
        self._targets: Dict[str, Type[DeployTarget]] = {}

    def register(self, type_name: str, target_class: Type[DeployTarget]) -> None:
        """Register a target type

        Args:
            type_name: Unique identifier for the type
            target_class: Implementation class

        Raises:
            DuplicateTargetTypeError: If the name is already registered
        """
        if type_name in self._targets:
            raise DuplicateTargetTypeError(type_name)
        self._targets[type_name] = target_class

    def get(self, type_name: str) -> Type[DeployTarget]:
        """Get a target type

        Args:
            type_name: Unique identifier for the type

        Returns:
            Implementation class

        Raises:
            UnknownTargetTypeError: If no such type is registered
        """
        try:
            return self._targets[type_name]
        except KeyError:
            raise UnknownTargetTypeError(type_name) from None

    def is_registered(self, type_name: str) -> bool:
        return type_name in self._targets

    def get_supported_types(self) -> List[str]:
        """Get registered type names in registration order"""
        return list(self._targets)


def create_default_registry() -> TargetRegistry:
    """Create a registry holding the built-in targets"""
    from ..targets import BUILTIN_TARGETS

    registry = TargetRegistry()
    for target_class in BUILTIN_TARGETS:
        registry.register(target_class.type_name, target_class)
    return registry
