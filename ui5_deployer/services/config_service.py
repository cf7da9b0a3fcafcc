"""Project configuration service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import (
    DEFAULT_CONFIG_FILE,
    ENV_CONFIG_PATH,
    ENV_PASSWORD,
    ENV_TRANSPORT_REQUEST,
    ENV_USERNAME,
)
from ..models.config import Credentials, ProjectConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Loads a project configuration and applies overrides

    Values are taken from, in order of precedence: explicit overrides
    (command line), environment variables, the YAML file.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config service

        Args:
            config_path: Project configuration file; falls back to
                ``UI5_DEPLOYER_CONFIG`` and then ``ui5.yaml``
        """
        self.config_path = self.resolve_config_path(config_path)

    @staticmethod
    def resolve_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
        if config_path:
            return Path(config_path)
        return Path(os.environ.get(ENV_CONFIG_PATH) or DEFAULT_CONFIG_FILE)

    def load_data(self) -> Dict[str, Any]:
        """Load the YAML document carrying the ``deployer`` section

        Returns:
            Raw project document

        Raises:
            ConfigError: If the file is missing, invalid or has no deployer
        """
        if not self.config_path.is_file():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        # Expand ${VAR} references before parsing
        content = os.path.expandvars(content)

        try:
            documents = [doc for doc in yaml.safe_load_all(content) if doc]
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        for document in documents:
            if isinstance(document, dict) and "deployer" in document:
                return document

        raise ConfigError(f"No 'deployer' configuration found in {self.config_path}")

    def load_project(self,
                     transport_request: Optional[str] = None,
                     username: Optional[str] = None,
                     password: Optional[str] = None,
                     space: Optional[str] = None) -> ProjectConfig:
        """
        Load the project configuration with overrides applied

        Args:
            transport_request: ABAP transport request
            username: User name for the target system
            password: Password for the target system
            space: Cloud Foundry space

        Returns:
            Project configuration

        Raises:
            ConfigError: If the configuration is invalid
        """
        data = self.load_data()
        try:
            project = ProjectConfig.from_dict(data, path=str(self.config_path.parent))
        except (ValueError, TypeError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}") from e

        self.apply_overrides(
            project,
            transport_request=transport_request or os.environ.get(ENV_TRANSPORT_REQUEST),
            username=username or os.environ.get(ENV_USERNAME),
            password=password or os.environ.get(ENV_PASSWORD),
            space=space,
        )
        logger.debug(f"Loaded project {project.name} from {self.config_path}")
        return project

    @staticmethod
    def apply_overrides(project: ProjectConfig,
                        transport_request: Optional[str] = None,
                        username: Optional[str] = None,
                        password: Optional[str] = None,
                        space: Optional[str] = None) -> ProjectConfig:
        """Apply command line overrides to a loaded project

        The transport request only applies to targets with an ABAP repository.
        User name and password replace the configured credentials together.
        """
        deployer = project.deployer
        if transport_request and deployer.abap_repository is not None:
            deployer.abap_repository.transport_request = transport_request
        if username or password:
            deployer.credentials = Credentials(username=username or "", password=password or "")
        if space:
            if deployer.cloud_foundry is None:
                raise ConfigError("--space requires a 'sapCloudPlatform.cloudFoundry' configuration")
            deployer.cloud_foundry.space = space
        return project
