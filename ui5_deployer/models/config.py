"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class ConnectionConfig:
    """Connection to the target system"""

    url: str = ""
    strict_ssl: bool = False
    ssl_certificate_path: Optional[str] = None
    proxy: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"url": self.url, "strictSSL": self.strict_ssl}
        if self.ssl_certificate_path:
            data["SSLCertificatePath"] = self.ssl_certificate_path
        if self.proxy:
            data["proxy"] = self.proxy
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConnectionConfig':
        """Create from dictionary"""
        return cls(
            url=data.get("url", ""),
            strict_ssl=bool(data.get("strictSSL", False)),
            ssl_certificate_path=data.get("SSLCertificatePath"),
            proxy=data.get("proxy"),
        )


@dataclass
class Credentials:
    """User credentials for the target system"""

    username: str = ""
    password: str = field(default="", repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {"username": self.username, "password": self.password}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Credentials':
        """Create from dictionary"""
        return cls(
            username=data.get("username") or "",
            password=data.get("password") or "",
        )


@dataclass
class AbapRepositoryConfig:
    """ABAP repository settings for NetWeaver targets"""

    bsp_application: str = ""
    bsp_application_text: str = ""
    package: str = ""
    transport_request: str = ""
    client: Optional[str] = None
    language: Optional[str] = None
    app_index_calculate: bool = False
    skip_adt_validations: bool = False

    @property
    def is_local_package(self) -> bool:
        """Local packages ($TMP, $ZPKG, ...) need no transport request"""
        return self.package.startswith("$")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "bspApplication": self.bsp_application,
            "bspApplicationText": self.bsp_application_text,
            "package": self.package,
            "transportRequest": self.transport_request,
            "appIndexCalculate": self.app_index_calculate,
            "skipAdtValidations": self.skip_adt_validations,
        }
        if self.client:
            data["client"] = self.client
        if self.language:
            data["language"] = self.language
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AbapRepositoryConfig':
        """Create from dictionary"""
        client = data.get("client")
        return cls(
            bsp_application=data.get("bspApplication", ""),
            bsp_application_text=data.get("bspApplicationText", ""),
            package=data.get("package", ""),
            transport_request=data.get("transportRequest") or "",
            client=str(client) if client is not None else None,
            language=data.get("language"),
            app_index_calculate=bool(data.get("appIndexCalculate", False)),
            skip_adt_validations=bool(data.get("skipAdtValidations", False)),
        )


@dataclass
class CloudFoundryConfig:
    """Cloud Foundry CLI settings"""

    cli_path: str = ""
    org: str = ""
    space: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"cliPath": self.cli_path, "org": self.org, "space": self.space}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CloudFoundryConfig':
        return cls(
            cli_path=data.get("cliPath", ""),
            org=data.get("org", ""),
            space=data.get("space", ""),
        )


@dataclass
class NeoConfig:
    """Neo CLI settings"""

    cli_path: str = ""
    account: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"cliPath": self.cli_path, "account": self.account}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NeoConfig':
        return cls(
            cli_path=data.get("cliPath", ""),
            account=data.get("account", ""),
        )


@dataclass
class DeployerConfig:
    """The ``deployer`` section of a project configuration"""

    type: str
    source_path: str = "dist/"
    excludes: List[str] = field(default_factory=list)
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    credentials: Credentials = field(default_factory=Credentials)
    abap_repository: Optional[AbapRepositoryConfig] = None
    cloud_foundry: Optional[CloudFoundryConfig] = None
    neo: Optional[NeoConfig] = None

    def __post_init__(self):
        """Validate deployer configuration"""
        if not self.type:
            raise ValueError("Deployer configuration requires 'type'")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "type": self.type,
            "sourcePath": self.source_path,
            "connection": self.connection.to_dict(),
            "credentials": self.credentials.to_dict(),
        }
        if self.excludes:
            data["resources"] = {"excludes": list(self.excludes)}
        if self.abap_repository:
            data["abapRepository"] = self.abap_repository.to_dict()

        platform = {}
        if self.cloud_foundry:
            platform["cloudFoundry"] = self.cloud_foundry.to_dict()
        if self.neo:
            platform["neo"] = self.neo.to_dict()
        if platform:
            data["sapCloudPlatform"] = platform

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeployerConfig':
        """Create from dictionary"""
        resources = data.get("resources") or {}
        platform = data.get("sapCloudPlatform") or {}
        abap_repository = data.get("abapRepository")

        return cls(
            type=data.get("type", ""),
            source_path=data.get("sourcePath", "dist/"),
            excludes=list(resources.get("excludes") or []),
            connection=ConnectionConfig.from_dict(data.get("connection") or {}),
            credentials=Credentials.from_dict(data.get("credentials") or {}),
            abap_repository=(
                AbapRepositoryConfig.from_dict(abap_repository)
                if abap_repository is not None else None
            ),
            cloud_foundry=(
                CloudFoundryConfig.from_dict(platform["cloudFoundry"])
                if platform.get("cloudFoundry") is not None else None
            ),
            neo=NeoConfig.from_dict(platform["neo"]) if platform.get("neo") is not None else None,
        )


@dataclass
class ProjectConfig:
    """Complete project configuration"""

    name: str
    deployer: DeployerConfig
    path: str = "."
    project_type: str = "application"

    @property
    def source_dir(self) -> Path:
        """Directory holding the build output to deploy"""
        return Path(self.path) / self.deployer.source_path

    def get_virtual_excludes(self) -> List[str]:
        """Exclude patterns rewritten relative to the source path

        ``dist/test/**`` with source path ``dist/`` becomes ``/test/**``.
        """
        source_path = self.deployer.source_path
        return [pattern.replace(source_path, "/", 1) for pattern in self.deployer.excludes]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "type": self.project_type,
            "metadata": {"name": self.name},
            "deployer": self.deployer.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = ".") -> 'ProjectConfig':
        """Create from dictionary"""
        metadata = data.get("metadata") or {}
        if "deployer" not in data:
            raise ValueError("Project configuration has no 'deployer' section")

        return cls(
            name=metadata.get("name", ""),
            deployer=DeployerConfig.from_dict(data["deployer"] or {}),
            path=path,
            project_type=data.get("type", "application"),
        )
