"""Global constants for ui5-deployer"""

from enum import Enum

APP_NAME = "ui5-deployer"
LOG_FORMAT = "%(message)s"

# Project identification
DEFAULT_CONFIG_FILE = "ui5.yaml"

# Deployment root: the two shallowest segments of a local path ("" and the
# application root) are never synthesised as folders
DEFAULT_ROOT_DEPTH = 2

# Path handling
PATH_SEPARATOR = "/"
ESCAPED_FORWARD_SLASH = "%2f"


class TargetType(Enum):
    """Built-in deploy target type names"""
    SAP_NETWEAVER = "sap-netweaver"
    SAP_NETWEAVER_ODATA = "sap-netweaver-odata"
    SAP_CP_CF = "sap-cp-cf"
    SAP_CP_NEO = "sap-cp-neo"


class ResourceKind(Enum):
    """Kind of a remote resource"""
    FOLDER = "folder"
    FILE = "file"


class CrudAction(Enum):
    """Operation applied to a remote resource"""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# ABAP Development Tools (ADT) service paths
ADT_PATH = "sap/bc/adt"
ADT_BSP_PATH = ADT_PATH + "/filestore/ui5-bsp/objects"
ADT_CTS_PATH = ADT_PATH + "/cts/transportrequests"
ADT_CTS_CHECKS_PATH = "/consistencychecks"
ADT_PACKAGE_PATH = ADT_PATH + "/packages"
ADT_CONTENT_PATH = "/content"
ADT_DISCOVERY_PATH = ADT_PATH + "/discovery"
ADT_APP_INDEX_PATH = ADT_PATH + "/filestore/ui5-bsp/appindex"
ADT_FILE_CHARSET = "UTF-8"

# ABAP repository OData service paths
ODATA_PATH = "sap/opu/odata/UI5/ABAP_REPOSITORY_SRV"
ODATA_METADATA_PATH = ODATA_PATH + "/$metadata"

# Content types
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"
CONTENT_TYPE_ATOM_XML = "application/atom+xml"

# XML namespaces
ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"

# CLI executables
CF_EXECUTABLE = "cf"
NEO_EXECUTABLE = "neo"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "UD001"
    UNKNOWN_TARGET_TYPE = "UD002"
    DUPLICATE_TARGET_TYPE = "UD003"
    CONNECTION_FAILED = "UD004"
    ADT_VALIDATION_FAILED = "UD005"
    DISCOVERY_FAILED = "UD006"
    TRANSPORT_FAILED = "UD007"
    COMMAND_FAILED = "UD008"
    LIFECYCLE_VIOLATION = "UD009"


# Environment variables
ENV_CONFIG_PATH = "UI5_DEPLOYER_CONFIG"
ENV_LOG_LEVEL = "UI5_DEPLOYER_LOG_LEVEL"
ENV_USERNAME = "UI5_DEPLOYER_USERNAME"
ENV_PASSWORD = "UI5_DEPLOYER_PASSWORD"
ENV_TRANSPORT_REQUEST = "UI5_DEPLOYER_TRANSPORT_REQUEST"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ROCKET = "🚀"
