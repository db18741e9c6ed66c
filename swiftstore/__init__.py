"""Swiftstore Python SDK.

An asyncio client for OpenStack Swift compatible object storage, supporting
TempAuth (v1), Keystone v2 and Keystone v3 authentication.
"""

__version__ = "0.1.0"

from swiftstore.authenticator import (
    Authenticator,
    RetryingAuthenticator,
    UnsupportedAuthenticator,
    get_authenticator_for_version,
)
from swiftstore.auth_v1 import V1Authenticator
from swiftstore.auth_v2 import V2Authenticator
from swiftstore.auth_v3 import V3Authenticator
from swiftstore.client import SwiftClient
from swiftstore.config import (
    ConnectionConfig,
    UnsupportedConfig,
    V1Config,
    V2Config,
    V3Config,
    parse_connection_config,
)
from swiftstore.container import Container
from swiftstore.exceptions import (
    AuthError,
    ConfigurationError,
    ConnectionError,
    CreateError,
    DeleteError,
    DownloadError,
    ListError,
    MetadataError,
    SwiftError,
    TimeoutError,
    UpdateError,
    UploadError,
)
from swiftstore.models import (
    AuthResult,
    ContainerRecord,
    EndpointType,
    FolderFilter,
    FolderRecord,
    ListingRecord,
    ObjectFilter,
    ObjectInfo,
    ObjectRecord,
    PrefixFilter,
    RangeFilter,
)

__all__ = [
    "AuthError",
    "AuthResult",
    "Authenticator",
    "ConfigurationError",
    "ConnectionConfig",
    "ConnectionError",
    "Container",
    "ContainerRecord",
    "CreateError",
    "DeleteError",
    "DownloadError",
    "EndpointType",
    "FolderFilter",
    "FolderRecord",
    "ListError",
    "ListingRecord",
    "MetadataError",
    "ObjectFilter",
    "ObjectInfo",
    "ObjectRecord",
    "PrefixFilter",
    "RangeFilter",
    "RetryingAuthenticator",
    "SwiftClient",
    "SwiftError",
    "TimeoutError",
    "UnsupportedAuthenticator",
    "UnsupportedConfig",
    "UpdateError",
    "UploadError",
    "V1Authenticator",
    "V1Config",
    "V2Authenticator",
    "V2Config",
    "V3Authenticator",
    "V3Config",
    "get_authenticator_for_version",
    "parse_connection_config",
]
