from .client import HydrusClient
from .config_types import ClientConfig
from .constants import API_VERSION, FileStatus, PageType, Permission, ServiceStatus, TagAction, UrlType
from .errors import (
    AuthError,
    HydrusClientError,
    InvalidArgumentError,
    MissingArgumentError,
    NetworkError,
    TransportError,
    VersionMismatchError,
)

__all__ = [
    "HydrusClient",
    "ClientConfig",
    "API_VERSION",
    "FileStatus",
    "PageType",
    "Permission",
    "ServiceStatus",
    "TagAction",
    "UrlType",
    "AuthError",
    "HydrusClientError",
    "InvalidArgumentError",
    "MissingArgumentError",
    "NetworkError",
    "TransportError",
    "VersionMismatchError",
]
