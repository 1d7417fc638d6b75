"""drivegate public API."""

from __future__ import annotations

__version__ = "0.1.0"

from drivegate.auth import CredentialHolder, ServiceAccountClient, ServiceAccountInfo
from drivegate.controller import DownloadStream, DriveController
from drivegate.errors import (
    ApiError,
    AuthError,
    ConflictError,
    ConnectError,
    DriveGateError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    UploadStepError,
    map_http_error,
)
from drivegate.manager import GatewayManager
from drivegate.models import (
    ByFileId,
    ByFileName,
    MetadataQuery,
    RemoteFile,
    UploadRequest,
    UploadStep,
    parse_metadata_query,
)
from drivegate.settings import Settings, get_settings

__all__ = [
    "__version__",
    # High-level
    "GatewayManager",
    "DriveController",
    "DownloadStream",
    "Settings",
    "get_settings",
    # Auth
    "ServiceAccountInfo",
    "ServiceAccountClient",
    "CredentialHolder",
    # Models
    "RemoteFile",
    "UploadRequest",
    "UploadStep",
    "ByFileId",
    "ByFileName",
    "MetadataQuery",
    "parse_metadata_query",
    # Errors
    "DriveGateError",
    "AuthError",
    "ConnectError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "UploadStepError",
    "HttpErrorInfo",
    "map_http_error",
]
