"""Public error exports for drivegate."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
    "DriveGateError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "ConnectError",
    "UploadStepError",
    "HttpErrorInfo",
    "map_http_error",
]
