"""Exception hierarchy and HTTP error mapping for drivegate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from drivegate.models.upload import UploadStep


class DriveGateError(Exception):
    """
    Base exception for drivegate.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class AuthError(DriveGateError):
    """Raised when the service-account credential cannot be loaded or exchanged."""


class PermissionError(DriveGateError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(DriveGateError):
    """Raised when request arguments are invalid (HTTP 400, empty ids, etc.)."""


class NotFoundError(DriveGateError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(DriveGateError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(DriveGateError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(DriveGateError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(DriveGateError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(DriveGateError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


class ConnectError(DriveGateError):
    """Raised when an authenticated Drive controller cannot be built."""


class UploadStepError(DriveGateError):
    """Raised when one step of upload-with-replace fails; `step` names it."""

    def __init__(self, step: "UploadStep", cause: BaseException) -> None:
        super().__init__(
            f"Upload failed at step '{step.value}': {cause}",
            details={"step": step.value},
            cause=cause,
        )
        self.step = step


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to drivegate exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DriveGateError:
    """
    Map an upstream HTTP error to a drivegate exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError, or QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
