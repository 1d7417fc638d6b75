"""Public auth exports for drivegate."""

from __future__ import annotations

from .credential_holder import CredentialHolder
from .service_account_client import ServiceAccountClient
from .service_account_info import DRIVE_SCOPE, ServiceAccountInfo

__all__ = ["DRIVE_SCOPE", "ServiceAccountInfo", "ServiceAccountClient", "CredentialHolder"]
