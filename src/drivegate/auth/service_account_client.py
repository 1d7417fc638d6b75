"""Service-account client utilities for drivegate."""

from __future__ import annotations

import logging
from typing import Any, Optional

from drivegate.errors import AuthError

from .service_account_info import ServiceAccountInfo

logger = logging.getLogger(__name__)


class ServiceAccountClient:
    """Load service-account credentials and build Drive API transports."""

    def __init__(self, info: ServiceAccountInfo) -> None:
        self._info = info

    @property
    def info(self) -> ServiceAccountInfo:
        return self._info

    def load_credentials(self):
        """
        Read the secret file and build scoped service-account credentials.

        The returned credentials carry no access token yet; call refresh()
        to run the token exchange.

        Returns:
            google.oauth2.service_account.Credentials

        Raises:
            AuthError: if the secret file cannot be read or parsed.
        """
        try:
            from google.oauth2 import service_account
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth"},
                cause=exc,
            ) from exc

        credentials_file = self._info.credentials_file
        try:
            creds = service_account.Credentials.from_service_account_file(
                credentials_file,
                scopes=list(self._info.scopes),
            )
        except Exception as exc:
            raise AuthError(
                "Failed to load service account credentials",
                details={"credentials_file": credentials_file},
                cause=exc,
            ) from exc

        logger.info(
            "Loaded service account credentials for %s",
            getattr(creds, "service_account_email", "<unknown>"),
        )
        return creds

    def refresh(self, creds) -> None:
        """
        Exchange the signed assertion for a short-lived access token.

        Raises:
            AuthError: if the token endpoint rejects the credentials or is unreachable.
        """
        try:
            from google.auth.transport.requests import Request
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth[requests]"},
                cause=exc,
            ) from exc

        try:
            creds.refresh(Request())
        except Exception as exc:
            raise AuthError(
                "Failed to obtain access token for service account",
                details={"credentials_file": self._info.credentials_file},
                cause=exc,
            ) from exc

    def build_drive_service(self, creds, *, timeout: Optional[float] = None) -> Any:
        """
        Build a Drive v3 API service resource over an authorized httplib2 transport.

        Returns:
            googleapiclient.discovery.Resource
        """
        try:
            import httplib2
            from google_auth_httplib2 import AuthorizedHttp
            from googleapiclient.discovery import build
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                details={"hint": "Install google-api-python-client"},
                cause=exc,
            ) from exc

        try:
            http = AuthorizedHttp(creds, http=httplib2.Http(timeout=timeout))
            return build("drive", "v3", http=http, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    def build_session(self, creds) -> Any:
        """
        Build an authorized requests session for streaming media downloads.

        Returns:
            google.auth.transport.requests.AuthorizedSession
        """
        try:
            from google.auth.transport.requests import AuthorizedSession
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth[requests]"},
                cause=exc,
            ) from exc

        return AuthorizedSession(creds)
