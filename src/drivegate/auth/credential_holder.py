"""Process-wide cache of service-account credentials."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from .service_account_client import ServiceAccountClient

logger = logging.getLogger(__name__)

REFRESH_MARGIN = timedelta(minutes=5)


class CredentialHolder:
    """
    Lazily load service-account credentials once and hand them out to requests.

    The token exchange happens only when no token is held or the held one
    expires within `refresh_margin`. Loading and refreshing run under a lock,
    so concurrent requests that find the token stale wait for a single
    exchange instead of each running their own.

    The margin keeps a token handed out here from expiring before the
    transport sends the request. Should it expire anyway, the transport
    (`AuthorizedHttp` / `AuthorizedSession`) refreshes the shared object
    itself, outside this lock.

    A failed load leaves the holder empty; the next call tries again.
    """

    def __init__(
        self,
        client: ServiceAccountClient,
        *,
        refresh_margin: timedelta = REFRESH_MARGIN,
    ) -> None:
        self._client = client
        self._refresh_margin = refresh_margin
        self._lock = threading.Lock()
        self._credentials: Optional[Any] = None

    @property
    def client(self) -> ServiceAccountClient:
        return self._client

    def get(self):
        """
        Return valid credentials, loading or refreshing them if needed.

        Raises:
            AuthError: if loading or the token exchange fails.
        """
        creds = self._credentials
        if creds is not None and not self._needs_refresh(creds):
            return creds

        with self._lock:
            if self._credentials is None:
                self._credentials = self._client.load_credentials()

            creds = self._credentials
            if self._needs_refresh(creds):
                logger.debug("Refreshing service account access token")
                self._client.refresh(creds)
            return creds

    def reset(self) -> None:
        """Drop cached credentials; the next get() reloads the secret file."""
        with self._lock:
            self._credentials = None

    def _needs_refresh(self, creds: Any) -> bool:
        if not creds.valid:
            return True
        # google-auth keeps expiry as naive UTC.
        expiry = getattr(creds, "expiry", None)
        if expiry is None:
            return False
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        return expiry - self._refresh_margin <= now
