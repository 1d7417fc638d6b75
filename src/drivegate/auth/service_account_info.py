"""Service-account authentication information for drivegate."""

from __future__ import annotations

from dataclasses import dataclass

DRIVE_SCOPE: str = "https://www.googleapis.com/auth/drive"


@dataclass(slots=True, frozen=True)
class ServiceAccountInfo:
    """
    Where to find the service-account secret and which scopes to request.

    The secret is a Google service-account JSON key (client_email,
    private_key, token_uri, ...). Its contents are not validated here;
    problems surface when the credentials are loaded or exchanged.
    """

    credentials_file: str
    scopes: tuple[str, ...] = (DRIVE_SCOPE,)

    def __post_init__(self) -> None:
        if not isinstance(self.credentials_file, str) or not self.credentials_file.strip():
            raise ValueError("ServiceAccountInfo.credentials_file must be a non-empty string")

        if not self.scopes or not all(isinstance(s, str) and s.strip() for s in self.scopes):
            raise ValueError("ServiceAccountInfo.scopes must be a non-empty sequence of strings")
