"""Google Drive API controller."""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Callable, Optional, TypeVar
from urllib.parse import quote

from drivegate.auth import ServiceAccountClient
from drivegate.errors import (
    ApiError,
    AuthError,
    DriveGateError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    map_http_error,
)
from drivegate.models import RemoteFile
from drivegate.util.mime import DEFAULT_MIME

from .download import DEFAULT_CHUNK_SIZE, DownloadStream
from .fields import FILE_FIELDS, LIST_FIELDS
from .query import in_parents

T = TypeVar("T")

MEDIA_URL: str = "https://www.googleapis.com/drive/v3/files/{file_id}"


class DriveController:
    """
    Drive API controller.

    Every method issues a single synchronous call (list may page) and maps
    failures onto the drivegate error hierarchy. Nothing is retried.

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
    """

    def __init__(
        self,
        client: ServiceAccountClient,
        credentials: Any,
        *,
        supports_all_drives: bool = True,
        timeout: Optional[float] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        page_size: Optional[int] = None,
        follow_pages: bool = False,
    ) -> None:
        self._service = client.build_drive_service(credentials, timeout=timeout)
        self._session_factory: Callable[[], Any] = lambda: client.build_session(credentials)
        self._configure(
            supports_all_drives=supports_all_drives,
            timeout=timeout,
            chunk_size=chunk_size,
            page_size=page_size,
            follow_pages=follow_pages,
        )

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        session: Any = None,
        supports_all_drives: bool = True,
        timeout: Optional[float] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        page_size: Optional[int] = None,
        follow_pages: bool = False,
    ) -> "DriveController":
        """Create controller from a pre-built Drive service and session (useful for tests)."""
        obj = cls.__new__(cls)
        obj._service = service
        obj._session_factory = lambda: session
        obj._configure(
            supports_all_drives=supports_all_drives,
            timeout=timeout,
            chunk_size=chunk_size,
            page_size=page_size,
            follow_pages=follow_pages,
        )
        return obj

    def _configure(
        self,
        *,
        supports_all_drives: bool,
        timeout: Optional[float],
        chunk_size: int,
        page_size: Optional[int],
        follow_pages: bool,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._timeout = timeout
        self._chunk_size = chunk_size
        self._page_size = page_size
        self._follow_pages = follow_pages

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str) -> RemoteFile:
        _require_id(file_id)
        req = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return RemoteFile.from_api(data)

    def find(self, query: str) -> list[RemoteFile]:
        """
        Run a Drive search query.

        Only the first page is returned unless the controller was built
        with follow_pages=True.
        """
        if not query:
            raise InvalidArgumentError("query must be a non-empty string")

        results: list[RemoteFile] = []
        page_token: Optional[str] = None

        while True:
            kwargs: dict[str, Any] = {
                "q": query,
                "fields": LIST_FIELDS,
                **self._common_list_kwargs(),
            }
            if self._page_size is not None:
                kwargs["pageSize"] = self._page_size
            if page_token:
                kwargs["pageToken"] = page_token

            req = self._service.files().list(**kwargs)
            data = self._execute(req.execute)
            for f in data.get("files", []) or []:
                results.append(RemoteFile.from_api(f))

            page_token = data.get("nextPageToken")
            if not self._follow_pages or not page_token:
                break

        return results

    def list_children(self, folder_id: str) -> list[RemoteFile]:
        return self.find(in_parents(folder_id))

    def create_file(
        self,
        name: str,
        mime_type: str,
        content: BinaryIO,
        parent_id: str,
    ) -> RemoteFile:
        """Upload `content` as a new file named `name` under `parent_id`."""
        if not name:
            raise InvalidArgumentError("name must be a non-empty string")
        _require_id(parent_id)

        try:
            from googleapiclient.http import MediaIoBaseUpload
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                cause=exc,
            ) from exc

        mime = mime_type or DEFAULT_MIME
        media = MediaIoBaseUpload(content, mimetype=mime, resumable=True)
        body = {"name": name, "mimeType": mime, "parents": [parent_id]}

        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return RemoteFile.from_api(data)

    def download(self, file_id: str) -> DownloadStream:
        """
        Open a streaming media download.

        The caller owns the returned stream and must close it (or exhaust
        its chunk iterator).
        """
        _require_id(file_id)

        params: dict[str, str] = {"alt": "media"}
        if self._supports_all_drives:
            params["supportsAllDrives"] = "true"
        url = MEDIA_URL.format(file_id=quote(file_id, safe=""))

        session = self._session_factory()
        try:
            resp = session.get(url, params=params, stream=True, timeout=self._timeout)
        except Exception as exc:
            session.close()
            raise self._map_exception(exc) from exc

        if resp.status_code >= 400:
            try:
                info = _response_to_info(resp)
            finally:
                resp.close()
                session.close()
            raise map_http_error(info)

        return DownloadStream(resp, chunk_size=self._chunk_size, session=session)

    def delete(self, file_id: str) -> None:
        _require_id(file_id)
        req = self._service.files().delete(
            fileId=file_id,
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except DriveGateError:
            raise
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> DriveGateError:
        try:
            from googleapiclient.errors import HttpError
        except Exception:  # pragma: no cover
            HttpError = None  # type: ignore[assignment]

        try:
            from google.auth.exceptions import RefreshError
        except Exception:  # pragma: no cover
            RefreshError = None  # type: ignore[assignment]

        if HttpError is not None and isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if RefreshError is not None and isinstance(exc, RefreshError):
            return AuthError("Access token refresh failed", cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _require_id(file_id: str) -> None:
    if not isinstance(file_id, str) or not file_id:
        raise InvalidArgumentError("file id must be a non-empty string")


def _error_payload_to_info(
    status_code: Any,
    reason: Any,
    content: Any,
) -> HttpErrorInfo:
    message = None
    details: dict[str, Any] = {}

    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    resp = getattr(exc, "resp", None)
    return _error_payload_to_info(
        getattr(resp, "status", None),
        getattr(resp, "reason", None),
        getattr(exc, "content", None),
    )


def _response_to_info(resp: Any) -> HttpErrorInfo:
    return _error_payload_to_info(
        getattr(resp, "status_code", None),
        getattr(resp, "reason", None),
        getattr(resp, "content", None),
    )
