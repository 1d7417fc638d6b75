"""Streaming handle over a Drive media download."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from drivegate.errors import NetworkError
from drivegate.util.mime import DEFAULT_MIME

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE: int = 1024 * 1024


class DownloadStream:
    """
    An open media response from Drive.

    Chunks are pulled lazily from the remote response. The underlying
    connection is released by close(), which runs automatically when the
    chunk iterator finishes or fails and is safe to call more than once.
    """

    def __init__(
        self,
        response: Any,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        session: Optional[Any] = None,
    ) -> None:
        self._response = response
        self._session = session
        self._chunk_size = chunk_size
        self._closed = False

    @property
    def content_type(self) -> str:
        return self._response.headers.get("Content-Type") or DEFAULT_MIME

    @property
    def content_length(self) -> Optional[int]:
        raw = self._response.headers.get("Content-Length")
        if isinstance(raw, str) and raw.isdigit():
            return int(raw)
        return None

    @property
    def closed(self) -> bool:
        return self._closed

    def iter_chunks(self) -> Iterator[bytes]:
        try:
            for chunk in self._response.iter_content(chunk_size=self._chunk_size):
                if chunk:
                    yield chunk
        except Exception as exc:
            logger.error(f"Download interrupted: {exc}")
            raise NetworkError("Download interrupted", cause=exc) from exc
        finally:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._response.close()
        finally:
            if self._session is not None:
                self._session.close()

    def __enter__(self) -> DownloadStream:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
