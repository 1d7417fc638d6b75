from __future__ import annotations

import mimetypes
from typing import Optional

DEFAULT_MIME: str = "application/octet-stream"


def resolve_upload_mime(content_type: Optional[str], file_name: str) -> str:
    """
    Pick the MIME type for an uploaded part.

    The declared content type wins; otherwise guess from the file name and
    fall back to application/octet-stream.
    """
    if content_type and content_type.strip():
        return content_type.strip()
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_MIME
