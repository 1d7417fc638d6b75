"""Upload request model and the steps of upload-with-replace."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO


class UploadStep(str, Enum):
    """Ordered steps of upload-with-replace."""

    OPEN = "open"
    AUTHENTICATE = "authenticate"
    LIST = "list"
    DELETE = "delete"
    CREATE = "create"
    GET = "get"


@dataclass(slots=True)
class UploadRequest:
    """An uploaded file headed for a Drive folder. Consumed once."""

    folder_id: str
    file_name: str
    mime_type: str
    content: BinaryIO

    def __post_init__(self) -> None:
        if not isinstance(self.folder_id, str) or not self.folder_id:
            raise ValueError("UploadRequest.folder_id must be a non-empty string")
        if not isinstance(self.file_name, str) or not self.file_name:
            raise ValueError("UploadRequest.file_name must be a non-empty string")
