"""Public model exports for drivegate."""

from __future__ import annotations

from .metadata_query import ByFileId, ByFileName, MetadataQuery, parse_metadata_query
from .remote_file import RemoteFile
from .upload import UploadRequest, UploadStep

__all__ = [
    "RemoteFile",
    "UploadRequest",
    "UploadStep",
    "ByFileId",
    "ByFileName",
    "MetadataQuery",
    "parse_metadata_query",
]
