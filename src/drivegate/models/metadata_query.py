"""Metadata lookup input: either a file id or an exact file name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from drivegate.errors import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class ByFileId:
    file_id: str


@dataclass(frozen=True, slots=True)
class ByFileName:
    file_name: str


MetadataQuery = Union[ByFileId, ByFileName]


def parse_metadata_query(
    file_id: Optional[str],
    file_name: Optional[str],
) -> MetadataQuery:
    """
    Build a MetadataQuery from the two optional request fields.

    `file_id` wins when both are given.

    Raises:
        InvalidArgumentError: if neither identifier is non-empty.
    """
    if file_id:
        return ByFileId(file_id)
    if file_name:
        return ByFileName(file_name)
    raise InvalidArgumentError("File ID or File Name is required")
