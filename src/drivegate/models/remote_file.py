"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True)
class RemoteFile:
    """
    A Drive file resource as seen by the gateway.

    Never persisted locally; built from a Drive API response and rendered
    straight back into JSON.
    """

    file_id: str
    name: str
    mime_type: str = ""
    parents: list[str] = field(default_factory=list)
    web_view_link: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RemoteFile:
        """Build from a Drive v3 `files` resource dict."""
        file_id = data.get("id")
        name = data.get("name")
        mime_type = data.get("mimeType")
        parents = data.get("parents") or []
        link = data.get("webViewLink")
        return cls(
            file_id=file_id if isinstance(file_id, str) else "",
            name=name if isinstance(name, str) else "",
            mime_type=mime_type if isinstance(mime_type, str) else "",
            parents=list(parents) if isinstance(parents, list) else [],
            web_view_link=link if isinstance(link, str) else None,
        )

    def to_api(self) -> dict[str, Any]:
        """Render with Drive field names, omitting empty values."""
        data: dict[str, Any] = {"id": self.file_id, "name": self.name}
        if self.mime_type:
            data["mimeType"] = self.mime_type
        if self.parents:
            data["parents"] = list(self.parents)
        if self.web_view_link:
            data["webViewLink"] = self.web_view_link
        return data

    def to_summary(self) -> dict[str, Any]:
        """The `{file_id, file_name, file_url}` shape returned by upload/metadata."""
        return {
            "file_id": self.file_id,
            "file_name": self.name,
            "file_url": self.web_view_link,
        }
