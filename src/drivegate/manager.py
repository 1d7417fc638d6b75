"""GatewayManager: the file operations behind each HTTP endpoint."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from drivegate.auth import CredentialHolder, ServiceAccountClient, ServiceAccountInfo
from drivegate.controller import DownloadStream, DriveController
from drivegate.controller.query import all_of, in_parents, name_equals
from drivegate.errors import ConnectError, DriveGateError, UploadStepError
from drivegate.models import (
    ByFileId,
    ByFileName,
    MetadataQuery,
    RemoteFile,
    UploadRequest,
    UploadStep,
)
from drivegate.settings import Settings

logger = logging.getLogger(__name__)

ControllerFactory = Callable[[], DriveController]

REPLACE_SCOPES: tuple[str, ...] = ("global", "folder")


class GatewayManager:
    """
    Framework-free orchestration of the gateway's file operations.

    A controller is obtained per call from `controller_factory`; the
    factory built by from_settings() reuses cached service-account
    credentials across calls.
    """

    def __init__(
        self,
        controller_factory: ControllerFactory,
        *,
        replace_scope: str = "global",
        replace_all_duplicates: bool = False,
    ) -> None:
        if replace_scope not in REPLACE_SCOPES:
            raise ValueError(f"replace_scope must be one of {REPLACE_SCOPES}")
        self._controller_factory = controller_factory
        self._replace_scope = replace_scope
        self._replace_all_duplicates = replace_all_duplicates

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        holder: Optional[CredentialHolder] = None,
    ) -> "GatewayManager":
        """Wire a manager to real Drive using the service account named in settings."""
        if holder is None:
            info = ServiceAccountInfo(
                credentials_file=str(settings.credentials_path),
                scopes=tuple(settings.drive_scopes),
            )
            holder = CredentialHolder(ServiceAccountClient(info))

        def factory() -> DriveController:
            return DriveController(
                holder.client,
                holder.get(),
                supports_all_drives=settings.supports_all_drives,
                timeout=settings.http_timeout_seconds,
                chunk_size=settings.download_chunk_size,
                page_size=settings.list_page_size,
                follow_pages=settings.list_follow_pages,
            )

        return cls(
            factory,
            replace_scope=settings.replace_scope,
            replace_all_duplicates=settings.replace_all_duplicates,
        )

    @classmethod
    def from_controller(cls, controller: DriveController, **kwargs: Any) -> "GatewayManager":
        """Create manager around a single injected controller (useful for tests)."""
        return cls(lambda: controller, **kwargs)

    def connect(self) -> DriveController:
        """
        Return an authenticated controller.

        Raises:
            ConnectError: if credentials or the Drive service cannot be set up.
        """
        try:
            return self._controller_factory()
        except Exception as exc:
            raise ConnectError("Failed to create Google Drive service", cause=exc) from exc

    def upload_replace(self, request: UploadRequest) -> RemoteFile:
        """
        Upload a file, first deleting an existing file with the same name.

        Steps run strictly in order: open, authenticate, list same-name
        files, delete the first match (or every match when
        replace_all_duplicates is set), create, then re-fetch for the
        shareable link. A failure stops the sequence; a file deleted
        before a failed create is not restored.

        Raises:
            UploadStepError: naming the step that failed.
        """
        try:
            request.content.seek(0)
        except (OSError, ValueError) as exc:
            raise UploadStepError(UploadStep.OPEN, exc) from exc

        controller = _run_step(UploadStep.AUTHENTICATE, self.connect)

        query = name_equals(request.file_name)
        if self._replace_scope == "folder":
            query = all_of(query, in_parents(request.folder_id))
        matches = _run_step(UploadStep.LIST, controller.find, query)

        targets = matches if self._replace_all_duplicates else matches[:1]
        for existing in targets:
            logger.info(
                "Replacing existing file %s (%s)", existing.name, existing.file_id
            )
            _run_step(UploadStep.DELETE, controller.delete, existing.file_id)

        created = _run_step(
            UploadStep.CREATE,
            controller.create_file,
            request.file_name,
            request.mime_type,
            request.content,
            request.folder_id,
        )
        logger.info(
            "Uploaded %s as %s into folder %s",
            request.file_name,
            created.file_id,
            request.folder_id,
        )
        return _run_step(UploadStep.GET, controller.get, created.file_id)

    def list_folder(self, folder_id: str) -> list[RemoteFile]:
        return self.connect().list_children(folder_id)

    def open_download(self, file_id: str) -> DownloadStream:
        return self.connect().download(file_id)

    def lookup_metadata(self, query: MetadataQuery) -> Optional[RemoteFile]:
        """
        Resolve a file by id or by exact name.

        Returns None only for a name lookup with no match. A failing
        id lookup raises, whatever the remote reason.
        """
        controller = self.connect()
        if isinstance(query, ByFileId):
            return controller.get(query.file_id)
        if isinstance(query, ByFileName):
            matches = controller.find(name_equals(query.file_name))
            return matches[0] if matches else None
        raise TypeError(f"Unsupported metadata query: {query!r}")

    def delete(self, file_id: str) -> None:
        self.connect().delete(file_id)
        logger.info("Deleted file %s", file_id)


def _run_step(step: UploadStep, func: Callable[..., Any], *args: Any) -> Any:
    try:
        return func(*args)
    except DriveGateError as exc:
        raise UploadStepError(step, exc) from exc
