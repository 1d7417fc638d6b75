"""
FastAPI router for the Drive file endpoints.

Handlers are plain functions so FastAPI runs the blocking Drive calls in
its threadpool. Every error leaves as `{"error": "<message>"}`.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel
from starlette.background import BackgroundTask
from starlette.datastructures import UploadFile as StarletteUploadFile

from ..errors import ConnectError, DriveGateError, InvalidArgumentError, UploadStepError
from ..manager import GatewayManager
from ..models import ByFileId, UploadRequest, UploadStep, parse_metadata_query
from ..util.mime import resolve_upload_mime
from .dependencies import get_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])

CONNECT_FAILED = "Failed to create Google Drive service"
LIST_FAILED = "Failed to list files in Google Drive"
GET_FAILED = "Failed to get file metadata from Google Drive"
DOWNLOAD_FAILED = "Failed to get file from Google Drive"
DELETE_FAILED = "Failed to delete file from Google Drive"

UPLOAD_STEP_MESSAGES: dict[UploadStep, str] = {
    UploadStep.OPEN: "Failed to open file",
    UploadStep.AUTHENTICATE: CONNECT_FAILED,
    UploadStep.LIST: LIST_FAILED,
    UploadStep.DELETE: DELETE_FAILED,
    UploadStep.CREATE: "Failed to upload file to Google Drive",
    UploadStep.GET: GET_FAILED,
}


class MetadataRequest(BaseModel):
    file_id: str | None = None
    file_name: str | None = None


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _upstream_error(exc: DriveGateError, message: str) -> JSONResponse:
    if isinstance(exc, ConnectError):
        message = CONNECT_FAILED
    logger.error(f"{message}: {exc}")
    return error_response(500, message)


@router.post("/upload/file")
def upload_file(
    folder: str | None = Form(None),
    file: UploadFile | str | None = File(None),
    manager: GatewayManager = Depends(get_manager),
):
    """Upload a file into a folder, replacing an existing file of the same name."""
    if not folder:
        return error_response(400, "Folder ID is required")
    # A plain text field named "file" is treated as a missing file part.
    if not isinstance(file, StarletteUploadFile) or not file.filename:
        return error_response(400, "Failed to read file from request")

    request = UploadRequest(
        folder_id=folder,
        file_name=file.filename,
        mime_type=resolve_upload_mime(file.content_type, file.filename),
        content=file.file,
    )
    try:
        uploaded = manager.upload_replace(request)
    except UploadStepError as e:
        message = UPLOAD_STEP_MESSAGES[e.step]
        logger.error(f"{message}: {e.cause}")
        return error_response(500, message)

    return {"message": "File successfully uploaded", "data": uploaded.to_summary()}


@router.get("/list")
def list_files(
    folder: str | None = Query(None, description="Drive folder ID"),
    manager: GatewayManager = Depends(get_manager),
):
    """List the files directly inside a folder."""
    if not folder:
        return error_response(400, "Folder ID is required")

    try:
        files = manager.list_folder(folder)
    except DriveGateError as e:
        return _upstream_error(e, LIST_FAILED)

    return {
        "message": "Files successfully retrieved",
        "data": {"folder_id": folder, "files": [f.to_api() for f in files]},
    }


@router.get("/download/{file_id}")
def download_file(
    file_id: str,
    manager: GatewayManager = Depends(get_manager),
):
    """Stream a file's content with the content type Drive reports."""
    try:
        stream = manager.open_download(file_id)
    except DriveGateError as e:
        return _upstream_error(e, DOWNLOAD_FAILED)

    return StreamingResponse(
        stream.iter_chunks(),
        headers={"Content-Type": stream.content_type},
        background=BackgroundTask(stream.close),
    )


@router.post("/file/metadata")
def file_metadata(
    body: MetadataRequest | None = None,
    manager: GatewayManager = Depends(get_manager),
):
    """Look up a file by id, or by exact name when no id is given."""
    try:
        body = body or MetadataRequest()
        query = parse_metadata_query(body.file_id, body.file_name)
    except InvalidArgumentError as e:
        return error_response(400, str(e))

    try:
        found = manager.lookup_metadata(query)
    except DriveGateError as e:
        return _upstream_error(e, GET_FAILED if isinstance(query, ByFileId) else LIST_FAILED)

    if found is None:
        return error_response(404, "File not found")

    return {"message": "File metadata successfully retrieved", "data": found.to_summary()}


@router.delete("/file/delete/{file_id}")
def delete_file(
    file_id: str,
    manager: GatewayManager = Depends(get_manager),
):
    """Delete a file by id. No existence check is made first."""
    try:
        manager.delete(file_id)
    except DriveGateError as e:
        return _upstream_error(e, DELETE_FAILED)

    return {"message": "File successfully deleted", "file_id": file_id}
