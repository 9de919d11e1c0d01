from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from portal.database.supabase_client import get_supabase
from portal.core.dependencies import get_current_session, get_profiled_session
from portal.config import settings
from portal.core.exceptions import ValidationError
from portal.core.session import Session
from portal.modules.files.schemas import (
    WorkspaceFileListItem, FileUploadResponse, FileListResponse
)
from portal.modules.files.service import FileService
from portal.modules.files.utils import format_file_size
from portal.storage import BlobStore, get_blob_store
from supabase import Client
from typing import List, Optional
from urllib.parse import quote
import mimetypes

router = APIRouter(tags=["files"])


def get_file_service(
    supabase: Client = Depends(get_supabase),
    blob_store: BlobStore = Depends(get_blob_store)
) -> FileService:
    return FileService(supabase, blob_store)


@router.get("/workspaces/{workspace_id}/files", response_model=List[WorkspaceFileListItem])
async def list_files(
    workspace_id: str,
    q: Optional[str] = None,
    session: Session = Depends(get_profiled_session),
    service: FileService = Depends(get_file_service)
):
    """List files of a workspace, newest first, optionally filtered by name"""
    return service.list_file_items(workspace_id, session, search_term=q)


@router.post("/workspaces/{workspace_id}/files", response_model=FileUploadResponse, status_code=201)
async def upload_file(
    workspace_id: str,
    file: UploadFile = File(...),
    session: Session = Depends(get_current_session),
    service: FileService = Depends(get_file_service)
):
    """Upload a file (editor or admin) and return the reloaded file list"""
    if settings.max_upload_bytes and file.size is not None and file.size > settings.max_upload_bytes:
        raise ValidationError(f"File exceeds the {format_file_size(settings.max_upload_bytes)} upload limit")
    content = await file.read()
    file_name = file.filename or ""
    mime_type = file.content_type or mimetypes.guess_type(file_name)[0] or "application/octet-stream"
    return service.upload_file_and_reload(workspace_id, content, file_name, mime_type, session)


@router.delete("/files/{file_id}", response_model=FileListResponse)
async def delete_file(
    file_id: str,
    session: Session = Depends(get_current_session),
    service: FileService = Depends(get_file_service)
):
    """Delete a file (editor, admin or uploader) and return the reloaded file list"""
    return service.delete_file_and_reload(file_id, session)


@router.get("/files/{file_id}/download")
async def download_file(
    file_id: str,
    session: Session = Depends(get_current_session),
    service: FileService = Depends(get_file_service)
):
    """Download file bytes under their original name"""
    record, content = service.download_file(file_id, session)
    return Response(
        content=content,
        media_type=record.mime_type or "application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(record.file_name)}"}
    )
