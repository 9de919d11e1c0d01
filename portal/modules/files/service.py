from supabase import Client
from portal.config import settings
from portal.core.exceptions import (
    NotFoundError, PartialUploadError, PermissionDenied, StoreError, ValidationError
)
from portal.core.policy import can_delete_file, can_download_file, can_upload_file
from portal.core.session import Session
from portal.modules.files.schemas import (
    WorkspaceFileResponse, WorkspaceFileListItem, FileUploadResponse, FileListResponse
)
from portal.modules.files.utils import build_storage_path, format_file_size, search_files
from portal.storage.base import BlobStore
from typing import List, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)


class FileService:
    """File metadata rows in ``files`` paired with blobs in the blob store."""

    def __init__(self, supabase: Client, blob_store: BlobStore):
        self.supabase = supabase
        self.blob_store = blob_store

    def list_files(self, workspace_id: str) -> List[WorkspaceFileResponse]:
        """Files of a workspace, newest first"""
        try:
            result = self.supabase.table("files")\
                .select("*")\
                .eq("workspace_id", workspace_id)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching files for workspace {workspace_id}: {e}")
            raise StoreError("Failed to fetch files")
        return [WorkspaceFileResponse(**f) for f in result.data or []]

    def list_file_items(
        self, workspace_id: str, session: Session, search_term: Optional[str] = None
    ) -> List[WorkspaceFileListItem]:
        files = search_files(self.list_files(workspace_id), search_term)
        return self.to_list_items(files, session)

    def to_list_items(self, files: Sequence[WorkspaceFileResponse], session: Session) -> List[WorkspaceFileListItem]:
        return [
            WorkspaceFileListItem(
                **f.model_dump(),
                size_display=format_file_size(f.file_size),
                can_delete=can_delete_file(session.role, session.owns(f.uploaded_by)),
            )
            for f in files
        ]

    def get_file_by_id(self, file_id: str) -> WorkspaceFileResponse:
        try:
            result = self.supabase.table("files")\
                .select("*")\
                .eq("id", file_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching file {file_id}: {e}")
            raise StoreError("Failed to fetch file")
        if not result or not result.data:
            raise NotFoundError("File not found")
        return WorkspaceFileResponse(**result.data)

    def _ensure_workspace_exists(self, workspace_id: str):
        try:
            result = self.supabase.table("workspaces")\
                .select("id")\
                .eq("id", workspace_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching workspace {workspace_id}: {e}")
            raise StoreError("Failed to fetch workspace")
        if not result or not result.data:
            raise NotFoundError("Workspace not found")

    def upload_file(
        self,
        workspace_id: str,
        content: bytes,
        file_name: str,
        mime_type: str,
        session: Session
    ) -> WorkspaceFileResponse:
        """Store the blob, then its metadata row; a failed row insert removes the blob again."""
        if not can_upload_file(session.role):
            raise PermissionDenied("You need editor or admin role to upload files")
        if not file_name:
            raise ValidationError("File name is required")
        if settings.max_upload_bytes and len(content) > settings.max_upload_bytes:
            raise ValidationError(f"File exceeds the {format_file_size(settings.max_upload_bytes)} upload limit")

        self._ensure_workspace_exists(workspace_id)

        file_path = build_storage_path(workspace_id, file_name)
        try:
            self.blob_store.put(file_path, content, mime_type)
        except Exception as e:
            logger.error(f"Blob upload failed for {file_path}: {str(e)}")
            raise StoreError("Failed to upload file")

        try:
            result = self.supabase.table("files").insert({
                "workspace_id": workspace_id,
                "file_name": file_name,
                "file_path": file_path,
                "file_size": len(content),
                "mime_type": mime_type,
                "uploaded_by": session.user_id
            }).execute()
            if not result.data:
                raise RuntimeError("insert returned no row")
        except Exception as e:
            logger.error(f"Metadata insert failed for {file_path}: {str(e)}")
            raise PartialUploadError(file_path, self._rollback_blob(file_path), cause=e)

        record = WorkspaceFileResponse(**result.data[0])
        logger.info("User %s uploaded file %s to workspace %s (%d bytes)",
                    session.user_id, record.id, workspace_id, len(content))
        return record

    def _rollback_blob(self, file_path: str) -> bool:
        try:
            self.blob_store.delete(file_path)
            logger.warning("Rolled back blob after failed metadata insert: %s", file_path)
            return True
        except Exception as e:
            logger.error(f"Rollback failed, orphaned blob left at {file_path}: {str(e)}")
            return False

    def upload_file_and_reload(
        self,
        workspace_id: str,
        content: bytes,
        file_name: str,
        mime_type: str,
        session: Session
    ) -> FileUploadResponse:
        record = self.upload_file(workspace_id, content, file_name, mime_type, session)
        return FileUploadResponse(file=record, files=self.list_file_items(workspace_id, session))

    def delete_file(self, file_id: str, session: Session) -> WorkspaceFileResponse:
        """Remove the blob first, then the row. A failed blob removal keeps the row."""
        record = self.get_file_by_id(file_id)
        if not can_delete_file(session.role, session.owns(record.uploaded_by)):
            raise PermissionDenied("Only editors, admins or the uploader can delete this file")

        try:
            self.blob_store.delete(record.file_path)
        except Exception as e:
            logger.error(f"Blob delete failed for {record.file_path}: {str(e)}")
            raise StoreError("Failed to delete file")

        try:
            result = self.supabase.table("files").delete().eq("id", file_id).execute()
        except Exception as e:
            logger.error(f"Metadata delete failed for file {file_id}, row now dangling: {str(e)}")
            raise StoreError("Failed to delete file")
        if not result or not result.data:
            logger.error(f"Metadata delete removed no row for file {file_id}, row now dangling")
            raise StoreError("Failed to delete file")

        logger.info("User %s deleted file %s from workspace %s", session.user_id, file_id, record.workspace_id)
        return record

    def delete_file_and_reload(self, file_id: str, session: Session) -> FileListResponse:
        record = self.delete_file(file_id, session)
        return FileListResponse(files=self.list_file_items(record.workspace_id, session))

    def download_file(self, file_id: str, session: Session) -> Tuple[WorkspaceFileResponse, bytes]:
        """Metadata and bytes of a file; read-only."""
        if not can_download_file(session.role):
            raise PermissionDenied("Your profile is not set up yet")
        record = self.get_file_by_id(file_id)
        try:
            content = self.blob_store.get(record.file_path)
        except Exception as e:
            logger.error(f"Blob download failed for {record.file_path}: {str(e)}")
            raise StoreError("Failed to download file")
        return record, content
