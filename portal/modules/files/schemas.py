from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class WorkspaceFileResponse(BaseModel):
    id: str
    workspace_id: str
    file_name: str
    file_path: str
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    uploaded_by: str
    created_at: datetime

    class Config:
        from_attributes = True


class WorkspaceFileListItem(WorkspaceFileResponse):
    size_display: str
    can_delete: bool = False


class FileUploadResponse(BaseModel):
    file: WorkspaceFileResponse
    files: List[WorkspaceFileListItem]


class FileListResponse(BaseModel):
    files: List[WorkspaceFileListItem]
