from enum import Enum
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class WorkspaceType(str, Enum):
    DEV = "dev"
    QA = "qa"
    REVIEW = "review"
    DESIGN = "design"
    DOCUMENTATION = "documentation"

    @property
    def label(self) -> str:
        return WORKSPACE_TYPE_LABELS[self]


WORKSPACE_TYPE_LABELS = {
    WorkspaceType.DEV: "Development",
    WorkspaceType.QA: "Quality Assurance",
    WorkspaceType.REVIEW: "Review",
    WorkspaceType.DESIGN: "Design",
    WorkspaceType.DOCUMENTATION: "Documentation",
}


class WorkspaceCreate(BaseModel):
    # Plain strings so empty values reach the service's own validation
    name: str = ""
    description: Optional[str] = None
    workspace_type: str = ""


class WorkspaceResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    workspace_type: str
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True


class WorkspaceMutationResponse(BaseModel):
    """A completed write plus the list re-read right after it."""
    workspace: WorkspaceResponse
    workspaces: List[WorkspaceResponse]
