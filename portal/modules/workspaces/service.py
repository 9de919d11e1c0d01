from supabase import Client
from portal.core.exceptions import NotFoundError, PermissionDenied, StoreError, ValidationError
from portal.core.policy import can_create_workspace
from portal.core.session import Session
from portal.modules.workspaces.schemas import (
    WorkspaceCreate, WorkspaceResponse, WorkspaceMutationResponse, WorkspaceType
)
from typing import List
import logging

logger = logging.getLogger(__name__)


class WorkspaceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_workspaces(self) -> List[WorkspaceResponse]:
        """All workspaces, newest first. Visibility is not filtered by permission."""
        try:
            result = self.supabase.table("workspaces")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching workspaces: {e}")
            raise StoreError("Failed to fetch workspaces")
        return [WorkspaceResponse(**w) for w in result.data or []]

    def get_workspace_by_id(self, workspace_id: str) -> WorkspaceResponse:
        try:
            result = self.supabase.table("workspaces")\
                .select("*")\
                .eq("id", workspace_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching workspace {workspace_id}: {e}")
            raise StoreError("Failed to fetch workspace")
        if not result or not result.data:
            raise NotFoundError("Workspace not found")
        return WorkspaceResponse(**result.data)

    def create_workspace(self, workspace_data: WorkspaceCreate, session: Session) -> WorkspaceResponse:
        """Create a workspace owned by the session's user (editor or admin only)"""
        if not can_create_workspace(session.role):
            raise PermissionDenied("You need editor or admin role to create workspaces")

        name = (workspace_data.name or "").strip()
        if not name:
            raise ValidationError("Workspace name is required")
        if not workspace_data.workspace_type:
            raise ValidationError("Workspace type is required")
        try:
            workspace_type = WorkspaceType(workspace_data.workspace_type)
        except ValueError:
            allowed = ", ".join(t.value for t in WorkspaceType)
            raise ValidationError(f"Workspace type must be one of: {allowed}")

        try:
            result = self.supabase.table("workspaces").insert({
                "name": name,
                "description": workspace_data.description or "",
                "workspace_type": workspace_type.value,
                "created_by": session.user_id
            }).execute()
        except Exception as e:
            logger.error(f"Error creating workspace: {e}")
            raise StoreError("Failed to create workspace")

        if not result.data:
            raise StoreError("Failed to create workspace")

        workspace = WorkspaceResponse(**result.data[0])
        logger.info("User %s created workspace %s (%s)", session.user_id, workspace.id, workspace.workspace_type)
        return workspace

    def create_workspace_and_reload(self, workspace_data: WorkspaceCreate, session: Session) -> WorkspaceMutationResponse:
        workspace = self.create_workspace(workspace_data, session)
        return WorkspaceMutationResponse(workspace=workspace, workspaces=self.list_workspaces())
