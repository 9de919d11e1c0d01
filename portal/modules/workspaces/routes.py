from fastapi import APIRouter, Depends
from portal.database.supabase_client import get_supabase
from portal.core.dependencies import get_current_session, get_profiled_session
from portal.core.session import Session
from portal.modules.workspaces.schemas import (
    WorkspaceCreate, WorkspaceResponse, WorkspaceMutationResponse
)
from portal.modules.workspaces.service import WorkspaceService
from supabase import Client
from typing import List

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


def get_workspace_service(supabase: Client = Depends(get_supabase)) -> WorkspaceService:
    return WorkspaceService(supabase)


@router.get("", response_model=List[WorkspaceResponse])
async def list_workspaces(
    session: Session = Depends(get_profiled_session),
    service: WorkspaceService = Depends(get_workspace_service)
):
    """List all workspaces, newest first"""
    return service.list_workspaces()


@router.post("", response_model=WorkspaceMutationResponse, status_code=201)
async def create_workspace(
    workspace_data: WorkspaceCreate,
    session: Session = Depends(get_current_session),
    service: WorkspaceService = Depends(get_workspace_service)
):
    """Create a workspace (editor or admin) and return the reloaded list"""
    return service.create_workspace_and_reload(workspace_data, session)


@router.get("/{workspace_id}", response_model=WorkspaceResponse)
async def get_workspace(
    workspace_id: str,
    session: Session = Depends(get_profiled_session),
    service: WorkspaceService = Depends(get_workspace_service)
):
    """Get workspace by ID"""
    return service.get_workspace_by_id(workspace_id)
