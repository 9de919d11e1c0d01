from fastapi import APIRouter, Depends
from portal.database.supabase_client import get_supabase
from portal.core.dependencies import get_profiled_session
from portal.core.session import Session
from portal.modules.permissions.service import PermissionService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/permissions", tags=["permissions"])


def get_permission_service(supabase: Client = Depends(get_supabase)) -> PermissionService:
    return PermissionService(supabase)


@router.get("/me", response_model=Dict[str, str])
async def list_my_permissions(
    session: Session = Depends(get_profiled_session),
    service: PermissionService = Depends(get_permission_service)
):
    """Explicit per-workspace permission levels of the current user"""
    return service.list_my_permissions(session.user_id)
