from fastapi import APIRouter, Depends
from portal.database.supabase_client import get_supabase
from portal.core.dependencies import get_profiled_session
from portal.core.session import Session
from portal.modules.dashboard.schemas import DashboardResponse
from portal.modules.dashboard.service import DashboardService
from supabase import Client

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    session: Session = Depends(get_profiled_session),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Everything the workspace overview needs in one read"""
    return service.get_dashboard(session)
