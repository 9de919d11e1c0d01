from supabase import Client
from portal.core.exceptions import StoreError
from portal.core.policy import capabilities, display_permission
from portal.core.session import Session
from portal.modules.auth.schemas import ProfileResponse
from portal.modules.dashboard.schemas import DashboardResponse, DashboardWorkspace
from portal.modules.permissions.service import PermissionService
from portal.modules.workspaces.schemas import WorkspaceType
from portal.modules.workspaces.service import WorkspaceService
import logging

logger = logging.getLogger(__name__)


def _type_label(workspace_type: str) -> str:
    try:
        return WorkspaceType(workspace_type).label
    except ValueError:
        return workspace_type


class DashboardService:
    def __init__(self, supabase: Client):
        self.workspaces = WorkspaceService(supabase)
        self.permissions = PermissionService(supabase)

    def get_dashboard(self, session: Session) -> DashboardResponse:
        """Workspace list with the caller's permission label per workspace."""
        workspaces = self.workspaces.list_workspaces()
        try:
            permissions = self.permissions.list_my_permissions(session.user_id)
        except StoreError:
            # Labels only; every workspace falls back to the viewer default
            logger.warning("Permission lookup failed for %s; showing default labels", session.user_id)
            permissions = {}

        return DashboardResponse(
            profile=ProfileResponse(
                id=session.user_id,
                email=session.email,
                full_name=session.full_name,
                role=session.role.value if session.role else None,
            ),
            capabilities=capabilities(session.role),
            workspaces=[
                DashboardWorkspace(
                    **w.model_dump(),
                    type_label=_type_label(w.workspace_type),
                    permission_level=display_permission(permissions, w.id),
                )
                for w in workspaces
            ],
        )
