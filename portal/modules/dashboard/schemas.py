from pydantic import BaseModel
from typing import List, Dict
from portal.modules.auth.schemas import ProfileResponse
from portal.modules.workspaces.schemas import WorkspaceResponse


class DashboardWorkspace(WorkspaceResponse):
    type_label: str
    permission_level: str


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    capabilities: Dict[str, bool]
    workspaces: List[DashboardWorkspace]
