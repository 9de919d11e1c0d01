from supabase import Client
from portal.core.exceptions import StoreError
from typing import Dict
import logging

logger = logging.getLogger(__name__)


class PermissionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_my_permissions(self, user_id: str) -> Dict[str, str]:
        """Map workspace_id -> permission_level for the user's explicit grants."""
        try:
            result = self.supabase.table("workspace_permissions")\
                .select("workspace_id, permission_level")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching permissions for {user_id}: {e}")
            raise StoreError("Failed to fetch permissions")
        return {row["workspace_id"]: row["permission_level"] for row in result.data or []}
