"""
Access policy for workspaces and files.

Pure decisions over the acting user's global role, an optional per-workspace
permission level and an optional ownership flag. A missing role (no profile
yet) denies every action.
"""

from enum import Enum
from typing import Dict, Mapping, Optional, Union


class Role(str, Enum):
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


EDITOR_ROLES = frozenset({Role.EDITOR, Role.ADMIN})

# Shown for workspaces without an explicit workspace_permissions row
DEFAULT_PERMISSION_LEVEL = "viewer"

RoleLike = Union[Role, str, None]


def resolve_role(value: RoleLike) -> Optional[Role]:
    """Map a profile's role attribute to a Role; unknown or empty values give None."""
    if value is None or isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        return None


def _is_editor(role: RoleLike) -> bool:
    return resolve_role(role) in EDITOR_ROLES


def can_create_workspace(role: RoleLike) -> bool:
    return _is_editor(role)


def can_upload_file(role: RoleLike) -> bool:
    return _is_editor(role)


def can_delete_file(role: RoleLike, is_uploader: bool = False) -> bool:
    if resolve_role(role) is None:
        return False
    return _is_editor(role) or bool(is_uploader)


def can_read(role: RoleLike) -> bool:
    """Listing workspaces and files; universal for anyone with a resolved profile."""
    return resolve_role(role) is not None


def can_download_file(role: RoleLike) -> bool:
    return can_read(role)


def can_view_admin_panel(role: RoleLike) -> bool:
    return resolve_role(role) == Role.ADMIN


def display_permission(permissions: Mapping[str, str], workspace_id: str) -> str:
    """Permission label for a workspace, falling back to the viewer default."""
    return permissions.get(workspace_id) or DEFAULT_PERMISSION_LEVEL


def capabilities(role: RoleLike) -> Dict[str, bool]:
    """Role-level capability flags for clients; file deletion here means any file."""
    return {
        "create_workspace": can_create_workspace(role),
        "upload_file": can_upload_file(role),
        "delete_any_file": can_delete_file(role, is_uploader=False),
        "download_file": can_download_file(role),
        "view_admin_panel": can_view_admin_panel(role),
    }


def capability_matrix() -> Dict[str, Dict[str, bool]]:
    """Capabilities of every global role, keyed by role value."""
    return {role.value: capabilities(role) for role in Role}
