"""
Core dependencies for route protection
"""

from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from portal.core.exceptions import AuthenticationRequired, PermissionDenied
from portal.core.policy import can_read
from portal.core.session import Session
from portal.database.supabase_client import get_supabase
from portal.modules.auth.service import AuthService

security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Session:
    """Session for the bearer token; every operation needing identity depends on this."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequired()
    return auth_service.get_session(credentials.credentials)


def get_profiled_session(session: Session = Depends(get_current_session)) -> Session:
    """Session whose profile has loaded; read routes fail closed without one."""
    if not can_read(session.role):
        raise PermissionDenied("Your profile is not set up yet")
    return session
