from fastapi import APIRouter, Depends
from portal.core.dependencies import get_auth_service, get_current_session
from portal.core.policy import capabilities, capability_matrix
from portal.core.session import Session
from portal.modules.auth.schemas import LoginRequest, TokenResponse, MeResponse
from portal.modules.auth.service import AuthService
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    session: Session = Depends(get_current_session),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and drop the cached session"""
    service.sign_out(session)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_me(session: Session = Depends(get_current_session)):
    """Current user's profile and what the UI may offer them."""
    return MeResponse(
        id=session.user_id,
        email=session.email,
        full_name=session.full_name,
        role=session.role.value if session.role else None,
        capabilities=capabilities(session.role),
    )


@router.get("/roles")
async def get_roles(session: Session = Depends(get_current_session)) -> Dict[str, Dict[str, bool]]:
    """Capabilities granted by each global role."""
    return capability_matrix()
