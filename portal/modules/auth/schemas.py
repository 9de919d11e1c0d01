from pydantic import BaseModel, EmailStr
from typing import Optional, Dict


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None


class MeResponse(ProfileResponse):
    capabilities: Dict[str, bool]
