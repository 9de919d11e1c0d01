import hashlib
import logging
import time
from supabase import Client
from portal.config import settings
from portal.core.exceptions import AuthenticationRequired, StoreError
from portal.core.policy import resolve_role
from portal.core.session import Session
from portal.modules.auth.schemas import LoginRequest, TokenResponse
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# token hash -> (Session, expiry); entries are dropped on sign-out
_SESSION_CACHE: Dict[str, tuple] = {}


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_session_cache():
    _SESSION_CACHE.clear()


class AuthService:
    """Adapter over Supabase Auth and the profiles table."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            logger.info("Login failed for %s: %s", login_data.email, e)
            raise AuthenticationRequired("Invalid email or password")

        if not auth_response.user or not auth_response.session:
            raise AuthenticationRequired("Invalid email or password")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve the user identity behind a Supabase access token."""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.info("Token rejected by Supabase Auth: %s", e)
            raise AuthenticationRequired("Invalid or expired token")
        if not user_response or not user_response.user:
            raise AuthenticationRequired("Invalid or expired token")
        user = user_response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
        }

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Profile row for the user, or None when it does not exist yet."""
        try:
            result = self.supabase.table("profiles")\
                .select("id, email, full_name, role")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching profile for {user_id}: {e}")
            raise StoreError("Failed to load user profile")
        if not result or not result.data:
            return None
        return result.data

    def get_session(self, token: str) -> Session:
        """Session for a bearer token. Uses short TTL cache to reduce auth API calls."""
        cache_key = _cache_key(token)
        now = time.monotonic()
        if cache_key in _SESSION_CACHE:
            session, expiry = _SESSION_CACHE[cache_key]
            if now < expiry:
                return session
            del _SESSION_CACHE[cache_key]

        user = self.get_current_user(token)
        profile = self.get_profile(user["id"])
        if profile is None:
            logger.warning("No profile for user %s; all actions denied", user["id"])
            profile = {}

        session = Session(
            user_id=user["id"],
            email=profile.get("email") or user.get("email"),
            full_name=profile.get("full_name") or user["user_metadata"].get("full_name"),
            role=resolve_role(profile.get("role")),
            access_token=token,
        )
        # Sessions without a profile are not cached so a newly created profile is picked up
        if session.has_profile and len(_SESSION_CACHE) < settings.auth_cache_max_size:
            _SESSION_CACHE[cache_key] = (session, now + settings.auth_cache_ttl_sec)
        return session

    def sign_out(self, session: Session) -> bool:
        """End the session: drop the cached Session and sign out of Supabase Auth."""
        _SESSION_CACHE.pop(_cache_key(session.access_token), None)
        try:
            # Supabase access tokens are stateless JWTs; they stay valid until expiry
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning("Supabase sign_out failed for user %s: %s", session.user_id, e)
            return False
