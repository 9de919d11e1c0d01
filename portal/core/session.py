from dataclasses import dataclass
from typing import Optional

from portal.core.policy import Role


@dataclass(frozen=True)
class Session:
    """Identity of the caller for one authenticated request.

    ``role`` is None until a profile row exists for the user; the access
    policy then denies every action.
    """

    user_id: str
    email: Optional[str]
    full_name: Optional[str]
    role: Optional[Role]
    access_token: str

    @property
    def has_profile(self) -> bool:
        return self.role is not None

    def owns(self, owner_id: Optional[str]) -> bool:
        return owner_id is not None and str(owner_id) == str(self.user_id)
