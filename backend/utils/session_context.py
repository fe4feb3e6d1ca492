"""
Explicit acting-user context passed into every service call.
"""

from dataclasses import dataclass
from typing import Optional

from backend.utils.errors import PermissionDeniedError, ValidationError


@dataclass(frozen=True)
class SessionContext:
    """Who is performing a service operation."""

    user_id: str
    role: str = "unset"
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_profile(cls, profile) -> "SessionContext":
        return cls(
            user_id=str(profile.id),
            role=profile.role,
            name=profile.name,
            avatar_url=profile.avatar_url,
            email=profile.email,
        )

    @property
    def display_name(self) -> str:
        return self.name or ("Alumni" if self.role == "alumni" else "User")

    def require_user(self) -> str:
        if not self.user_id:
            raise ValidationError("A signed-in user is required")
        return self.user_id

    def require_role(self, *roles: str) -> None:
        self.require_user()
        if self.role not in roles:
            raise PermissionDeniedError(
                f"Only {' or '.join(roles)} users can perform this action"
            )
