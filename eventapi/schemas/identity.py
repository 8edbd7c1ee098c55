from typing import Optional

from pydantic import BaseModel, Field

from eventapi.models.user import UserRole


class CallerContext(BaseModel):
    """게이트웨이가 인증 후 전달한 호출자 정보"""

    user_id: str = Field(..., min_length=1)
    role: UserRole = UserRole.USER
    email: Optional[str] = None

    @property
    def can_manage_events(self) -> bool:
        return UserRole.can_manage_events(self.role)

    @property
    def has_management_role(self) -> bool:
        return UserRole.has_management_role(self.role)


class IdentityUser(BaseModel):
    """Identity service user lookup result."""

    id: str
    email: str
    role: Optional[str] = None
