from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class FriendInviteRequest(BaseModel):
    """친구 초대 등록 요청 (호출자가 초대받은 사람)"""

    inviter_email: EmailStr = Field(..., description="초대한 사람의 이메일")
    invitee_email: Optional[EmailStr] = Field(
        None, description="초대받은 사람 이메일 (없으면 X-User-Email 헤더 사용)"
    )


class ReferralResponse(BaseModel):
    id: str
    inviter_id: str
    inviter_email: str
    invitee_id: str
    invitee_email: str
    created_at: datetime

    class Config:
        from_attributes = True


class ReferralListResponse(BaseModel):
    referrals: List[ReferralResponse] = Field(..., description="초대 내역")
    total_count: int = Field(..., description="초대 인원")
