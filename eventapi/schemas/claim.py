from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from eventapi.models.reward import ClaimStatus
from eventapi.schemas.reward import RewardSummary


class RewardClaimRequest(BaseModel):
    """보상 요청"""

    event_id: str = Field(..., min_length=1, description="이벤트 ID")
    reward_id: str = Field(..., min_length=1, description="보상 ID")


class ClaimResponse(BaseModel):
    """보상 요청 내역"""

    id: str = Field(..., description="보상 요청 ID")
    user_id: str = Field(..., description="사용자 ID")
    event_id: str = Field(..., description="이벤트 ID")
    reward_id: str = Field(..., description="보상 ID")
    status: ClaimStatus = Field(..., description="처리 상태")
    reward_at: Optional[datetime] = Field(None, description="지급 완료 시각")
    processed_by: Optional[str] = Field(None, description="처리한 운영자 ID")
    created_at: datetime = Field(..., description="요청 시각")
    updated_at: datetime
    reward: Optional[RewardSummary] = Field(None, description="보상 요약")

    class Config:
        from_attributes = True


class ClaimStatusUpdateRequest(BaseModel):
    """보상 처리 결과 반영 (운영자)"""

    status: ClaimStatus = Field(..., description="SUCCESS 또는 FAILURE")


class ClaimHistoryItem(BaseModel):
    """보상 내역 항목 (보상/이벤트 정보 포함)"""

    claim_id: str
    user_id: str
    event_id: str
    event_title: Optional[str] = None
    reward_id: str
    reward: RewardSummary = Field(default_factory=RewardSummary)
    status: ClaimStatus
    reward_at: Optional[datetime] = None
    created_at: datetime


class EventClaimGroup(BaseModel):
    """이벤트별로 묶인 보상 내역"""

    event_id: str
    event_title: Optional[str] = None
    claims: List[ClaimHistoryItem] = Field(default_factory=list)


class RewardHistoryResponse(BaseModel):
    events: List[EventClaimGroup] = Field(..., description="이벤트별 보상 내역")
    total_count: int = Field(..., description="총 보상 요청 수")
