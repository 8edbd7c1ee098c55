from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from eventapi.models.event import ConditionType, EventStatus
from eventapi.schemas.reward import RewardResponse


class EventCondition(BaseModel):
    """이벤트 참여 조건 (이벤트당 최대 1개)"""

    type: ConditionType = Field(..., description="조건 유형")
    threshold: Optional[int] = Field(None, ge=1, description="달성 기준값 (연속 출석 일수, 초대 인원)")
    description: Optional[str] = Field(None, max_length=1000, description="조건 설명")


class Event(BaseModel):
    """이벤트 레코드"""

    id: str
    title: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: EventStatus
    condition_type: Optional[ConditionType] = None
    condition_threshold: Optional[int] = None
    condition_description: Optional[str] = None
    created_by: str
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @property
    def condition(self) -> Optional[EventCondition]:
        if self.condition_type is None:
            return None
        return EventCondition(
            type=self.condition_type,
            threshold=self.condition_threshold,
            description=self.condition_description,
        )


class EventCreateRequest(BaseModel):
    """이벤트 생성 요청"""

    title: str = Field(..., min_length=1, max_length=200, description="이벤트 제목")
    description: Optional[str] = Field(None, max_length=5000, description="이벤트 설명")
    start_date: datetime = Field(..., description="시작 시각")
    end_date: datetime = Field(..., description="종료 시각")
    status: Optional[EventStatus] = Field(
        None, description="CANCELED/INACTIVE만 그대로 저장되며 그 외에는 기간으로 계산"
    )
    condition: Optional[EventCondition] = Field(None, description="참여 조건")


class EventUpdateRequest(BaseModel):
    """이벤트 수정 요청 (부분 수정)"""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[EventStatus] = None
    condition: Optional[EventCondition] = Field(
        None, description="명시적으로 null을 보내면 조건이 제거됩니다"
    )


class EventResponse(BaseModel):
    """이벤트 응답"""

    id: str = Field(..., description="이벤트 ID")
    title: str = Field(..., description="이벤트 제목")
    description: Optional[str] = Field(None, description="이벤트 설명")
    start_date: datetime = Field(..., description="시작 시각 (UTC)")
    end_date: datetime = Field(..., description="종료 시각 (UTC)")
    status: EventStatus = Field(..., description="저장된 상태")
    is_active: bool = Field(..., description="조회 시점 기준 참여 가능 여부")
    condition: Optional[EventCondition] = Field(None, description="참여 조건")
    created_by: str
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EventDetailResponse(EventResponse):
    """이벤트 상세 응답 (보상 목록 포함)"""

    rewards: List[RewardResponse] = Field(default_factory=list, description="보상 목록")


class EventListResponse(BaseModel):
    events: List[EventResponse] = Field(..., description="이벤트 목록")
    total_count: int = Field(..., description="총 이벤트 수")
