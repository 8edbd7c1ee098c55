from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from eventapi.models.reward import RewardType


class RewardCreateRequest(BaseModel):
    """보상 생성 요청"""

    name: str = Field(..., min_length=1, max_length=200, description="보상 이름")
    type: RewardType = Field(..., description="보상 유형")
    quantity: int = Field(..., ge=0, description="지급 수량")
    unit_value: Optional[float] = Field(None, ge=0, description="단위 가치")
    description: Optional[str] = Field(None, max_length=1000, description="보상 설명")


class RewardBulkCreateRequest(BaseModel):
    """한 번에 여러 보상 등록 (전부 성공 또는 전부 실패)"""

    rewards: List[RewardCreateRequest] = Field(..., min_length=1, description="보상 목록")


class RewardUpdateRequest(BaseModel):
    """보상 수정 요청 (부분 수정)"""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[RewardType] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit_value: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=1000)


class RewardResponse(BaseModel):
    """보상 응답"""

    id: str = Field(..., description="보상 ID")
    event_id: str = Field(..., description="이벤트 ID")
    name: str = Field(..., description="보상 이름")
    type: RewardType = Field(..., description="보상 유형")
    quantity: int = Field(..., description="지급 수량")
    unit_value: Optional[float] = Field(None, description="단위 가치")
    description: Optional[str] = Field(None, description="보상 설명")
    created_by: str
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RewardSummary(BaseModel):
    """보상 내역에 표시되는 보상 요약

    보상이 삭제된 경우에도 내역은 표시되어야 하므로 모든 필드가 선택값입니다.
    """

    name: Optional[str] = None
    type: Optional[RewardType] = None
    quantity: Optional[int] = None
    unit_value: Optional[float] = None
    description: Optional[str] = None

    class Config:
        from_attributes = True
