from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class AttendanceResponse(BaseModel):
    """출석 기록"""

    id: str = Field(..., description="출석 ID")
    user_id: str = Field(..., description="사용자 ID")
    civil_date: datetime = Field(..., description="출석한 로컬 날짜의 자정 (UTC)")
    consecutive_days: int = Field(..., description="연속 출석 일수")
    created_at: datetime = Field(..., description="출석 시각")

    class Config:
        from_attributes = True


class AttendanceStatusResponse(BaseModel):
    """출석 현황"""

    user_id: str
    consecutive_days: int = Field(0, description="가장 최근 출석 기록의 연속 출석 일수")
    checked_in_today: bool = Field(False, description="오늘 출석 여부")
    last_attended_on: Optional[date] = Field(None, description="마지막 출석 날짜 (로컬)")
    history: List[AttendanceResponse] = Field(default_factory=list, description="최근 출석 기록")
