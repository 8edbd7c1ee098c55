import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eventapi.models.base import BaseModel, UtcDateTime, new_id


class EventStatus(str, enum.Enum):
    UPCOMING = "UPCOMING"  # 진행 예정
    ONGOING = "ONGOING"  # 진행 중
    ENDED = "ENDED"  # 진행 종료
    CANCELED = "CANCELED"  # 취소됨 (운영자 지정)
    INACTIVE = "INACTIVE"  # 비활성화됨 (운영자 지정)


class ConditionType(str, enum.Enum):
    PARTICIPATION_VERIFICATION = "PARTICIPATION_VERIFICATION"  # 참여 인증
    CONSECUTIVE_ATTENDANCE = "CONSECUTIVE_ATTENDANCE"  # 연속 출석
    INVITE_FRIEND = "INVITE_FRIEND"  # 친구 초대


class Event(BaseModel):
    """이벤트 정의

    참여 조건은 이벤트당 최대 하나이며 별도 테이블 없이 condition_* 컬럼에
    내장됩니다. status는 생성/수정 시점에 계산된 캐시 값입니다.
    """

    __tablename__ = "events"
    __table_args__ = (
        Index("idx_events_status", "status"),
        Index("idx_events_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)
    end_date: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EventStatus.UPCOMING.value
    )

    condition_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    condition_threshold: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    condition_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    def __repr__(self):
        return f"<Event(id={self.id}, title={self.title}, status={self.status})>"
