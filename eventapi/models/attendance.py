"""
출석 원장 데이터 모델

사용자별 로컬 하루(civil day)당 한 건만 기록되는 append-only 원장입니다.
civil_date는 로컬 자정을 UTC 시각으로 저장하며, consecutive_days는 삽입 시점에
전날 기록을 기준으로 계산된 후 수정되지 않습니다.
"""

from datetime import datetime

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import UniqueConstraint

from eventapi.models.base import BaseModel, UtcDateTime, new_id


class Attendance(BaseModel):
    __tablename__ = "attendances"
    __table_args__ = (
        # 동시 출석 요청 중 나중 요청을 거부하는 실제 보장 수단
        UniqueConstraint("user_id", "civil_date", name="uq_attendances_user_civil_date"),
        Index("idx_attendances_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    civil_date: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)
    consecutive_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self):
        return (
            f"<Attendance(user_id={self.user_id}, civil_date={self.civil_date}, "
            f"consecutive_days={self.consecutive_days})>"
        )
