import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import UniqueConstraint

from eventapi.models.base import BaseModel, UtcDateTime, new_id


class RewardType(str, enum.Enum):
    POINT = "POINT"  # 포인트
    ITEM = "ITEM"  # 아이템
    COUPON = "COUPON"  # 쿠폰
    CASH = "CASH"  # 현금/캐시
    CUSTOM = "CUSTOM"  # 기타


class ClaimStatus(str, enum.Enum):
    PENDING = "PENDING"  # 확인 중
    SUCCESS = "SUCCESS"  # 보상 성공
    FAILURE = "FAILURE"  # 보상 실패

    @property
    def is_terminal(self) -> bool:
        return self is not ClaimStatus.PENDING


class Reward(BaseModel):
    __tablename__ = "rewards"
    __table_args__ = (Index("idx_rewards_event_id", "event_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # 이벤트에 대한 약한 참조 (cascade 삭제 없음)
    event_id: Mapped[str] = mapped_column(String(36), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unit_value: Mapped[Optional[float]] = mapped_column(
        Numeric(18, 2, asdecimal=False), nullable=True
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    def __repr__(self):
        return f"<Reward(id={self.id}, event_id={self.event_id}, name={self.name})>"


class RewardClaim(BaseModel):
    """보상 신청 내역 (reward history)

    (user_id, event_id, reward_id) 유니크 제약이 중복 지급 방지의 실제 보장 수단입니다.
    사전 조회는 친절한 에러 메시지를 위한 것일 뿐이므로 제약을 제거하면 안 됩니다.
    """

    __tablename__ = "reward_claims"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "event_id", "reward_id", name="uq_reward_claims_user_event_reward"
        ),
        Index("idx_reward_claims_user_id", "user_id"),
        Index("idx_reward_claims_event_id", "event_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    event_id: Mapped[str] = mapped_column(String(36), nullable=False)
    reward_id: Mapped[str] = mapped_column(String(36), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ClaimStatus.PENDING.value
    )
    # SUCCESS 전환 시에만 설정
    reward_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)
    processed_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    def __repr__(self):
        return f"<RewardClaim(id={self.id}, user_id={self.user_id}, status={self.status})>"
