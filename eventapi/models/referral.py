from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import UniqueConstraint

from eventapi.models.base import BaseModel, new_id


class Referral(BaseModel):
    """수락된 친구 초대

    초대받은 사람(invitee)은 한 번만 인정됩니다. 이메일은 정규화(strip + lower)된
    값으로 저장됩니다.
    """

    __tablename__ = "referrals"
    __table_args__ = (
        UniqueConstraint("invitee_email", name="uq_referrals_invitee_email"),
        UniqueConstraint("invitee_id", name="uq_referrals_invitee_id"),
        Index("idx_referrals_inviter_id", "inviter_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    inviter_id: Mapped[str] = mapped_column(String(64), nullable=False)
    inviter_email: Mapped[str] = mapped_column(String(255), nullable=False)
    invitee_id: Mapped[str] = mapped_column(String(64), nullable=False)
    invitee_email: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self):
        return f"<Referral(inviter_id={self.inviter_id}, invitee_id={self.invitee_id})>"
