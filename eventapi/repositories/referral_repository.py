from typing import List

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventapi.core.exceptions import DuplicateReferralError
from eventapi.models.referral import Referral as ReferralModel
from eventapi.repositories.base import BaseRepository
from eventapi.schemas.referral import ReferralResponse


class ReferralRepository(BaseRepository[ReferralModel, ReferralResponse]):
    """친구 초대 원장 저장소"""

    def __init__(self, db: Session):
        super().__init__(ReferralModel, ReferralResponse, db)

    def exists_for_invitee(self, invitee_id: str, invitee_email: str) -> bool:
        instance = (
            self.db.query(self.model_class.id)
            .filter(
                or_(
                    self.model_class.invitee_id == invitee_id,
                    self.model_class.invitee_email == invitee_email,
                )
            )
            .first()
        )
        return instance is not None

    def count_by_inviter(self, inviter_id: str) -> int:
        return self.count({"inviter_id": inviter_id})

    def list_by_inviter(self, inviter_id: str) -> List[ReferralResponse]:
        query = (
            self.db.query(self.model_class)
            .filter(self.model_class.inviter_id == inviter_id)
            .order_by(self.model_class.created_at.desc())
        )
        return self._to_schemas(query.all())

    def create_referral(
        self,
        inviter_id: str,
        inviter_email: str,
        invitee_id: str,
        invitee_email: str,
    ) -> ReferralResponse:
        try:
            return self.create(
                inviter_id=inviter_id,
                inviter_email=inviter_email,
                invitee_id=invitee_id,
                invitee_email=invitee_email,
            )
        except IntegrityError:
            raise DuplicateReferralError(
                details={"invitee_id": invitee_id, "invitee_email": invitee_email}
            ) from None
