import logging
from typing import List

from sqlalchemy.orm import Session

from eventapi.core.exceptions import DuplicateReferralError, InvalidInputError
from eventapi.repositories.referral_repository import ReferralRepository
from eventapi.schemas.referral import ReferralResponse
from eventapi.services.identity_client import IdentityClient

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class ReferralService:
    """친구 초대 등록

    초대받은 사람(호출자)이 초대한 사람의 이메일을 입력합니다. 초대받은 사람은
    이메일/ID 기준으로 한 번만 등록될 수 있습니다.
    """

    def __init__(self, db: Session, identity_client: IdentityClient):
        self.db = db
        self.identity_client = identity_client
        self.referral_repo = ReferralRepository(db)

    async def invite_friend(
        self, inviter_email: str, invitee_id: str, invitee_email: str
    ) -> ReferralResponse:
        inviter_email = normalize_email(inviter_email)
        invitee_email = normalize_email(invitee_email)
        if not inviter_email or not invitee_email or not invitee_id:
            raise InvalidInputError("inviter_email, invitee_id and invitee_email are required")
        if inviter_email == invitee_email:
            raise InvalidInputError(
                "You cannot invite yourself", details={"email": invitee_email}
            )

        if self.referral_repo.exists_for_invitee(invitee_id, invitee_email):
            raise DuplicateReferralError(
                details={"invitee_id": invitee_id, "invitee_email": invitee_email}
            )

        inviter = await self.identity_client.resolve_user_by_email(inviter_email)
        if inviter.id == invitee_id:
            raise InvalidInputError(
                "You cannot invite yourself", details={"user_id": invitee_id}
            )

        referral = self.referral_repo.create_referral(
            inviter_id=inviter.id,
            inviter_email=inviter_email,
            invitee_id=invitee_id,
            invitee_email=invitee_email,
        )
        logger.info(f"Referral recorded: inviter={inviter.id} invitee={invitee_id}")
        return referral

    def count_invites(self, user_id: str) -> int:
        return self.referral_repo.count_by_inviter(user_id)

    def list_invites(self, inviter_id: str) -> List[ReferralResponse]:
        return self.referral_repo.list_by_inviter(inviter_id)
