import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from eventapi.core.exceptions import (
    ClaimNotFoundError,
    InvalidInputError,
    InvalidStatusTransitionError,
)
from eventapi.models.reward import ClaimStatus
from eventapi.repositories.claim_repository import ClaimRepository
from eventapi.schemas.claim import ClaimResponse
from eventapi.utils.ids import ensure_uuid
from eventapi.utils.timezone_utils import ensure_utc, utcnow

logger = logging.getLogger(__name__)


class FulfillmentService:
    """보상 지급 결과 반영 (운영자 전용)

    PENDING -> SUCCESS, PENDING -> FAILURE 전환만 허용됩니다. 종료 상태에 같은
    상태를 다시 요청하면 변경 없이 그대로 반환합니다.
    """

    def __init__(self, db: Session):
        self.db = db
        self.claim_repo = ClaimRepository(db)

    def update_claim_status(
        self,
        claim_id: str,
        status: ClaimStatus,
        operator_id: str,
        now: Optional[datetime] = None,
    ) -> ClaimResponse:
        now = ensure_utc(now) if now else utcnow()
        claim_id = ensure_uuid(claim_id, "claim_id")
        target = ClaimStatus(status)
        if not target.is_terminal:
            raise InvalidInputError(
                "Claim status can only be changed to SUCCESS or FAILURE",
                details={"status": target.value},
            )

        claim = self.claim_repo.get_claim(claim_id)
        if claim is None:
            raise ClaimNotFoundError(claim_id)

        if claim.status == ClaimStatus.PENDING:
            reward_at = now if target == ClaimStatus.SUCCESS else None
            if self.claim_repo.transition_from_pending(
                claim_id, target, reward_at, operator_id
            ):
                logger.info(
                    f"Claim {claim_id} moved PENDING -> {target.value} by {operator_id}"
                )
                return self.claim_repo.get_claim(claim_id)
            # 다른 처리자가 먼저 상태를 바꿈
            claim = self.claim_repo.get_claim(claim_id)

        if claim.status == target:
            return claim
        raise InvalidStatusTransitionError(claim_id, claim.status.value, target.value)
