from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventapi.core.exceptions import RewardAlreadyClaimedError
from eventapi.models.event import Event as EventModel
from eventapi.models.reward import (
    ClaimStatus,
    Reward as RewardModel,
    RewardClaim as RewardClaimModel,
)
from eventapi.repositories.base import BaseRepository
from eventapi.schemas.claim import ClaimHistoryItem, ClaimResponse
from eventapi.schemas.reward import RewardSummary


class ClaimRepository(BaseRepository[RewardClaimModel, ClaimResponse]):
    """보상 요청 저장소

    (user_id, event_id, reward_id) 유니크 제약 위반은 RewardAlreadyClaimedError로
    변환되고, 상태 전환은 조건부 UPDATE(compare-and-set)로 수행됩니다.
    """

    def __init__(self, db: Session):
        super().__init__(RewardClaimModel, ClaimResponse, db)

    def get_claim(self, claim_id: str) -> Optional[ClaimResponse]:
        return self.get_by_id(claim_id)

    def find_by_triple(
        self, user_id: str, event_id: str, reward_id: str
    ) -> Optional[ClaimResponse]:
        instance = (
            self.db.query(self.model_class)
            .filter(
                self.model_class.user_id == user_id,
                self.model_class.event_id == event_id,
                self.model_class.reward_id == reward_id,
            )
            .first()
        )
        return self._to_schema(instance)

    def create_claim(
        self, user_id: str, event_id: str, reward_id: str
    ) -> ClaimResponse:
        try:
            return self.create(
                user_id=user_id,
                event_id=event_id,
                reward_id=reward_id,
                status=ClaimStatus.PENDING.value,
                reward_at=None,
            )
        except IntegrityError:
            raise RewardAlreadyClaimedError(event_id, reward_id) from None

    def transition_from_pending(
        self,
        claim_id: str,
        status: ClaimStatus,
        reward_at: Optional[datetime],
        processed_by: str,
    ) -> bool:
        """PENDING인 경우에만 상태를 바꿉니다. 변경되었으면 True."""
        stmt = (
            update(self.model_class)
            .where(
                self.model_class.id == claim_id,
                self.model_class.status == ClaimStatus.PENDING.value,
            )
            .values(
                status=ClaimStatus(status).value,
                reward_at=reward_at,
                processed_by=processed_by,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        # identity map에 남은 이전 상태를 버리고 다음 조회 때 다시 읽음
        self.db.expire_all()
        return result.rowcount == 1

    def find_history(
        self,
        user_id: Optional[str] = None,
        event_id: Optional[str] = None,
        claim_id: Optional[str] = None,
    ) -> List[ClaimHistoryItem]:
        """보상/이벤트 정보를 조회 시점에 결합한 보상 내역 (최신순)

        보상이나 이벤트가 사라진 경우에도 외부 조인으로 내역은 남습니다.
        """
        query = (
            self.db.query(RewardClaimModel, RewardModel, EventModel)
            .outerjoin(RewardModel, RewardModel.id == RewardClaimModel.reward_id)
            .outerjoin(EventModel, EventModel.id == RewardClaimModel.event_id)
        )
        if user_id is not None:
            query = query.filter(RewardClaimModel.user_id == user_id)
        if event_id is not None:
            query = query.filter(RewardClaimModel.event_id == event_id)
        if claim_id is not None:
            query = query.filter(RewardClaimModel.id == claim_id)
        query = query.order_by(
            RewardClaimModel.created_at.desc(), RewardClaimModel.id.desc()
        )

        items = []
        for claim, reward, event in query.all():
            items.append(
                ClaimHistoryItem(
                    claim_id=claim.id,
                    user_id=claim.user_id,
                    event_id=claim.event_id,
                    event_title=event.title if event is not None else None,
                    reward_id=claim.reward_id,
                    reward=(
                        RewardSummary.model_validate(reward)
                        if reward is not None
                        else RewardSummary()
                    ),
                    status=claim.status,
                    reward_at=claim.reward_at,
                    created_at=claim.created_at,
                )
            )
        return items
