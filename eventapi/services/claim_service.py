"""
보상 요청 처리

상태 흐름: (없음) -> PENDING -> SUCCESS | FAILURE

한 사용자는 (이벤트, 보상) 조합당 한 번만 보상을 요청할 수 있습니다.
사전 조회로 중복을 거르지만, 동시 요청은 reward_claims의 유니크 제약이 막고
저장소에서 RewardAlreadyClaimedError로 변환됩니다.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from eventapi.config import Settings, settings as default_settings
from eventapi.core.exceptions import (
    EventInactiveError,
    EventNotFoundError,
    EventPeriodError,
    RewardAlreadyClaimedError,
    RewardNotFoundError,
)
from eventapi.models.event import EventStatus
from eventapi.repositories.claim_repository import ClaimRepository
from eventapi.repositories.event_repository import EventRepository
from eventapi.repositories.reward_repository import RewardRepository
from eventapi.schemas.claim import ClaimResponse
from eventapi.schemas.event import Event
from eventapi.schemas.reward import RewardSummary
from eventapi.services.condition_evaluator import ConditionEvaluator
from eventapi.utils.event_status import derive_status, is_forced, is_within_window
from eventapi.utils.ids import ensure_uuid
from eventapi.utils.timezone_utils import ensure_utc, utcnow

logger = logging.getLogger(__name__)


class ClaimService:
    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings
        self.event_repo = EventRepository(db)
        self.reward_repo = RewardRepository(db)
        self.claim_repo = ClaimRepository(db)
        self.condition_evaluator = ConditionEvaluator(db)

    def request_reward(
        self,
        user_id: str,
        event_id: str,
        reward_id: str,
        now: Optional[datetime] = None,
    ) -> ClaimResponse:
        """보상 요청

        Raises:
            InvalidInputError: ID 형식 오류
            EventNotFoundError / RewardNotFoundError: 이벤트 또는 해당 이벤트의 보상 없음
            EventInactiveError / EventPeriodError: 참여 불가 상태 또는 기간 외
            RewardAlreadyClaimedError: 이미 요청한 보상
            ConditionNotMetError: 참여 조건 미달
        """
        now = ensure_utc(now) if now else utcnow()
        event_id = ensure_uuid(event_id, "event_id")
        reward_id = ensure_uuid(reward_id, "reward_id")

        event = self.event_repo.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        reward = self.reward_repo.get_reward(reward_id)
        if reward is None or reward.event_id != event.id:
            raise RewardNotFoundError(reward_id)

        self._ensure_claimable(event, now)

        if self.claim_repo.find_by_triple(user_id, event.id, reward.id):
            raise RewardAlreadyClaimedError(event.id, reward.id)

        self.condition_evaluator.ensure_met(event, user_id)

        claim = self.claim_repo.create_claim(user_id, event.id, reward.id)
        logger.info(
            f"Reward claim {claim.id} created: user={user_id} event={event.id} reward={reward.id}"
        )
        return claim.model_copy(update={"reward": RewardSummary.model_validate(reward)})

    @staticmethod
    def _ensure_claimable(event: Event, now: datetime) -> None:
        # 저장된 ONGOING/ENDED/UPCOMING 값은 신뢰하지 않고 현재 시각으로 다시 계산
        if is_forced(event.status):
            raise EventInactiveError(event.id, EventStatus(event.status).value)
        derived = derive_status(event.start_date, event.end_date, now)
        if derived != EventStatus.ONGOING or not is_within_window(
            event.start_date, event.end_date, now
        ):
            raise EventPeriodError(event.id)
