import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from eventapi.config import Settings, settings as default_settings
from eventapi.core.exceptions import (
    EventNotFoundError,
    InvalidInputError,
    RewardNotFoundError,
)
from eventapi.models.event import ConditionType, EventStatus
from eventapi.repositories.event_repository import EventRepository
from eventapi.repositories.reward_repository import RewardRepository
from eventapi.schemas.event import (
    Event,
    EventCondition,
    EventCreateRequest,
    EventDetailResponse,
    EventListResponse,
    EventResponse,
    EventUpdateRequest,
)
from eventapi.schemas.identity import CallerContext
from eventapi.schemas.reward import (
    RewardCreateRequest,
    RewardResponse,
    RewardUpdateRequest,
)
from eventapi.utils.event_status import derive_status, is_forced
from eventapi.utils.ids import ensure_uuid
from eventapi.utils.timezone_utils import ensure_utc, utcnow

logger = logging.getLogger(__name__)

# 임계값이 반드시 필요한 조건 유형
THRESHOLD_REQUIRED = frozenset(
    {ConditionType.CONSECUTIVE_ATTENDANCE, ConditionType.INVITE_FRIEND}
)


class EventService:
    """이벤트와 이벤트 보상 관리"""

    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings
        self.event_repo = EventRepository(db)
        self.reward_repo = RewardRepository(db)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def create_event(
        self,
        payload: EventCreateRequest,
        operator_id: str,
        now: Optional[datetime] = None,
    ) -> EventResponse:
        """이벤트 생성

        CANCELED/INACTIVE 상태는 운영자가 지정한 값을 그대로 저장하고,
        그 외에는 기간과 현재 시각으로 상태를 계산합니다.
        """
        now = ensure_utc(now) if now else utcnow()
        start, end = ensure_utc(payload.start_date), ensure_utc(payload.end_date)
        self._validate_window(start, end)

        if payload.status is not None and is_forced(payload.status):
            status = EventStatus(payload.status)
        else:
            status = derive_status(start, end, now)

        fields = dict(
            title=payload.title,
            description=payload.description,
            start_date=start,
            end_date=end,
            status=status.value,
            created_by=operator_id,
            **self._condition_columns(payload.condition),
        )
        event = self.event_repo.create_event(**fields)
        logger.info(
            f"Event {event.id} created by {operator_id} with status {event.status.value}"
        )
        return self._to_response(event, now)

    def update_event(
        self,
        event_id: str,
        payload: EventUpdateRequest,
        operator_id: str,
        now: Optional[datetime] = None,
    ) -> EventResponse:
        """이벤트 부분 수정

        - CANCELED/INACTIVE를 명시하면 그대로 저장
        - 기간을 다시 보내거나 그 외 상태를 명시하면 기간 기준으로 재계산
        - 둘 다 없으면 저장된 상태 유지
        """
        now = ensure_utc(now) if now else utcnow()
        event = self._get_event_or_raise(event_id)
        changes = payload.model_dump(exclude_unset=True)

        fields = {}
        for key in ("title", "description"):
            if key in changes:
                fields[key] = changes[key]

        start = ensure_utc(changes.get("start_date") or event.start_date)
        end = ensure_utc(changes.get("end_date") or event.end_date)
        dates_changed = changes.get("start_date") is not None or changes.get("end_date") is not None
        if dates_changed:
            self._validate_window(start, end)
            fields["start_date"] = start
            fields["end_date"] = end

        if payload.status is not None and is_forced(payload.status):
            fields["status"] = EventStatus(payload.status).value
        elif dates_changed or payload.status is not None:
            fields["status"] = derive_status(start, end, now).value

        if "condition" in changes:
            fields.update(self._condition_columns(payload.condition))

        fields["updated_by"] = operator_id
        updated = self.event_repo.update_event(event.id, **fields)
        logger.info(
            f"Event {event.id} updated by {operator_id}: {sorted(fields.keys())}"
        )
        return self._to_response(updated, now)

    def list_events(
        self,
        caller: Optional[CallerContext] = None,
        status: Optional[EventStatus] = None,
        now: Optional[datetime] = None,
    ) -> EventListResponse:
        """이벤트 목록 (최신 생성순). 관리 권한이 없으면 INACTIVE 이벤트는 제외."""
        now = ensure_utc(now) if now else utcnow()
        privileged = caller is not None and caller.has_management_role
        events = self.event_repo.list_events(status=status, include_inactive=privileged)
        responses = [self._to_response(event, now) for event in events]
        return EventListResponse(events=responses, total_count=len(responses))

    def get_event_detail(
        self,
        event_id: str,
        now: Optional[datetime] = None,
        caller: Optional[CallerContext] = None,
    ) -> EventDetailResponse:
        now = ensure_utc(now) if now else utcnow()
        event = self._get_event_or_raise(event_id, caller)

        rewards = self.reward_repo.list_by_event(event.id)
        base = self._to_response(event, now)
        return EventDetailResponse(**base.model_dump(), rewards=rewards)

    # ------------------------------------------------------------------
    # Rewards
    # ------------------------------------------------------------------

    def create_rewards(
        self,
        event_id: str,
        payloads: List[RewardCreateRequest],
        operator_id: str,
    ) -> List[RewardResponse]:
        """이벤트 보상 일괄 등록 (하나의 트랜잭션)"""
        if not payloads:
            raise InvalidInputError("At least one reward is required")
        event = self._get_event_or_raise(event_id)
        rewards = self.reward_repo.create_many(event.id, payloads, operator_id)
        logger.info(
            f"{len(rewards)} reward(s) registered to event {event.id} by {operator_id}"
        )
        return rewards

    def update_reward(
        self,
        reward_id: str,
        payload: RewardUpdateRequest,
        operator_id: str,
        event_id: Optional[str] = None,
    ) -> RewardResponse:
        reward_id = ensure_uuid(reward_id, "reward_id")
        if event_id is not None:
            event_id = ensure_uuid(event_id, "event_id")

        reward = self.reward_repo.get_reward(reward_id)
        if reward is None or (event_id is not None and reward.event_id != event_id):
            raise RewardNotFoundError(reward_id)

        fields = payload.model_dump(exclude_unset=True)
        if "type" in fields and fields["type"] is not None:
            fields["type"] = payload.type.value
        fields["updated_by"] = operator_id
        updated = self.reward_repo.update_reward(reward_id, **fields)
        logger.info(f"Reward {reward_id} updated by {operator_id}")
        return updated

    def get_event_rewards(
        self, event_id: str, caller: Optional[CallerContext] = None
    ) -> List[RewardResponse]:
        event = self._get_event_or_raise(event_id, caller)
        return self.reward_repo.list_by_event(event.id)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _get_event_or_raise(
        self, event_id: str, caller: Optional[CallerContext] = None
    ) -> Event:
        event_id = ensure_uuid(event_id, "event_id")
        event = self.event_repo.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        if (
            event.status == EventStatus.INACTIVE
            and caller is not None
            and not caller.has_management_role
        ):
            # 숨김 처리된 이벤트는 일반 사용자에게 존재하지 않는 것으로 보임
            raise EventNotFoundError(event_id)
        return event

    @staticmethod
    def _validate_window(start: datetime, end: datetime) -> None:
        if start >= end:
            raise InvalidInputError(
                "start_date must be earlier than end_date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )

    @staticmethod
    def _condition_columns(condition: Optional[EventCondition]) -> dict:
        if condition is None:
            return dict(
                condition_type=None,
                condition_threshold=None,
                condition_description=None,
            )
        if condition.type in THRESHOLD_REQUIRED and condition.threshold is None:
            raise InvalidInputError(
                f"threshold is required for {condition.type.value}",
                details={"condition_type": condition.type.value},
            )
        return dict(
            condition_type=condition.type.value,
            condition_threshold=condition.threshold,
            condition_description=condition.description,
        )

    @staticmethod
    def _to_response(event: Event, now: datetime) -> EventResponse:
        is_active = (
            not is_forced(event.status)
            and derive_status(event.start_date, event.end_date, now)
            == EventStatus.ONGOING
        )
        return EventResponse(
            id=event.id,
            title=event.title,
            description=event.description,
            start_date=event.start_date,
            end_date=event.end_date,
            status=event.status,
            is_active=is_active,
            condition=event.condition,
            created_by=event.created_by,
            updated_by=event.updated_by,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )
