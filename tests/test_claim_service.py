import uuid
from datetime import datetime, timezone

import pytest

from eventapi.core.exceptions import (
    ConditionNotMetError,
    EventInactiveError,
    EventNotFoundError,
    EventPeriodError,
    InactiveOrOutOfWindowError,
    InvalidInputError,
    RewardAlreadyClaimedError,
    RewardNotFoundError,
)
from eventapi.models.event import ConditionType, EventStatus
from eventapi.models.reward import ClaimStatus, RewardClaim as RewardClaimModel
from eventapi.services.attendance_service import AttendanceService
from eventapi.services.claim_service import ClaimService
from eventapi.services.fulfillment_service import FulfillmentService


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


NOW = utc(2025, 1, 15, 3)


@pytest.fixture
def claim_service(db, test_settings):
    return ClaimService(db, settings=test_settings)


class TestRequestReward:
    def test_attendance_streak_scenario(self, db, claim_service, test_settings, make_event, make_reward):
        """3일 연속 출석 이벤트: 2일차에는 실패, 3일차에 PENDING으로 접수, 재요청은 거부"""
        event = make_event(
            condition_type=ConditionType.CONSECUTIVE_ATTENDANCE.value, condition_threshold=3
        )
        reward = make_reward(event.id)
        attendance = AttendanceService(db, settings=test_settings)

        attendance.check_in("user-1", now=utc(2025, 1, 10, 3))
        attendance.check_in("user-1", now=utc(2025, 1, 11, 3))
        with pytest.raises(ConditionNotMetError):
            claim_service.request_reward("user-1", event.id, reward.id, now=utc(2025, 1, 11, 4))

        attendance.check_in("user-1", now=utc(2025, 1, 12, 3))
        claim = claim_service.request_reward(
            "user-1", event.id, reward.id, now=utc(2025, 1, 12, 4)
        )

        assert claim.status == ClaimStatus.PENDING
        assert claim.reward_at is None
        assert claim.reward.name == reward.name

        with pytest.raises(RewardAlreadyClaimedError):
            claim_service.request_reward("user-1", event.id, reward.id, now=utc(2025, 1, 12, 5))
        assert db.query(RewardClaimModel).count() == 1

    def test_after_end_date_rejected_even_if_stored_ongoing(self, claim_service, make_event, make_reward):
        event = make_event(status=EventStatus.ONGOING.value)
        reward = make_reward(event.id)

        with pytest.raises(EventPeriodError) as exc_info:
            claim_service.request_reward("user-1", event.id, reward.id, now=utc(2025, 2, 1))

        assert isinstance(exc_info.value, InactiveOrOutOfWindowError)

    def test_before_start_rejected(self, claim_service, make_event, make_reward):
        event = make_event(status=EventStatus.ONGOING.value)
        reward = make_reward(event.id)

        with pytest.raises(EventPeriodError):
            claim_service.request_reward("user-1", event.id, reward.id, now=utc(2024, 12, 31))

    def test_stored_ended_inside_window_is_claimable(self, claim_service, make_event, make_reward):
        event = make_event(status=EventStatus.ENDED.value)
        reward = make_reward(event.id)

        claim = claim_service.request_reward("user-1", event.id, reward.id, now=NOW)
        assert claim.status == ClaimStatus.PENDING

    @pytest.mark.parametrize("status", [EventStatus.CANCELED, EventStatus.INACTIVE])
    def test_forced_status_rejected(self, claim_service, make_event, make_reward, status):
        event = make_event(status=status.value)
        reward = make_reward(event.id)

        with pytest.raises(EventInactiveError) as exc_info:
            claim_service.request_reward("user-1", event.id, reward.id, now=NOW)

        assert isinstance(exc_info.value, InactiveOrOutOfWindowError)
        assert exc_info.value.error_code == "EVENT_INACTIVE"

    def test_reward_must_belong_to_event(self, claim_service, make_event, make_reward):
        event = make_event()
        other = make_event(title="other")
        reward = make_reward(other.id)

        with pytest.raises(RewardNotFoundError):
            claim_service.request_reward("user-1", event.id, reward.id, now=NOW)

    def test_unknown_and_malformed_ids(self, claim_service, make_event):
        event = make_event()
        with pytest.raises(EventNotFoundError):
            claim_service.request_reward("user-1", str(uuid.uuid4()), str(uuid.uuid4()), now=NOW)
        with pytest.raises(RewardNotFoundError):
            claim_service.request_reward("user-1", event.id, str(uuid.uuid4()), now=NOW)
        with pytest.raises(InvalidInputError):
            claim_service.request_reward("user-1", "event-1", str(uuid.uuid4()), now=NOW)

    def test_losing_concurrent_claim_is_already_claimed(self, db, claim_service, make_event, make_reward, monkeypatch):
        event = make_event()
        reward = make_reward(event.id)
        claim_service.request_reward("user-1", event.id, reward.id, now=NOW)
        monkeypatch.setattr(
            claim_service.claim_repo, "find_by_triple", lambda *args: None
        )

        with pytest.raises(RewardAlreadyClaimedError):
            claim_service.request_reward("user-1", event.id, reward.id, now=NOW)

        assert db.query(RewardClaimModel).count() == 1

    def test_repeat_after_fulfillment_still_rejected(self, db, claim_service, make_event, make_reward):
        event = make_event()
        reward = make_reward(event.id)
        claim = claim_service.request_reward("user-1", event.id, reward.id, now=NOW)
        FulfillmentService(db).update_claim_status(claim.id, ClaimStatus.FAILURE, "operator-1", now=NOW)

        with pytest.raises(RewardAlreadyClaimedError):
            claim_service.request_reward("user-1", event.id, reward.id, now=NOW)
        assert db.query(RewardClaimModel).count() == 1

    def test_different_users_claim_independently(self, claim_service, make_event, make_reward):
        event = make_event()
        reward = make_reward(event.id)

        first = claim_service.request_reward("user-1", event.id, reward.id, now=NOW)
        second = claim_service.request_reward("user-2", event.id, reward.id, now=NOW)

        assert first.id != second.id
