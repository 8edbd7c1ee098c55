import uuid
from datetime import datetime, timezone

import pytest

from eventapi.core.exceptions import ClaimNotFoundError
from eventapi.models.reward import RewardClaim as RewardClaimModel
from eventapi.repositories.claim_repository import ClaimRepository
from eventapi.services.history_service import HistoryService


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def history_service(db):
    return HistoryService(db)


@pytest.fixture
def claims(db, make_event, make_reward):
    """user-1: 이벤트 A(2건), 이벤트 B(1건) / user-2: 이벤트 A(1건)"""
    repo = ClaimRepository(db)
    event_a = make_event(title="Event A")
    event_b = make_event(title="Event B")
    reward_a1 = make_reward(event_a.id, name="A1")
    reward_a2 = make_reward(event_a.id, name="A2")
    reward_b1 = make_reward(event_b.id, name="B1")

    created = {
        "a1": repo.create_claim("user-1", event_a.id, reward_a1.id),
        "b1": repo.create_claim("user-1", event_b.id, reward_b1.id),
        "a2": repo.create_claim("user-1", event_a.id, reward_a2.id),
        "other": repo.create_claim("user-2", event_a.id, reward_a1.id),
    }
    times = {
        "a1": utc(2025, 1, 10),
        "b1": utc(2025, 1, 11),
        "a2": utc(2025, 1, 12),
        "other": utc(2025, 1, 13),
    }
    for key, created_at in times.items():
        db.query(RewardClaimModel).filter(RewardClaimModel.id == created[key].id).update(
            {"created_at": created_at}
        )
    db.commit()
    return {"event_a": event_a, "event_b": event_b, **created}


class TestRewardHistory:
    def test_user_sees_only_own_claims_even_with_foreign_user_id(
        self, history_service, user_caller, claims
    ):
        result = history_service.get_reward_history(user_caller, user_id="user-2")

        user_ids = {c.user_id for g in result.events for c in g.claims}
        assert user_ids == {"user-1"}
        assert result.total_count == 3

    def test_grouped_by_event_newest_first(self, history_service, user_caller, claims):
        result = history_service.get_reward_history(user_caller)

        assert [g.event_id for g in result.events] == [
            claims["event_a"].id,
            claims["event_b"].id,
        ]
        group_a = result.events[0]
        assert group_a.event_title == "Event A"
        assert [c.claim_id for c in group_a.claims] == [claims["a2"].id, claims["a1"].id]
        assert group_a.claims[0].reward.name == "A2"

    def test_privileged_caller_sees_everyone(self, history_service, auditor_caller, claims):
        result = history_service.get_reward_history(auditor_caller)
        assert result.total_count == 4

        only_user_2 = history_service.get_reward_history(auditor_caller, user_id="user-2")
        assert [c.claim_id for g in only_user_2.events for c in g.claims] == [claims["other"].id]

    def test_event_filter(self, history_service, operator_caller, claims):
        result = history_service.get_reward_history(
            operator_caller, event_id=claims["event_b"].id
        )
        assert [g.event_id for g in result.events] == [claims["event_b"].id]

    def test_dangling_reference_still_rendered(self, db, history_service, user_caller):
        missing_event = str(uuid.uuid4())
        ClaimRepository(db).create_claim("user-1", missing_event, str(uuid.uuid4()))

        result = history_service.get_reward_history(user_caller)

        assert result.events[0].event_id == missing_event
        assert result.events[0].event_title is None
        assert result.events[0].claims[0].reward.name is None


class TestGetClaim:
    def test_owner_can_read(self, history_service, user_caller, claims):
        item = history_service.get_claim(claims["a1"].id, user_caller)
        assert item.claim_id == claims["a1"].id
        assert item.event_title == "Event A"

    def test_foreign_claim_is_not_found_for_user(self, history_service, user_caller, claims):
        with pytest.raises(ClaimNotFoundError):
            history_service.get_claim(claims["other"].id, user_caller)

    def test_privileged_can_read_any(self, history_service, operator_caller, claims):
        item = history_service.get_claim(claims["other"].id, operator_caller)
        assert item.user_id == "user-2"

    def test_missing_claim(self, history_service, operator_caller):
        with pytest.raises(ClaimNotFoundError):
            history_service.get_claim(str(uuid.uuid4()), operator_caller)
