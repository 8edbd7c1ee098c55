import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from eventapi.core.exceptions import (
    DuplicateReferralError,
    InvalidInputError,
    ServiceCommunicationError,
    UserNotFoundError,
)
from eventapi.models.referral import Referral as ReferralModel
from eventapi.schemas.identity import IdentityUser
from eventapi.services.referral_service import ReferralService


@pytest.fixture
def identity_client():
    client = Mock()
    client.resolve_user_by_email = AsyncMock(
        return_value=IdentityUser(id="inviter-1", email="inviter@example.com", role="USER")
    )
    return client


@pytest.fixture
def referral_service(db, identity_client):
    return ReferralService(db, identity_client=identity_client)


class TestInviteFriend:
    def test_records_normalised_referral(self, db, referral_service, identity_client):
        referral = asyncio.run(
            referral_service.invite_friend(
                "  Inviter@Example.COM ", "invitee-1", "Invitee@Example.com"
            )
        )

        assert referral.inviter_id == "inviter-1"
        assert referral.inviter_email == "inviter@example.com"
        assert referral.invitee_email == "invitee@example.com"
        identity_client.resolve_user_by_email.assert_awaited_once_with("inviter@example.com")
        assert db.query(ReferralModel).count() == 1

    def test_self_invite_rejected_before_store_access(self, db, identity_client):
        service = ReferralService(db, identity_client=identity_client)
        service.referral_repo = Mock()

        with pytest.raises(InvalidInputError):
            asyncio.run(
                service.invite_friend(" Same@Example.com", "invitee-1", "same@example.COM ")
            )

        assert service.referral_repo.method_calls == []
        identity_client.resolve_user_by_email.assert_not_awaited()

    def test_resolved_inviter_equal_to_invitee_rejected(self, db, referral_service, identity_client):
        identity_client.resolve_user_by_email.return_value = IdentityUser(
            id="invitee-1", email="other@example.com"
        )
        with pytest.raises(InvalidInputError):
            asyncio.run(
                referral_service.invite_friend("other@example.com", "invitee-1", "me@example.com")
            )
        assert db.query(ReferralModel).count() == 0

    def test_invitee_can_only_be_referred_once(self, referral_service, identity_client):
        asyncio.run(
            referral_service.invite_friend("inviter@example.com", "invitee-1", "me@example.com")
        )
        identity_client.resolve_user_by_email.reset_mock()

        with pytest.raises(DuplicateReferralError):
            asyncio.run(
                referral_service.invite_friend("another@example.com", "invitee-1", "new@example.com")
            )
        with pytest.raises(DuplicateReferralError):
            asyncio.run(
                referral_service.invite_friend("another@example.com", "invitee-2", "ME@example.com")
            )
        identity_client.resolve_user_by_email.assert_not_awaited()

    def test_losing_concurrent_insert_is_duplicate(self, db, referral_service, monkeypatch):
        asyncio.run(
            referral_service.invite_friend("inviter@example.com", "invitee-1", "me@example.com")
        )
        monkeypatch.setattr(
            referral_service.referral_repo, "exists_for_invitee", lambda *args: False
        )

        with pytest.raises(DuplicateReferralError):
            asyncio.run(
                referral_service.invite_friend("inviter@example.com", "invitee-1", "me@example.com")
            )
        assert db.query(ReferralModel).count() == 1

    def test_unknown_inviter(self, db, referral_service, identity_client):
        identity_client.resolve_user_by_email.side_effect = UserNotFoundError()
        with pytest.raises(UserNotFoundError):
            asyncio.run(
                referral_service.invite_friend("ghost@example.com", "invitee-1", "me@example.com")
            )
        assert db.query(ReferralModel).count() == 0

    def test_identity_service_down(self, db, referral_service, identity_client):
        identity_client.resolve_user_by_email.side_effect = ServiceCommunicationError()
        with pytest.raises(ServiceCommunicationError):
            asyncio.run(
                referral_service.invite_friend("inviter@example.com", "invitee-1", "me@example.com")
            )
        assert db.query(ReferralModel).count() == 0


class TestInviteCounts:
    def test_count_and_list(self, referral_service):
        for index in range(3):
            asyncio.run(
                referral_service.invite_friend(
                    "inviter@example.com", f"invitee-{index}", f"friend{index}@example.com"
                )
            )

        assert referral_service.count_invites("inviter-1") == 3
        assert referral_service.count_invites("someone-else") == 0
        assert len(referral_service.list_invites("inviter-1")) == 3
