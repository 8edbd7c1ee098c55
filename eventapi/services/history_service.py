import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from eventapi.core.exceptions import ClaimNotFoundError
from eventapi.repositories.claim_repository import ClaimRepository
from eventapi.schemas.claim import (
    ClaimHistoryItem,
    EventClaimGroup,
    RewardHistoryResponse,
)
from eventapi.schemas.identity import CallerContext
from eventapi.utils.ids import ensure_uuid

logger = logging.getLogger(__name__)


class HistoryService:
    """보상 요청 내역 조회

    ADMIN/OPERATOR/AUDITOR는 모든 사용자의 내역을 볼 수 있고, 그 외 사용자는
    user_id를 지정해도 본인 내역만 조회됩니다.
    """

    def __init__(self, db: Session):
        self.db = db
        self.claim_repo = ClaimRepository(db)

    def get_reward_history(
        self,
        caller: CallerContext,
        user_id: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> RewardHistoryResponse:
        if not caller.has_management_role:
            if user_id is not None and user_id != caller.user_id:
                logger.info(
                    f"User {caller.user_id} requested history of {user_id}; showing own history"
                )
            user_id = caller.user_id
        if event_id is not None:
            event_id = ensure_uuid(event_id, "event_id")

        items = self.claim_repo.find_history(user_id=user_id, event_id=event_id)
        return RewardHistoryResponse(
            events=self._group_by_event(items), total_count=len(items)
        )

    def get_claim(self, claim_id: str, caller: CallerContext) -> ClaimHistoryItem:
        claim_id = ensure_uuid(claim_id, "claim_id")
        items = self.claim_repo.find_history(claim_id=claim_id)
        if not items:
            raise ClaimNotFoundError(claim_id)
        item = items[0]
        if not caller.has_management_role and item.user_id != caller.user_id:
            raise ClaimNotFoundError(claim_id)
        return item

    @staticmethod
    def _group_by_event(items: List[ClaimHistoryItem]) -> List[EventClaimGroup]:
        # items는 최신순이므로 그룹 순서는 각 이벤트의 가장 최근 요청 순서가 됨
        groups: Dict[str, EventClaimGroup] = {}
        for item in items:
            group = groups.get(item.event_id)
            if group is None:
                group = EventClaimGroup(event_id=item.event_id, event_title=item.event_title)
                groups[item.event_id] = group
            group.claims.append(item)
        return list(groups.values())
