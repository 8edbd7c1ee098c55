import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from eventapi.core.caller_context import get_caller_context, require_operator
from eventapi.deps import get_fulfillment_service, get_history_service
from eventapi.schemas.claim import (
    ClaimHistoryItem,
    ClaimResponse,
    ClaimStatusUpdateRequest,
    RewardHistoryResponse,
)
from eventapi.schemas.identity import CallerContext
from eventapi.services.fulfillment_service import FulfillmentService
from eventapi.services.history_service import HistoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("/history", response_model=RewardHistoryResponse)
async def get_reward_history(
    user_id: Optional[str] = Query(None, description="사용자 ID (관리 권한 필요)"),
    event_id: Optional[str] = Query(None, description="이벤트 ID"),
    caller: CallerContext = Depends(get_caller_context),
    history_service: HistoryService = Depends(get_history_service),
) -> RewardHistoryResponse:
    """보상 요청 내역 (이벤트별)"""
    return history_service.get_reward_history(caller, user_id=user_id, event_id=event_id)


@router.get("/history/{claim_id}", response_model=ClaimHistoryItem)
async def get_claim(
    claim_id: str = Path(..., description="보상 요청 ID"),
    caller: CallerContext = Depends(get_caller_context),
    history_service: HistoryService = Depends(get_history_service),
) -> ClaimHistoryItem:
    return history_service.get_claim(claim_id, caller)


@router.patch("/claims/{claim_id}/status", response_model=ClaimResponse)
async def update_claim_status(
    payload: ClaimStatusUpdateRequest,
    claim_id: str = Path(..., description="보상 요청 ID"),
    caller: CallerContext = Depends(require_operator),
    fulfillment_service: FulfillmentService = Depends(get_fulfillment_service),
) -> ClaimResponse:
    """보상 지급 결과 반영 (운영자)"""
    return fulfillment_service.update_claim_status(
        claim_id, payload.status, operator_id=caller.user_id
    )
