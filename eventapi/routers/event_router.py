import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from eventapi.core.caller_context import get_caller_context, require_operator
from eventapi.deps import get_event_service
from eventapi.models.event import EventStatus
from eventapi.schemas.event import (
    EventCreateRequest,
    EventDetailResponse,
    EventListResponse,
    EventResponse,
    EventUpdateRequest,
)
from eventapi.schemas.identity import CallerContext
from eventapi.schemas.reward import (
    RewardBulkCreateRequest,
    RewardResponse,
    RewardUpdateRequest,
)
from eventapi.services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=EventListResponse)
async def list_events(
    status_filter: Optional[EventStatus] = Query(None, alias="status", description="상태 필터"),
    caller: CallerContext = Depends(get_caller_context),
    event_service: EventService = Depends(get_event_service),
) -> EventListResponse:
    """이벤트 목록 조회 (최신 생성순)"""
    return event_service.list_events(caller=caller, status=status_filter)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreateRequest,
    caller: CallerContext = Depends(require_operator),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    """이벤트 생성 (운영자)"""
    return event_service.create_event(payload, operator_id=caller.user_id)


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event_detail(
    event_id: str = Path(..., description="이벤트 ID"),
    caller: CallerContext = Depends(get_caller_context),
    event_service: EventService = Depends(get_event_service),
) -> EventDetailResponse:
    """이벤트 상세 조회 (보상 목록 포함)"""
    return event_service.get_event_detail(event_id, caller=caller)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    payload: EventUpdateRequest,
    event_id: str = Path(..., description="이벤트 ID"),
    caller: CallerContext = Depends(require_operator),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    """이벤트 수정 (운영자)"""
    return event_service.update_event(event_id, payload, operator_id=caller.user_id)


@router.get("/{event_id}/rewards", response_model=List[RewardResponse])
async def get_event_rewards(
    event_id: str = Path(..., description="이벤트 ID"),
    caller: CallerContext = Depends(get_caller_context),
    event_service: EventService = Depends(get_event_service),
) -> List[RewardResponse]:
    return event_service.get_event_rewards(event_id, caller=caller)


@router.post(
    "/{event_id}/rewards",
    response_model=List[RewardResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_rewards(
    payload: RewardBulkCreateRequest,
    event_id: str = Path(..., description="이벤트 ID"),
    caller: CallerContext = Depends(require_operator),
    event_service: EventService = Depends(get_event_service),
) -> List[RewardResponse]:
    """이벤트 보상 일괄 등록 (운영자)"""
    return event_service.create_rewards(event_id, payload.rewards, operator_id=caller.user_id)


@router.put("/{event_id}/rewards/{reward_id}", response_model=RewardResponse)
async def update_reward(
    payload: RewardUpdateRequest,
    event_id: str = Path(..., description="이벤트 ID"),
    reward_id: str = Path(..., description="보상 ID"),
    caller: CallerContext = Depends(require_operator),
    event_service: EventService = Depends(get_event_service),
) -> RewardResponse:
    """이벤트 보상 수정 (운영자)"""
    return event_service.update_reward(
        reward_id, payload, operator_id=caller.user_id, event_id=event_id
    )
