import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from eventapi.core.caller_context import get_caller_context
from eventapi.core.exceptions import InvalidInputError
from eventapi.deps import (
    get_attendance_service,
    get_claim_service,
    get_referral_service,
)
from eventapi.schemas.attendance import AttendanceResponse, AttendanceStatusResponse
from eventapi.schemas.claim import ClaimResponse, RewardClaimRequest
from eventapi.schemas.identity import CallerContext
from eventapi.schemas.referral import (
    FriendInviteRequest,
    ReferralListResponse,
    ReferralResponse,
)
from eventapi.services.attendance_service import AttendanceService
from eventapi.services.claim_service import ClaimService
from eventapi.services.referral_service import ReferralService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/participation", tags=["participation"])


def _resolve_invitee_email(caller: CallerContext, requested: Optional[str]) -> str:
    """초대받은 사람 이메일은 게이트웨이가 전달한 X-User-Email이 우선"""
    if caller.email:
        if requested and requested.strip().lower() != caller.email.strip().lower():
            raise InvalidInputError(
                "invitee_email does not match the authenticated user",
                details={"invitee_email": requested},
            )
        return caller.email
    if not requested:
        raise InvalidInputError("invitee_email is required")
    return requested


@router.post(
    "/attendance",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def check_in(
    caller: CallerContext = Depends(get_caller_context),
    attendance_service: AttendanceService = Depends(get_attendance_service),
) -> AttendanceResponse:
    """오늘 출석 체크"""
    return attendance_service.check_in(caller.user_id)


@router.get("/attendance", response_model=AttendanceStatusResponse)
async def get_attendance_status(
    limit: int = Query(30, ge=1, le=100, description="최근 출석 기록 수"),
    caller: CallerContext = Depends(get_caller_context),
    attendance_service: AttendanceService = Depends(get_attendance_service),
) -> AttendanceStatusResponse:
    """연속 출석 현황과 최근 출석 기록"""
    return attendance_service.get_status(caller.user_id, limit=limit)


@router.post(
    "/friends",
    response_model=ReferralResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_friend(
    payload: FriendInviteRequest,
    caller: CallerContext = Depends(get_caller_context),
    referral_service: ReferralService = Depends(get_referral_service),
) -> ReferralResponse:
    """친구 초대 등록

    호출자가 초대받은 사람이며, 나를 초대한 사람의 이메일을 입력합니다.
    """
    invitee_email = _resolve_invitee_email(caller, payload.invitee_email)
    return await referral_service.invite_friend(
        inviter_email=payload.inviter_email,
        invitee_id=caller.user_id,
        invitee_email=invitee_email,
    )


@router.post(
    "/rewards",
    response_model=ClaimResponse,
    status_code=status.HTTP_201_CREATED,
)
async def request_reward(
    payload: RewardClaimRequest,
    caller: CallerContext = Depends(get_caller_context),
    claim_service: ClaimService = Depends(get_claim_service),
) -> ClaimResponse:
    """보상 요청 (PENDING 상태로 접수)"""
    return claim_service.request_reward(
        caller.user_id, payload.event_id, payload.reward_id
    )


@router.get("/friends", response_model=ReferralListResponse)
async def list_invited_friends(
    caller: CallerContext = Depends(get_caller_context),
    referral_service: ReferralService = Depends(get_referral_service),
) -> ReferralListResponse:
    """내가 초대한 친구 목록"""
    referrals = referral_service.list_invites(caller.user_id)
    return ReferralListResponse(
        referrals=referrals,
        total_count=referral_service.count_invites(caller.user_id),
    )
