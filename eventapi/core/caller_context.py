"""
호출자 컨텍스트

인증은 게이트웨이에서 끝나고, 인증된 사용자 정보가 신뢰 헤더로 전달됩니다.
INTERNAL_API_KEY가 설정되어 있으면 x-api-key 헤더가 일치해야 합니다.
"""

import hmac
from typing import Optional

from fastapi import Depends, Header

from eventapi.config import Settings, get_settings
from eventapi.core.exceptions import AuthenticationError, AuthorizationError
from eventapi.models.user import UserRole
from eventapi.schemas.identity import CallerContext


def get_caller_context(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> CallerContext:
    """필수 호출자 정보 - 신뢰 헤더가 없으면 401"""
    if settings.INTERNAL_API_KEY and not hmac.compare_digest(
        x_api_key or "", settings.INTERNAL_API_KEY
    ):
        raise AuthenticationError("Invalid internal api key")

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise AuthenticationError("Authentication required")

    return CallerContext(
        user_id=user_id,
        role=UserRole.parse(x_user_role),
        email=(x_user_email or "").strip() or None,
    )


def require_operator(
    caller: CallerContext = Depends(get_caller_context),
) -> CallerContext:
    """운영자(OPERATOR/ADMIN) 권한이 필요한 엔드포인트용 의존성"""
    if not caller.can_manage_events:
        raise AuthorizationError("Operator access required")
    return caller
