"""Caller role enumeration. User accounts live in the identity service."""

from enum import Enum
from typing import Union


class UserRole(str, Enum):
    """사용자 역할 정의"""

    USER = "USER"  # 일반 사용자
    OPERATOR = "OPERATOR"  # 운영자
    AUDITOR = "AUDITOR"  # 감사자
    ADMIN = "ADMIN"  # 관리자

    @classmethod
    def parse(cls, role: Union[str, "UserRole", None]) -> "UserRole":
        """대소문자를 구분하지 않고 역할을 해석합니다. 알 수 없는 값은 USER."""
        if isinstance(role, cls):
            return role
        try:
            return cls(str(role or "").strip().upper())
        except ValueError:
            return cls.USER

    @classmethod
    def can_manage_events(cls, role: Union[str, "UserRole", None]) -> bool:
        """이벤트/보상 생성, 수정 및 보상 처리 권한"""
        return cls.parse(role) in (cls.OPERATOR, cls.ADMIN)

    @classmethod
    def has_management_role(cls, role: Union[str, "UserRole", None]) -> bool:
        """다른 사용자의 보상 내역 조회 권한"""
        return cls.parse(role) in (cls.ADMIN, cls.AUDITOR, cls.OPERATOR)
