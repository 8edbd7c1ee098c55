import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from eventapi.config import Settings, settings as default_settings
from eventapi.core.exceptions import AlreadyCheckedInError
from eventapi.repositories.attendance_repository import AttendanceRepository
from eventapi.schemas.attendance import AttendanceResponse, AttendanceStatusResponse
from eventapi.utils.timezone_utils import (
    civil_date,
    civil_day_start,
    ensure_utc,
    next_civil_day_start,
    previous_civil_day_start,
    utcnow,
)

logger = logging.getLogger(__name__)


class AttendanceService:
    """출석 체크 및 연속 출석 계산

    하루의 경계는 설정된 로컬 타임존(TIMEZONE)의 자정입니다.
    """

    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings
        self.zone = settings.TIMEZONE
        self.attendance_repo = AttendanceRepository(db)

    def check_in(
        self, user_id: str, now: Optional[datetime] = None
    ) -> AttendanceResponse:
        """오늘 출석을 기록합니다.

        Args:
            user_id: 사용자 ID
            now: 기준 시각 (기본값: 현재 UTC)

        Returns:
            AttendanceResponse: 생성된 출석 기록

        Raises:
            AlreadyCheckedInError: 같은 로컬 날짜에 이미 출석한 경우
        """
        now = ensure_utc(now) if now else utcnow()
        today = civil_day_start(now, self.zone)
        tomorrow = next_civil_day_start(today, self.zone)
        yesterday = previous_civil_day_start(today, self.zone)

        if self.attendance_repo.find_latest_between(user_id, today, tomorrow):
            raise AlreadyCheckedInError(user_id)

        previous = self.attendance_repo.find_latest_between(user_id, yesterday, today)
        consecutive_days = previous.consecutive_days + 1 if previous else 1

        attendance = self.attendance_repo.create_attendance(
            user_id=user_id, civil_date=today, consecutive_days=consecutive_days
        )
        logger.info(
            f"User {user_id} checked in for {civil_date(today, self.zone)} "
            f"(streak {consecutive_days})"
        )
        return attendance

    def get_latest(self, user_id: str) -> Optional[AttendanceResponse]:
        return self.attendance_repo.get_latest(user_id)

    def get_status(
        self, user_id: str, now: Optional[datetime] = None, limit: int = 30
    ) -> AttendanceStatusResponse:
        """현재 연속 출석 일수와 최근 출석 기록"""
        now = ensure_utc(now) if now else utcnow()
        limit = max(1, min(limit, 100))
        latest = self.attendance_repo.get_latest(user_id)
        history = self.attendance_repo.list_history(user_id, limit=limit)
        if latest is None:
            return AttendanceStatusResponse(user_id=user_id, history=history)

        today = civil_day_start(now, self.zone)
        return AttendanceStatusResponse(
            user_id=user_id,
            consecutive_days=latest.consecutive_days,
            checked_in_today=ensure_utc(latest.civil_date) == today,
            last_attended_on=civil_date(latest.civil_date, self.zone),
            history=history,
        )
