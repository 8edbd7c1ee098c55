from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventapi.core.exceptions import AlreadyCheckedInError
from eventapi.models.attendance import Attendance as AttendanceModel
from eventapi.repositories.base import BaseRepository
from eventapi.schemas.attendance import AttendanceResponse


class AttendanceRepository(BaseRepository[AttendanceModel, AttendanceResponse]):
    """출석 원장 저장소 (append-only)"""

    def __init__(self, db: Session):
        super().__init__(AttendanceModel, AttendanceResponse, db)

    def find_latest_between(
        self, user_id: str, start: datetime, end: datetime
    ) -> Optional[AttendanceResponse]:
        """[start, end) 구간의 가장 최근 출석 기록"""
        instance = (
            self.db.query(self.model_class)
            .filter(
                self.model_class.user_id == user_id,
                self.model_class.civil_date >= start,
                self.model_class.civil_date < end,
            )
            .order_by(self.model_class.created_at.desc())
            .first()
        )
        return self._to_schema(instance)

    def get_latest(self, user_id: str) -> Optional[AttendanceResponse]:
        """생성 순서 기준 가장 최근 출석 기록"""
        instance = (
            self.db.query(self.model_class)
            .filter(self.model_class.user_id == user_id)
            .order_by(
                self.model_class.created_at.desc(), self.model_class.civil_date.desc()
            )
            .first()
        )
        return self._to_schema(instance)

    def list_history(self, user_id: str, limit: int = 30) -> List[AttendanceResponse]:
        query = (
            self.db.query(self.model_class)
            .filter(self.model_class.user_id == user_id)
            .order_by(self.model_class.civil_date.desc())
            .limit(limit)
        )
        return self._to_schemas(query.all())

    def create_attendance(
        self, user_id: str, civil_date: datetime, consecutive_days: int
    ) -> AttendanceResponse:
        try:
            return self.create(
                user_id=user_id,
                civil_date=civil_date,
                consecutive_days=consecutive_days,
            )
        except IntegrityError:
            # 같은 날 동시 출석 요청 중 늦게 들어온 쪽
            raise AlreadyCheckedInError(user_id) from None
