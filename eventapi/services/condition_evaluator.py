"""
참여 조건 평가

이벤트에 설정된 단일 조건(유형, 기준값)을 사용자의 출석/초대 원장과 비교합니다.
PARTICIPATION_VERIFICATION은 증빙이 외부에서 확인되므로 이 단계에서는 항상 통과합니다.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from eventapi.core.exceptions import ConditionNotMetError
from eventapi.models.event import ConditionType
from eventapi.repositories.attendance_repository import AttendanceRepository
from eventapi.repositories.referral_repository import ReferralRepository
from eventapi.schemas.event import Event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConditionEvaluation:
    passed: bool
    condition_type: Optional[str] = None
    threshold: Optional[int] = None
    actual: Optional[int] = None


class ConditionEvaluator:
    def __init__(self, db: Session):
        self.db = db
        self.attendance_repo = AttendanceRepository(db)
        self.referral_repo = ReferralRepository(db)

    def evaluate(self, event: Event, user_id: str) -> ConditionEvaluation:
        if event.condition_type is None:
            return ConditionEvaluation(passed=True)

        condition_type = ConditionType(event.condition_type)
        threshold = event.condition_threshold

        if condition_type == ConditionType.CONSECUTIVE_ATTENDANCE:
            # 가장 최근 출석 기록의 연속 일수 (끊긴 연속 기록도 그대로 인정)
            latest = self.attendance_repo.get_latest(user_id)
            actual = latest.consecutive_days if latest else 0
            passed = latest is not None and actual >= (threshold or 0)
        elif condition_type == ConditionType.INVITE_FRIEND:
            actual = self.referral_repo.count_by_inviter(user_id)
            passed = actual >= (threshold or 0)
        else:
            actual = None
            passed = True

        return ConditionEvaluation(
            passed=passed,
            condition_type=condition_type.value,
            threshold=threshold,
            actual=actual,
        )

    def ensure_met(self, event: Event, user_id: str) -> ConditionEvaluation:
        evaluation = self.evaluate(event, user_id)
        if not evaluation.passed:
            logger.info(
                f"Condition {evaluation.condition_type}({evaluation.threshold}) not met "
                f"for user {user_id} on event {event.id}: actual={evaluation.actual}"
            )
            raise ConditionNotMetError(
                evaluation.condition_type, evaluation.threshold, evaluation.actual
            )
        return evaluation
