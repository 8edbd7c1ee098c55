from datetime import datetime

from eventapi.models.event import EventStatus
from eventapi.utils.timezone_utils import ensure_utc

# Operator-set statuses; automatic recomputation never overwrites them
FORCED_STATUSES = frozenset({EventStatus.CANCELED, EventStatus.INACTIVE})


def derive_status(start: datetime, end: datetime, now: datetime) -> EventStatus:
    """기간과 기준 시각으로 이벤트 상태를 계산합니다."""
    start, end, now = ensure_utc(start), ensure_utc(end), ensure_utc(now)
    if now >= end:
        return EventStatus.ENDED
    if start <= now <= end:
        return EventStatus.ONGOING
    return EventStatus.UPCOMING


def is_within_window(start: datetime, end: datetime, now: datetime) -> bool:
    start, end, now = ensure_utc(start), ensure_utc(end), ensure_utc(now)
    return start <= now <= end


def is_forced(status) -> bool:
    return status is not None and EventStatus(status) in FORCED_STATUSES
