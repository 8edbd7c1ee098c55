"""
타임존 유틸리티

저장은 항상 UTC 기준으로 하고, "오늘이 며칠인가"를 판단할 때만
설정된 로컬 타임존(기본 Asia/Seoul)의 달력 날짜를 사용합니다.
모든 함수는 기준 시각과 타임존을 인자로 받습니다.
"""

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Optional, Union

import pytz
from pytz.tzinfo import BaseTzInfo

ZoneLike = Union[str, BaseTzInfo]


def utcnow() -> datetime:
    """현재 UTC 시간을 반환합니다."""
    return datetime.now(timezone.utc)


@lru_cache(maxsize=32)
def _zone_by_name(name: str) -> BaseTzInfo:
    return pytz.timezone(name)


def get_zone(zone: ZoneLike) -> BaseTzInfo:
    """타임존 이름 또는 pytz 타임존을 pytz 타임존으로 변환합니다."""
    if isinstance(zone, str):
        return _zone_by_name(zone)
    return zone


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """naive datetime은 UTC로 간주하고, aware datetime은 UTC로 변환합니다."""
    if dt is None:
        return None
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local(dt: datetime, zone: ZoneLike) -> datetime:
    """UTC 시각을 로컬 타임존 시각으로 변환합니다."""
    return ensure_utc(dt).astimezone(get_zone(zone))


def civil_date(dt: datetime, zone: ZoneLike) -> date:
    """시각이 속한 로컬 달력 날짜"""
    return to_local(dt, zone).date()


def local_midnight_utc(day: date, zone: ZoneLike) -> datetime:
    """로컬 날짜의 자정(00:00)을 UTC 시각으로 반환합니다."""
    tz = get_zone(zone)
    local_midnight = tz.localize(datetime.combine(day, time(0, 0)), is_dst=False)
    return local_midnight.astimezone(timezone.utc)


def civil_day_start(now: datetime, zone: ZoneLike) -> datetime:
    """now가 속한 로컬 하루의 시작 시각(UTC)"""
    return local_midnight_utc(civil_date(now, zone), zone)


def next_civil_day_start(day_start: datetime, zone: ZoneLike) -> datetime:
    """다음 로컬 하루의 시작 시각(UTC). DST가 있는 타임존에서도 달력 기준으로 계산합니다."""
    return local_midnight_utc(civil_date(day_start, zone) + timedelta(days=1), zone)


def previous_civil_day_start(day_start: datetime, zone: ZoneLike) -> datetime:
    """이전 로컬 하루의 시작 시각(UTC)"""
    return local_midnight_utc(civil_date(day_start, zone) - timedelta(days=1), zone)

