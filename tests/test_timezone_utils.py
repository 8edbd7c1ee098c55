from datetime import date, datetime, timedelta, timezone

from eventapi.utils.timezone_utils import (
    civil_date,
    civil_day_start,
    ensure_utc,
    local_midnight_utc,
    next_civil_day_start,
    previous_civil_day_start,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestCivilDay:
    """로컬 하루 경계 계산 테스트"""

    def test_seoul_midnight_is_previous_utc_day_15h(self):
        # 2025-01-02 00:30 KST
        now = utc(2025, 1, 1, 15, 30)
        assert civil_day_start(now, "Asia/Seoul") == utc(2025, 1, 1, 15, 0)
        assert civil_date(now, "Asia/Seoul") == date(2025, 1, 2)

    def test_one_minute_before_local_midnight_belongs_to_previous_day(self):
        # 2025-01-01 23:59 KST
        now = utc(2025, 1, 1, 14, 59)
        assert civil_day_start(now, "Asia/Seoul") == utc(2024, 12, 31, 15, 0)
        assert civil_date(now, "Asia/Seoul") == date(2025, 1, 1)

    def test_neighbouring_days_are_24h_apart_in_fixed_offset_zone(self):
        start = civil_day_start(utc(2025, 1, 10, 3), "Asia/Seoul")
        assert next_civil_day_start(start, "Asia/Seoul") - start == timedelta(hours=24)
        assert start - previous_civil_day_start(start, "Asia/Seoul") == timedelta(hours=24)

    def test_day_boundaries_follow_the_calendar_across_dst(self):
        # 2025-03-09 미국 동부 서머타임 시작: 하루가 23시간
        start = local_midnight_utc(date(2025, 3, 9), "America/New_York")
        assert start == utc(2025, 3, 9, 5, 0)
        assert next_civil_day_start(start, "America/New_York") == utc(2025, 3, 10, 4, 0)
        assert previous_civil_day_start(
            utc(2025, 3, 10, 4, 0), "America/New_York"
        ) == start

    def test_ensure_utc_treats_naive_as_utc(self):
        naive = datetime(2025, 1, 1, 9, 0)
        assert ensure_utc(naive) == utc(2025, 1, 1, 9, 0)
        assert ensure_utc(None) is None

    def test_ensure_utc_converts_aware_values(self):
        kst = timezone(timedelta(hours=9))
        assert ensure_utc(datetime(2025, 1, 1, 9, 0, tzinfo=kst)) == utc(2025, 1, 1, 0, 0)
