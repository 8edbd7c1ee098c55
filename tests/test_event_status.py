from datetime import datetime, timedelta, timezone

import pytest

from eventapi.models.event import EventStatus
from eventapi.utils.event_status import derive_status, is_forced, is_within_window


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


START = utc(2025, 1, 1)
END = utc(2025, 1, 31, 23, 59, 59)

ORDER = {EventStatus.UPCOMING: 0, EventStatus.ONGOING: 1, EventStatus.ENDED: 2}


class TestDeriveStatus:
    @pytest.mark.parametrize(
        "now, expected",
        [
            (utc(2024, 12, 31, 23, 59, 59), EventStatus.UPCOMING),
            (START, EventStatus.ONGOING),
            (utc(2025, 1, 15), EventStatus.ONGOING),
            (END, EventStatus.ENDED),
            (utc(2025, 2, 1), EventStatus.ENDED),
        ],
    )
    def test_boundaries(self, now, expected):
        assert derive_status(START, END, now) == expected

    def test_status_never_moves_backwards_in_time(self):
        now = START - timedelta(days=3)
        previous = derive_status(START, END, now)
        while now < END + timedelta(days=3):
            now += timedelta(hours=7)
            current = derive_status(START, END, now)
            assert ORDER[current] >= ORDER[previous]
            previous = current

    def test_naive_values_are_utc(self):
        assert derive_status(
            datetime(2025, 1, 1), datetime(2025, 1, 2), utc(2025, 1, 1, 12)
        ) == EventStatus.ONGOING


class TestWindow:
    def test_window_is_inclusive(self):
        assert is_within_window(START, END, START)
        assert is_within_window(START, END, END)
        assert not is_within_window(START, END, END + timedelta(seconds=1))

    def test_forced_statuses(self):
        assert is_forced(EventStatus.CANCELED)
        assert is_forced("INACTIVE")
        assert not is_forced(EventStatus.ONGOING)
        assert not is_forced(None)
