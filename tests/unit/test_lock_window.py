"""Tests for fb_schedule.domain.lock_window.

Calendar: 2026-10-15 is a Thursday; New York is on EDT (UTC-4).
"""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from src.fb_schedule.domain.lock_window import is_locked, week_lock_time

NY = ZoneInfo("America/New_York")
KICKOFF = date(2026, 9, 10)  # Thursday of week 1


def _local(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, day, hour, minute)


class TestWeeklyWindow:
    @pytest.mark.parametrize(
        ("now", "locked"),
        [
            (_local(15, 20, 19), False),  # Thu 20:19
            (_local(15, 20, 20), True),   # Thu 20:20
            (_local(15, 20, 21), True),
            (_local(16, 9), True),        # Fri
            (_local(17, 23), True),       # Sat
            (_local(18, 12, 59), True),   # Sun 12:59
            (_local(18, 13, 0), False),   # Sun 13:00
            (_local(18, 13, 1), False),
            (_local(19, 10), False),      # Mon
            (_local(20, 10), False),      # Tue
            (_local(21, 23, 59), False),  # Wed
            (_local(15, 8), False),       # Thu morning
        ],
    )
    def test_naive_is_league_local(self, now: datetime, locked: bool) -> None:
        assert is_locked(now, 6, tz=NY) is locked

    def test_aware_utc_converted(self) -> None:
        # Fri 00:30 UTC == Thu 20:30 EDT
        assert is_locked(datetime(2026, 10, 16, 0, 30, tzinfo=UTC), 6, tz=NY) is True
        # Thu 20:30 UTC == Thu 16:30 EDT
        assert is_locked(datetime(2026, 10, 15, 20, 30, tzinfo=UTC), 6, tz=NY) is False


class TestSeasonKickoff:
    def test_week_lock_time(self) -> None:
        assert week_lock_time(6, KICKOFF, NY) == datetime(2026, 10, 15, 20, 20, tzinfo=NY)

    def test_past_week_stays_locked(self) -> None:
        tuesday = _local(20, 12)
        assert is_locked(tuesday, 6, season_kickoff=KICKOFF, tz=NY) is True

    def test_next_week_open(self) -> None:
        tuesday = _local(20, 12)
        assert is_locked(tuesday, 7, season_kickoff=KICKOFF, tz=NY) is False

    def test_window_applies_regardless_of_week(self) -> None:
        assert is_locked(_local(16, 12), 10, season_kickoff=KICKOFF, tz=NY) is True
