"""Weekly line-lock window — a stateless predicate, not a timer.

Lines lock Thursday 20:20 league-local time (the Thursday night kickoff) and
stay locked through the weekend until Sunday 13:00, when the next set of lines
opens. When a season kickoff date is configured, a week whose own lock time
has passed also stays locked for good: its games are underway or final.
"""

from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from config.settings import settings

LOCK_WEEKDAY = 3     # Thursday (Monday == 0)
LOCK_TIME = time(20, 20)
REOPEN_WEEKDAY = 6   # Sunday
REOPEN_TIME = time(13, 0)


def to_league_time(now: datetime, tz: tzinfo) -> datetime:
    """Aware datetimes are converted; naive ones are taken as already league-local."""
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def in_weekly_lock_window(local: datetime) -> bool:
    weekday = local.weekday()
    if weekday == LOCK_WEEKDAY:
        return local.time() >= LOCK_TIME
    if LOCK_WEEKDAY < weekday < REOPEN_WEEKDAY:
        return True
    if weekday == REOPEN_WEEKDAY:
        return local.time() < REOPEN_TIME
    return False


def week_lock_time(week: int, season_kickoff: date, tz: tzinfo) -> datetime:
    """Lock instant of a week: kickoff Thursday + (week - 1) weeks, 20:20 local."""
    thursday = season_kickoff + timedelta(weeks=week - 1)
    return datetime.combine(thursday, LOCK_TIME, tzinfo=tz)


def is_locked(
    now: datetime,
    week: int,
    *,
    season_kickoff: date | None = None,
    tz: tzinfo | None = None,
) -> bool:
    tz = tz or ZoneInfo(settings.LEAGUE_TIMEZONE)
    season_kickoff = season_kickoff or settings.SEASON_KICKOFF
    local = to_league_time(now, tz)
    if in_weekly_lock_window(local):
        return True
    if season_kickoff is not None:
        return local >= week_lock_time(week, season_kickoff, tz)
    return False
