"""Weekly team projection feeding the line generator.

    base      = custom points, else points, else LEAGUE_AVERAGE_POINTS
    weeks 1-4 : 85% base + 15% league average   (early-season mean reversion)
    weeks 5-12: base
    weeks 13+ : base * 1.05                     (playoff urgency)
    + lineup balance bonus, at most 0.5 points
    + uniform jitter in [-width/2, +width/2]     (width 0 disables it)
"""

import math
import random
import statistics

from src.fb_odds.domain.models import TeamWeek

LEAGUE_AVERAGE_POINTS = 95.0
MEAN_REVERSION = 0.15
PLAYOFF_BOOST = 0.05
EARLY_SEASON_LAST_WEEK = 4
REGULAR_SEASON_LAST_WEEK = 12
FULL_LINEUP_STARTERS = 9
MAX_BALANCE_BONUS = 0.5


def base_projection(team: TeamWeek) -> float:
    base = team.custom_points or team.points or 0.0
    return base if base else LEAGUE_AVERAGE_POINTS


def week_adjusted(base: float, week: int) -> float:
    if week <= EARLY_SEASON_LAST_WEEK:
        return base * (1 - MEAN_REVERSION) + LEAGUE_AVERAGE_POINTS * MEAN_REVERSION
    if week <= REGULAR_SEASON_LAST_WEEK:
        return base
    return base * (1 + PLAYOFF_BOOST)


def balance_score(scores: list[float]) -> float:
    """1 - coefficient of variation, floored at 0. Even scoring -> close to 1."""
    if len(scores) < 2:
        return 0.0
    mean = statistics.fmean(scores)
    if mean <= 0:
        return 0.0
    return max(0.0, 1 - statistics.pstdev(scores) / mean)


def lineup_balance_bonus(team: TeamWeek) -> float:
    # A missing lineup is treated as a full one.
    starter_count = len(team.starters) or FULL_LINEUP_STARTERS
    if starter_count < FULL_LINEUP_STARTERS:
        return 0.0
    return balance_score(team.starters_points) * MAX_BALANCE_BONUS


def project_team(
    team: TeamWeek,
    week: int,
    *,
    variance_width: float = 0.0,
    rng: random.Random | None = None,
) -> float:
    projection = week_adjusted(base_projection(team), week)
    projection += lineup_balance_bonus(team)
    if variance_width:
        projection += ((rng or random).random() - 0.5) * variance_width
    return math.floor(projection * 100 + 0.5) / 100
