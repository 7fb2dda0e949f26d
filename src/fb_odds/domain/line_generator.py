"""Betting line generation from weekly team projections."""

import logging
import random
from datetime import datetime

from src.fb_odds.domain.models import (
    BettingLine,
    MoneyLine,
    SpreadLine,
    TeamLine,
    TeamWeek,
    TotalLine,
)
from src.fb_odds.domain.odds_math import (
    TOTAL_ODDS,
    moneyline_odds,
    round_to_half_point,
    spread_odds,
)
from src.fb_odds.domain.projection import project_team

logger = logging.getLogger(__name__)


def _team_id_key(team_id: str) -> tuple[int, int, str]:
    # Numeric ids compare as numbers so "9" sorts before "10".
    if team_id.isdigit():
        return (0, int(team_id), "")
    return (1, 0, team_id)


def pick_favorite(team1: TeamWeek, proj1: float, team2: TeamWeek, proj2: float) -> str:
    """Higher projection is favored; an exact tie goes to the lower team id."""
    if proj1 != proj2:
        return team1.team_id if proj1 > proj2 else team2.team_id
    return min(team1.team_id, team2.team_id, key=_team_id_key)


def _team_line(team: TeamWeek, projection: float) -> TeamLine:
    return TeamLine(
        team_id=team.team_id,
        name=team.name or f"Team {team.team_id}",
        owner=team.owner or f"Owner {team.team_id}",
        projected=projection,
        record=team.record,
    )


def build_line(
    week: int,
    team1: TeamWeek,
    proj1: float,
    team2: TeamWeek,
    proj2: float,
    generated_at: datetime,
) -> BettingLine:
    gap = abs(proj1 - proj2)
    favorite = pick_favorite(team1, proj1, team2, proj2)
    fav_odds, dog_odds = moneyline_odds(gap)
    team1_favored = favorite == team1.team_id

    return BettingLine(
        matchup_id=team1.matchup_id,
        week=week,
        team1=_team_line(team1, proj1),
        team2=_team_line(team2, proj2),
        spread=SpreadLine(
            favorite=favorite,
            line=round_to_half_point(gap),
            odds=spread_odds(gap),
        ),
        total=TotalLine(
            line=round_to_half_point(proj1 + proj2),
            over_odds=TOTAL_ODDS,
            under_odds=TOTAL_ODDS,
        ),
        moneyline=MoneyLine(
            team1_odds=fav_odds if team1_favored else dog_odds,
            team2_odds=dog_odds if team1_favored else fav_odds,
        ),
        generated_at=generated_at,
    )


def generate_lines(
    week: int,
    teams: list[TeamWeek],
    generated_at: datetime,
    *,
    variance_width: float = 0.0,
    rng: random.Random | None = None,
) -> list[BettingLine]:
    """One line per matchup id that has exactly two teams, in first-seen order."""
    grouped: dict[str, list[TeamWeek]] = {}
    for team in teams:
        grouped.setdefault(team.matchup_id, []).append(team)

    lines: list[BettingLine] = []
    for matchup_id, pair in grouped.items():
        if len(pair) != 2:
            logger.warning(
                "Skipping matchup %s in week %d: expected 2 teams, got %d",
                matchup_id,
                week,
                len(pair),
            )
            continue
        team1, team2 = pair
        proj1 = project_team(team1, week, variance_width=variance_width, rng=rng)
        proj2 = project_team(team2, week, variance_width=variance_width, rng=rng)
        lines.append(build_line(week, team1, proj1, team2, proj2, generated_at))
    return lines
