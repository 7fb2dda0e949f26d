"""Tests for fb_odds.domain.projection."""

import random

import pytest

from src.fb_odds.domain.models import TeamWeek
from src.fb_odds.domain.projection import (
    LEAGUE_AVERAGE_POINTS,
    balance_score,
    base_projection,
    lineup_balance_bonus,
    project_team,
    week_adjusted,
)


def _team(**kwargs: object) -> TeamWeek:
    return TeamWeek(matchup_id="m1", team_id="1", name="A", owner="a", **kwargs)  # type: ignore[arg-type]


class TestBaseProjection:
    def test_custom_points_win(self) -> None:
        assert base_projection(_team(points=100.0, custom_points=110.0)) == 110.0

    def test_points_fallback(self) -> None:
        assert base_projection(_team(points=100.0)) == 100.0

    def test_league_average_when_unknown(self) -> None:
        assert base_projection(_team()) == LEAGUE_AVERAGE_POINTS


class TestWeekAdjusted:
    def test_early_season_mean_reversion(self) -> None:
        assert week_adjusted(120.0, 1) == pytest.approx(116.25)
        assert week_adjusted(120.0, 4) == pytest.approx(116.25)

    def test_regular_season_unchanged(self) -> None:
        assert week_adjusted(120.0, 5) == 120.0
        assert week_adjusted(120.0, 12) == 120.0

    def test_playoff_boost(self) -> None:
        assert week_adjusted(100.0, 13) == pytest.approx(105.0)


class TestLineupBalance:
    def test_even_scores_score_one(self) -> None:
        assert balance_score([10.0] * 9) == pytest.approx(1.0)

    def test_needs_two_scores(self) -> None:
        assert balance_score([10.0]) == 0.0

    def test_non_positive_mean(self) -> None:
        assert balance_score([0.0, 0.0]) == 0.0

    def test_bonus_capped_at_half_point(self) -> None:
        team = _team(starters=[f"p{i}" for i in range(9)], starters_points=[10.0] * 9)
        assert lineup_balance_bonus(team) == pytest.approx(0.5)

    def test_short_lineup_gets_no_bonus(self) -> None:
        team = _team(starters=["p1", "p2"], starters_points=[10.0, 10.0])
        assert lineup_balance_bonus(team) == 0.0

    def test_unknown_lineup_counts_as_full(self) -> None:
        team = _team(starters_points=[10.0, 10.0])
        assert lineup_balance_bonus(team) == pytest.approx(0.5)


class TestProjectTeam:
    def test_no_variance_is_deterministic(self) -> None:
        assert project_team(_team(points=120.0), 6) == 120.0

    def test_rounded_to_two_decimals(self) -> None:
        assert project_team(_team(points=100.123), 6) == 100.12

    def test_variance_bounded_by_width(self) -> None:
        rng = random.Random(7)
        for _ in range(50):
            value = project_team(_team(points=100.0), 6, variance_width=3.0, rng=rng)
            assert 98.5 <= value <= 101.5

    def test_seeded_rng_reproducible(self) -> None:
        a = project_team(_team(points=100.0), 6, variance_width=3.0, rng=random.Random(1))
        b = project_team(_team(points=100.0), 6, variance_width=3.0, rng=random.Random(1))
        assert a == b
