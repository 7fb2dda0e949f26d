"""Tests for fb_settlement.domain.grading."""

import pytest

from src.fb_common.enums import WagerStatus
from src.fb_ledger.domain.models import Wager
from src.fb_settlement.domain.grading import grade_wager


def _wager(bet_type: str, selection: str, line_value: float | None) -> Wager:
    return Wager(
        id="w1",
        participant_id="p1",
        matchup_id="m1",
        week=6,
        bet_type=bet_type,
        selection=selection,
        stake=1000,
        odds=-110,
        line_value=line_value,
    )


class TestSpread:
    @pytest.mark.parametrize(
        ("selection", "line_value", "scores", "expected"),
        [
            ("1", -3.5, {"1": 110.0, "2": 100.0}, WagerStatus.WON),
            ("1", -10.0, {"1": 110.0, "2": 100.0}, WagerStatus.PUSH),
            ("1", -12.5, {"1": 110.0, "2": 100.0}, WagerStatus.LOST),
            ("2", 12.5, {"1": 110.0, "2": 100.0}, WagerStatus.WON),
            ("2", 3.5, {"1": 110.0, "2": 100.0}, WagerStatus.LOST),
        ],
    )
    def test_handicap(
        self, selection: str, line_value: float, scores: dict[str, float], expected: WagerStatus
    ) -> None:
        assert grade_wager(_wager("spread", selection, line_value), scores) is expected

    def test_float_noise_is_a_push(self) -> None:
        scores = {"1": 100.3, "2": 100.1}
        assert grade_wager(_wager("spread", "1", -0.2), scores) is WagerStatus.PUSH


class TestTotal:
    def test_over_wins(self) -> None:
        assert grade_wager(_wager("total", "over", 200.5), {"1": 110.0, "2": 95.0}) is WagerStatus.WON

    def test_under_loses_when_over(self) -> None:
        assert grade_wager(_wager("total", "under", 200.5), {"1": 110.0, "2": 95.0}) is WagerStatus.LOST

    def test_exact_total_pushes(self) -> None:
        assert grade_wager(_wager("total", "under", 205.0), {"1": 110.0, "2": 95.0}) is WagerStatus.PUSH


class TestMoneyline:
    def test_winner(self) -> None:
        assert grade_wager(_wager("moneyline", "2", None), {"1": 90.0, "2": 95.0}) is WagerStatus.WON

    def test_loser(self) -> None:
        assert grade_wager(_wager("moneyline", "1", None), {"1": 90.0, "2": 95.0}) is WagerStatus.LOST

    def test_tie_pushes(self) -> None:
        assert grade_wager(_wager("moneyline", "1", None), {"1": 90.0, "2": 90.0}) is WagerStatus.PUSH


class TestInvalidScores:
    def test_selection_missing(self) -> None:
        with pytest.raises(ValueError, match="not in matchup scores"):
            grade_wager(_wager("moneyline", "9", None), {"1": 90.0, "2": 95.0})

    def test_wrong_team_count(self) -> None:
        with pytest.raises(ValueError, match="2 teams"):
            grade_wager(_wager("moneyline", "1", None), {"1": 90.0})
