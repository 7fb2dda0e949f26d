"""Tests for fb_settlement.domain.payout — floor-division payouts in faab cents."""

import pytest

from src.fb_common.enums import WagerStatus
from src.fb_settlement.domain.payout import settlement_payout, winning_payout


class TestWinningPayout:
    @pytest.mark.parametrize(
        ("stake", "odds", "payout"),
        [
            (1000, 150, 2500),
            (1000, -110, 1909),
            (2000, -110, 3818),
            (1000, 100, 2000),
            (1000, -100, 2000),
            (1000, 355, 4550),
            (1000, -355, 1281),
            (1, -110, 1),
        ],
    )
    def test_cases(self, stake: int, odds: int, payout: int) -> None:
        assert winning_payout(stake, odds) == payout


class TestSettlementPayout:
    def test_won(self) -> None:
        assert settlement_payout(1000, -110, WagerStatus.WON) == 1909

    def test_push_returns_stake(self) -> None:
        assert settlement_payout(1000, -110, WagerStatus.PUSH) == 1000

    def test_lost_pays_nothing(self) -> None:
        assert settlement_payout(1000, 150, WagerStatus.LOST) == 0
