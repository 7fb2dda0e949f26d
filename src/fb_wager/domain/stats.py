"""Betting history statistics over a participant's wagers."""

from dataclasses import dataclass

from src.fb_common.enums import WagerStatus
from src.fb_ledger.domain.models import Wager


@dataclass(frozen=True)
class WagerStats:
    total_bets: int = 0
    total_stake: int = 0        # faab cents, all wagers
    total_payout: int = 0       # faab cents, settled wagers
    net_profit: int = 0         # total_payout - settled stake
    win_rate: float = 0.0       # percent of settled wagers won
    pending_bets: int = 0
    pending_stake: int = 0


def compute_wager_stats(wagers: list[Wager]) -> WagerStats:
    if not wagers:
        return WagerStats()

    settled = [w for w in wagers if not w.is_pending]
    pending = [w for w in wagers if w.is_pending]
    total_payout = sum(w.payout or 0 for w in settled)
    settled_stake = sum(w.stake for w in settled)
    won = sum(1 for w in settled if w.status == WagerStatus.WON.value)

    return WagerStats(
        total_bets=len(wagers),
        total_stake=sum(w.stake for w in wagers),
        total_payout=total_payout,
        net_profit=total_payout - settled_stake,
        win_rate=won / len(settled) * 100 if settled else 0.0,
        pending_bets=len(pending),
        pending_stake=sum(w.stake for w in pending),
    )
