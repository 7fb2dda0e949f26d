"""Payout calculation — integer faab cents, floor division."""

from src.fb_common.enums import WagerStatus


def winning_payout(stake: int, odds: int) -> int:
    """Total returned on a win, stake included.

    Positive odds: stake + stake x odds // 100.
    Negative odds: stake + stake x 100 // |odds|.
    """
    if odds > 0:
        return stake + stake * odds // 100
    return stake + stake * 100 // -odds


def settlement_payout(stake: int, odds: int, outcome: WagerStatus) -> int:
    if outcome is WagerStatus.WON:
        return winning_payout(stake, odds)
    if outcome is WagerStatus.PUSH:
        return stake
    return 0
