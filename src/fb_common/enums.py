"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class BetType(str, Enum):
    SPREAD = "spread"
    TOTAL = "total"
    MONEYLINE = "moneyline"


class TotalSide(str, Enum):
    OVER = "over"
    UNDER = "under"


class WagerStatus(str, Enum):
    PENDING = "PENDING"
    WON = "WON"
    LOST = "LOST"
    PUSH = "PUSH"


class LedgerReason(str, Enum):
    STARTING_BALANCE = "STARTING_BALANCE"
    BET_PLACED = "BET_PLACED"
    BET_WON = "BET_WON"
    BET_LOST = "BET_LOST"
    BET_PUSH = "BET_PUSH"


SETTLEMENT_REASONS: dict[WagerStatus, LedgerReason] = {
    WagerStatus.WON: LedgerReason.BET_WON,
    WagerStatus.LOST: LedgerReason.BET_LOST,
    WagerStatus.PUSH: LedgerReason.BET_PUSH,
}
