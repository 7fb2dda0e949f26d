"""Pydantic schemas for fb_wager API."""

from pydantic import BaseModel, Field

from src.fb_common.cents import faab_to_display
from src.fb_ledger.domain.models import Wager
from src.fb_settlement.domain.payout import winning_payout
from src.fb_wager.domain.stats import WagerStats

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class WagerSelection(BaseModel):
    """One pick as shown on the bet slip: what the participant saw and staked."""

    matchup_id: str = Field(..., min_length=1, max_length=64)
    bet_type: str = Field(..., description="spread, total or moneyline")
    selection: str = Field(..., min_length=1, max_length=64, description="team_id, over or under")
    stake: int = Field(..., description="Stake in faab cents")
    odds: int = Field(..., description="American odds displayed when the bet was made")
    line_value: float | None = Field(None, description="Spread handicap or total as displayed; required for spread and total")


class PlaceWagerRequest(WagerSelection):
    participant_id: str = Field(..., min_length=1, max_length=64)


class BetSlipRequest(BaseModel):
    participant_id: str = Field(..., min_length=1, max_length=64)
    bets: list[WagerSelection] = Field(..., min_length=1, max_length=20)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class WagerResponse(BaseModel):
    id: str
    participant_id: str
    matchup_id: str
    week: int
    bet_type: str
    selection: str
    stake_cents: int
    stake_display: str
    odds: int
    line_value: float | None
    potential_payout_cents: int
    status: str
    payout_cents: int | None
    placed_at: str
    settled_at: str | None

    @classmethod
    def from_domain(cls, wager: Wager) -> "WagerResponse":
        return cls(
            id=wager.id,
            participant_id=wager.participant_id,
            matchup_id=wager.matchup_id,
            week=wager.week,
            bet_type=wager.bet_type,
            selection=wager.selection,
            stake_cents=wager.stake,
            stake_display=faab_to_display(wager.stake),
            odds=wager.odds,
            line_value=wager.line_value,
            potential_payout_cents=winning_payout(wager.stake, wager.odds),
            status=wager.status,
            payout_cents=wager.payout,
            placed_at=wager.placed_at.isoformat() if wager.placed_at else "",
            settled_at=wager.settled_at.isoformat() if wager.settled_at else None,
        )


class PlaceWagerResponse(BaseModel):
    wager: WagerResponse
    balance_cents: int
    balance_display: str


class BetSlipResponse(BaseModel):
    wagers: list[WagerResponse]
    total_stake_cents: int
    balance_cents: int
    balance_display: str


class WagerStatsResponse(BaseModel):
    total_bets: int
    total_stake_cents: int
    total_payout_cents: int
    net_profit_cents: int
    net_profit_display: str
    win_rate: float
    pending_bets: int
    pending_stake_cents: int

    @classmethod
    def from_domain(cls, stats: WagerStats) -> "WagerStatsResponse":
        return cls(
            total_bets=stats.total_bets,
            total_stake_cents=stats.total_stake,
            total_payout_cents=stats.total_payout,
            net_profit_cents=stats.net_profit,
            net_profit_display=faab_to_display(stats.net_profit),
            win_rate=round(stats.win_rate, 1),
            pending_bets=stats.pending_bets,
            pending_stake_cents=stats.pending_stake,
        )


class WagerHistoryResponse(BaseModel):
    participant_id: str
    wagers: list[WagerResponse]
    stats: WagerStatsResponse
