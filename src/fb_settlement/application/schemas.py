"""Pydantic schemas for fb_settlement API."""

from pydantic import BaseModel, Field, field_validator

from src.fb_common.cents import faab_to_display
from src.fb_ledger.domain.models import Participant, Wager


class SettleWagerRequest(BaseModel):
    outcome: str = Field(..., description="WON, LOST or PUSH")


class SettleMatchupRequest(BaseModel):
    scores: dict[str, float] = Field(..., description="Final points keyed by team_id")

    @field_validator("scores")
    @classmethod
    def two_teams(cls, v: dict[str, float]) -> dict[str, float]:
        if len(v) != 2:
            raise ValueError("scores must contain exactly two teams")
        return v


class SettlementResponse(BaseModel):
    wager_id: str
    participant_id: str
    status: str
    payout_cents: int
    payout_display: str
    balance_cents: int
    balance_display: str

    @classmethod
    def from_domain(cls, wager: Wager, participant: Participant) -> "SettlementResponse":
        payout = wager.payout or 0
        return cls(
            wager_id=wager.id,
            participant_id=participant.id,
            status=wager.status,
            payout_cents=payout,
            payout_display=faab_to_display(payout),
            balance_cents=participant.balance,
            balance_display=faab_to_display(participant.balance),
        )


class MatchupSettlementResponse(BaseModel):
    week: int
    matchup_id: str
    settled: list[SettlementResponse]
    skipped: list[str]
