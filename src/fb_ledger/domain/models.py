"""Domain models for fb_ledger — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.fb_common.enums import WagerStatus


@dataclass
class Participant:
    id: str                  # league member id
    display_name: str
    balance: int             # faab cents, cached projection of the ledger
    is_active: bool
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Wager:
    id: str
    participant_id: str
    matchup_id: str
    week: int
    bet_type: str            # BetType value
    selection: str           # team_id, or "over"/"under"
    stake: int               # faab cents, immutable once placed
    odds: int                # American odds at placement
    line_value: float | None
    status: str = WagerStatus.PENDING.value
    payout: int | None = None
    placed_at: datetime | None = None
    settled_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == WagerStatus.PENDING.value


@dataclass
class LedgerTransaction:
    id: int                  # BIGSERIAL, commit order per participant
    participant_id: str
    amount: int              # faab cents, positive=credit negative=debit
    balance_after: int       # faab cents, balance snapshot after the change
    reason: str              # LedgerReason value
    wager_id: str | None = None
    created_at: datetime | None = None
