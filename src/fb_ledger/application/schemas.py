"""Pydantic schemas and cursor utilities for fb_ledger API."""

import base64
import json

from pydantic import BaseModel, Field

from src.fb_common.cents import faab_to_display
from src.fb_ledger.domain.models import LedgerTransaction, Participant

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ParticipantIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, description="League member id")
    display_name: str = Field(..., min_length=1, max_length=128)


class SyncParticipantsRequest(BaseModel):
    members: list[ParticipantIn]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    participant_id: str
    display_name: str
    is_active: bool
    balance_cents: int
    balance_display: str

    @classmethod
    def from_domain(cls, participant: Participant) -> "BalanceResponse":
        return cls(
            participant_id=participant.id,
            display_name=participant.display_name,
            is_active=participant.is_active,
            balance_cents=participant.balance,
            balance_display=faab_to_display(participant.balance),
        )


class LedgerTransactionItem(BaseModel):
    id: int
    amount_cents: int
    amount_display: str
    balance_after_cents: int
    balance_after_display: str
    reason: str
    wager_id: str | None
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, txn: LedgerTransaction) -> "LedgerTransactionItem":
        return cls(
            id=txn.id,
            amount_cents=txn.amount,
            amount_display=faab_to_display(txn.amount),
            balance_after_cents=txn.balance_after,
            balance_after_display=faab_to_display(txn.balance_after),
            reason=txn.reason,
            wager_id=txn.wager_id,
            created_at=txn.created_at.isoformat() if txn.created_at else "",
        )


class LedgerResponse(BaseModel):
    items: list[LedgerTransactionItem]
    next_cursor: str | None
    has_more: bool


class SyncParticipantsResponse(BaseModel):
    created: list[str]
    renamed: list[str]
    unchanged: list[str]
