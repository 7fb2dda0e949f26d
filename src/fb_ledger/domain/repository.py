"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_ledger.domain.models import LedgerTransaction, Participant, Wager


class LedgerRepositoryProtocol(Protocol):
    # --- participants ---

    async def get_participant(
        self, db: AsyncSession, participant_id: str
    ) -> Participant | None: ...

    async def create_participant(
        self,
        db: AsyncSession,
        participant_id: str,
        display_name: str,
        starting_balance: int,
        now: datetime,
    ) -> tuple[Participant, LedgerTransaction]: ...

    async def rename_participant(
        self, db: AsyncSession, participant_id: str, display_name: str, now: datetime
    ) -> None: ...

    async def set_active(
        self, db: AsyncSession, participant_id: str, active: bool, now: datetime
    ) -> Participant | None: ...

    async def debit(
        self, db: AsyncSession, participant_id: str, amount: int, now: datetime
    ) -> Participant | None: ...

    async def credit(
        self, db: AsyncSession, participant_id: str, amount: int, now: datetime
    ) -> Participant | None: ...

    # --- ledger ---

    async def append_transaction(
        self,
        db: AsyncSession,
        participant_id: str,
        amount: int,
        balance_after: int,
        reason: str,
        wager_id: str | None,
        now: datetime,
    ) -> LedgerTransaction: ...

    async def list_transactions(
        self,
        db: AsyncSession,
        participant_id: str,
        after_id: int | None,
        limit: int,
    ) -> list[LedgerTransaction]: ...

    # --- wagers ---

    async def insert_wager(self, db: AsyncSession, wager: Wager) -> Wager: ...

    async def get_wager_for_update(
        self, db: AsyncSession, wager_id: str
    ) -> Wager | None: ...

    async def mark_settled(
        self,
        db: AsyncSession,
        wager_id: str,
        status: str,
        payout: int,
        now: datetime,
    ) -> Wager | None: ...

    async def list_wagers(
        self, db: AsyncSession, participant_id: str
    ) -> list[Wager]: ...

    async def list_pending_wagers(
        self, db: AsyncSession, week: int, matchup_id: str
    ) -> list[Wager]: ...
