"""LedgerRepository — concrete implementation of LedgerRepositoryProtocol.

Balance mutations are single conditional UPDATE ... RETURNING statements
(compare-and-swap on the participant row). A result of 0 rows means the
guard failed: unknown/inactive participant or insufficient balance.
Settlement locks the wager row with SELECT ... FOR UPDATE and flips its
status only while it is still PENDING.

Transaction ownership: the CALLER (application service) commits or rolls
back, normally through ``run_in_transaction``.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_common.enums import LedgerReason, WagerStatus
from src.fb_common.errors import InternalError
from src.fb_ledger.domain.models import LedgerTransaction, Participant, Wager
from src.fb_ledger.infrastructure.db_models import (
    LedgerTransactionORM,
    ParticipantORM,
    WagerORM,
)

_participants = ParticipantORM.__table__
_wagers = WagerORM.__table__
_ledger = LedgerTransactionORM.__table__


def _row_to_participant(row: Any) -> Participant:
    return Participant(
        id=row.id,
        display_name=row.display_name,
        balance=row.balance,
        is_active=row.is_active,
        version=row.version,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_wager(row: Any) -> Wager:
    return Wager(
        id=row.id,
        participant_id=row.participant_id,
        matchup_id=row.matchup_id,
        week=row.week,
        bet_type=row.bet_type,
        selection=row.selection,
        stake=row.stake,
        odds=row.odds,
        line_value=row.line_value,
        status=row.status,
        payout=row.payout,
        placed_at=row.placed_at,
        settled_at=row.settled_at,
    )


def _row_to_transaction(row: Any) -> LedgerTransaction:
    return LedgerTransaction(
        id=row.id,
        participant_id=row.participant_id,
        amount=row.amount,
        balance_after=row.balance_after,
        reason=row.reason,
        wager_id=row.wager_id,
        created_at=row.created_at,
    )


class LedgerRepository:
    """Concrete repository — all balance operations atomic at the SQL level."""

    # ------------------------------------------------------------------
    # Participants
    # ------------------------------------------------------------------

    async def get_participant(
        self, db: AsyncSession, participant_id: str
    ) -> Participant | None:
        result = await db.execute(
            select(_participants).where(_participants.c.id == participant_id)
        )
        row = result.fetchone()
        return _row_to_participant(row) if row else None

    async def create_participant(
        self,
        db: AsyncSession,
        participant_id: str,
        display_name: str,
        starting_balance: int,
        now: datetime,
    ) -> tuple[Participant, LedgerTransaction]:
        result = await db.execute(
            insert(_participants)
            .values(
                id=participant_id,
                display_name=display_name,
                balance=starting_balance,
                is_active=True,
                version=0,
                created_at=now,
                updated_at=now,
            )
            .returning(*_participants.c)
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Participant insert returned no rows")
        grant = await self.append_transaction(
            db,
            participant_id,
            starting_balance,
            starting_balance,
            LedgerReason.STARTING_BALANCE.value,
            None,
            now,
        )
        return _row_to_participant(row), grant

    async def rename_participant(
        self, db: AsyncSession, participant_id: str, display_name: str, now: datetime
    ) -> None:
        await db.execute(
            update(_participants)
            .where(_participants.c.id == participant_id)
            .values(display_name=display_name, updated_at=now)
        )

    async def set_active(
        self, db: AsyncSession, participant_id: str, active: bool, now: datetime
    ) -> Participant | None:
        result = await db.execute(
            update(_participants)
            .where(_participants.c.id == participant_id)
            .values(is_active=active, version=_participants.c.version + 1, updated_at=now)
            .returning(*_participants.c)
        )
        row = result.fetchone()
        return _row_to_participant(row) if row else None

    async def debit(
        self, db: AsyncSession, participant_id: str, amount: int, now: datetime
    ) -> Participant | None:
        result = await db.execute(
            update(_participants)
            .where(
                _participants.c.id == participant_id,
                _participants.c.is_active.is_(True),
                _participants.c.balance >= amount,
            )
            .values(
                balance=_participants.c.balance - amount,
                version=_participants.c.version + 1,
                updated_at=now,
            )
            .returning(*_participants.c)
        )
        row = result.fetchone()
        return _row_to_participant(row) if row else None

    async def credit(
        self, db: AsyncSession, participant_id: str, amount: int, now: datetime
    ) -> Participant | None:
        result = await db.execute(
            update(_participants)
            .where(_participants.c.id == participant_id)
            .values(
                balance=_participants.c.balance + amount,
                version=_participants.c.version + 1,
                updated_at=now,
            )
            .returning(*_participants.c)
        )
        row = result.fetchone()
        return _row_to_participant(row) if row else None

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    async def append_transaction(
        self,
        db: AsyncSession,
        participant_id: str,
        amount: int,
        balance_after: int,
        reason: str,
        wager_id: str | None,
        now: datetime,
    ) -> LedgerTransaction:
        result = await db.execute(
            insert(_ledger)
            .values(
                participant_id=participant_id,
                amount=amount,
                balance_after=balance_after,
                reason=reason,
                wager_id=wager_id,
                created_at=now,
            )
            .returning(*_ledger.c)
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Ledger insert returned no rows")
        return _row_to_transaction(row)

    async def list_transactions(
        self,
        db: AsyncSession,
        participant_id: str,
        after_id: int | None,
        limit: int,
    ) -> list[LedgerTransaction]:
        stmt = select(_ledger).where(_ledger.c.participant_id == participant_id)
        if after_id is not None:
            stmt = stmt.where(_ledger.c.id > after_id)
        result = await db.execute(stmt.order_by(_ledger.c.id.asc()).limit(limit))
        return [_row_to_transaction(row) for row in result.fetchall()]

    # ------------------------------------------------------------------
    # Wagers
    # ------------------------------------------------------------------

    async def insert_wager(self, db: AsyncSession, wager: Wager) -> Wager:
        result = await db.execute(
            insert(_wagers)
            .values(
                id=wager.id,
                participant_id=wager.participant_id,
                matchup_id=wager.matchup_id,
                week=wager.week,
                bet_type=wager.bet_type,
                selection=wager.selection,
                stake=wager.stake,
                odds=wager.odds,
                line_value=wager.line_value,
                status=WagerStatus.PENDING.value,
                payout=None,
                placed_at=wager.placed_at,
                settled_at=None,
            )
            .returning(*_wagers.c)
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Wager insert returned no rows")
        return _row_to_wager(row)

    async def get_wager_for_update(
        self, db: AsyncSession, wager_id: str
    ) -> Wager | None:
        result = await db.execute(
            select(_wagers).where(_wagers.c.id == wager_id).with_for_update()
        )
        row = result.fetchone()
        return _row_to_wager(row) if row else None

    async def mark_settled(
        self,
        db: AsyncSession,
        wager_id: str,
        status: str,
        payout: int,
        now: datetime,
    ) -> Wager | None:
        result = await db.execute(
            update(_wagers)
            .where(
                _wagers.c.id == wager_id,
                _wagers.c.status == WagerStatus.PENDING.value,
            )
            .values(status=status, payout=payout, settled_at=now)
            .returning(*_wagers.c)
        )
        row = result.fetchone()
        return _row_to_wager(row) if row else None

    async def list_wagers(
        self, db: AsyncSession, participant_id: str
    ) -> list[Wager]:
        result = await db.execute(
            select(_wagers)
            .where(_wagers.c.participant_id == participant_id)
            .order_by(_wagers.c.placed_at.desc(), _wagers.c.id.desc())
        )
        return [_row_to_wager(row) for row in result.fetchall()]

    async def list_pending_wagers(
        self, db: AsyncSession, week: int, matchup_id: str
    ) -> list[Wager]:
        result = await db.execute(
            select(_wagers)
            .where(
                _wagers.c.week == week,
                _wagers.c.matchup_id == matchup_id,
                _wagers.c.status == WagerStatus.PENDING.value,
            )
            .order_by(_wagers.c.placed_at.asc(), _wagers.c.id.asc())
        )
        return [_row_to_wager(row) for row in result.fetchall()]
