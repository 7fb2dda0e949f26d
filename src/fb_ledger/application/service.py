"""LedgerApplicationService — participants, balances and the transaction log.

Balance and ledger reads are read-only and run without an explicit
transaction. Participant creation writes the participant row and its
STARTING_BALANCE transaction in one unit so the ledger sum always equals
the balance from the first moment the participant exists.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fb_common.errors import ParticipantNotFoundError
from src.fb_common.transaction import run_in_transaction
from src.fb_ledger.application.schemas import (
    BalanceResponse,
    LedgerResponse,
    LedgerTransactionItem,
    ParticipantIn,
    SyncParticipantsResponse,
    cursor_decode,
    cursor_encode,
)
from src.fb_ledger.domain.repository import LedgerRepositoryProtocol
from src.fb_ledger.infrastructure.persistence import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerApplicationService:
    def __init__(
        self,
        repo: LedgerRepositoryProtocol | None = None,
        starting_balance: int | None = None,
    ) -> None:
        self._repo: LedgerRepositoryProtocol = repo or LedgerRepository()
        self._starting_balance = (
            settings.STARTING_BALANCE_CENTS if starting_balance is None else starting_balance
        )

    async def get_balance(self, db: AsyncSession, participant_id: str) -> BalanceResponse:
        participant = await self._repo.get_participant(db, participant_id)
        if participant is None:
            raise ParticipantNotFoundError(participant_id)
        return BalanceResponse.from_domain(participant)

    async def get_ledger(
        self,
        db: AsyncSession,
        participant_id: str,
        cursor: str | None,
        limit: int,
    ) -> LedgerResponse:
        """Chronological (oldest first) page of a participant's transactions."""
        if await self._repo.get_participant(db, participant_id) is None:
            raise ParticipantNotFoundError(participant_id)
        after_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        txns = await self._repo.list_transactions(db, participant_id, after_id, limit + 1)
        has_more = len(txns) > limit
        page = txns[:limit]

        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return LedgerResponse(
            items=[LedgerTransactionItem.from_domain(t) for t in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def sync_participants(
        self, db: AsyncSession, members: list[ParticipantIn], now: datetime
    ) -> SyncParticipantsResponse:
        """Create unknown league members with the starting balance; refresh names."""
        created: list[str] = []
        renamed: list[str] = []
        unchanged: list[str] = []

        for member in members:
            async def _sync_one(member: ParticipantIn = member) -> list[str]:
                existing = await self._repo.get_participant(db, member.id)
                if existing is None:
                    await self._repo.create_participant(
                        db, member.id, member.display_name, self._starting_balance, now
                    )
                    return created
                if existing.display_name != member.display_name:
                    await self._repo.rename_participant(db, member.id, member.display_name, now)
                    return renamed
                return unchanged

            try:
                bucket = await run_in_transaction(db, _sync_one)
            except IntegrityError:
                # Created concurrently by another sync; it already has its grant.
                logger.info("Participant %s created concurrently, skipping", member.id)
                bucket = unchanged
            bucket.append(member.id)

        logger.info(
            "Participant sync: created=%d renamed=%d unchanged=%d",
            len(created),
            len(renamed),
            len(unchanged),
        )
        return SyncParticipantsResponse(created=created, renamed=renamed, unchanged=unchanged)

    async def set_active(
        self, db: AsyncSession, participant_id: str, active: bool, now: datetime
    ) -> BalanceResponse:
        """Participants are never deleted; deactivation only blocks new wagers."""

        async def _update() -> BalanceResponse:
            participant = await self._repo.set_active(db, participant_id, active, now)
            if participant is None:
                raise ParticipantNotFoundError(participant_id)
            return BalanceResponse.from_domain(participant)

        result = await run_in_transaction(db, _update)
        logger.info("Participant %s active=%s", participant_id, active)
        return result
