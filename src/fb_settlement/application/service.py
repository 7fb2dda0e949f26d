"""SettlementApplicationService — resolve wagers and pay out.

A wager settles at most once: the wager row is locked, its status flips
only while it is still PENDING, and the payout credit plus its ledger
transaction commit together with the status change. Losing wagers get a
zero-amount BET_LOST transaction so every settlement is visible in the log.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_common.enums import SETTLEMENT_REASONS, WagerStatus
from src.fb_common.errors import (
    AlreadySettledError,
    InternalError,
    InvalidOutcomeError,
    WagerNotFoundError,
)
from src.fb_common.transaction import run_in_transaction
from src.fb_ledger.domain.repository import LedgerRepositoryProtocol
from src.fb_ledger.infrastructure.persistence import LedgerRepository
from src.fb_settlement.application.schemas import (
    MatchupSettlementResponse,
    SettlementResponse,
)
from src.fb_settlement.domain.grading import grade_wager
from src.fb_settlement.domain.payout import settlement_payout

logger = logging.getLogger(__name__)

_FINAL_STATUSES = frozenset(SETTLEMENT_REASONS)


def parse_outcome(outcome: str) -> WagerStatus:
    try:
        status = WagerStatus(outcome.strip().upper())
    except ValueError:
        raise InvalidOutcomeError(outcome) from None
    if status not in _FINAL_STATUSES:
        raise InvalidOutcomeError(outcome)
    return status


class SettlementApplicationService:
    def __init__(self, repo: LedgerRepositoryProtocol | None = None) -> None:
        self._repo: LedgerRepositoryProtocol = repo or LedgerRepository()

    async def settle_wager(
        self, db: AsyncSession, wager_id: str, outcome: str, now: datetime
    ) -> SettlementResponse:
        status = parse_outcome(outcome)

        async def _settle() -> SettlementResponse:
            wager = await self._repo.get_wager_for_update(db, wager_id)
            if wager is None:
                raise WagerNotFoundError(wager_id)
            if not wager.is_pending:
                logger.warning(
                    "Settlement rejected: wager %s already %s (requested %s)",
                    wager_id,
                    wager.status,
                    status.value,
                )
                raise AlreadySettledError(wager_id, wager.status)

            payout = settlement_payout(wager.stake, wager.odds, status)
            settled = await self._repo.mark_settled(db, wager_id, status.value, payout, now)
            if settled is None:
                # Lost the PENDING guard to a concurrent settlement
                logger.warning("Settlement conflict on wager %s", wager_id)
                raise AlreadySettledError(wager_id, "settled")

            participant = await self._repo.credit(db, wager.participant_id, payout, now)
            if participant is None:
                raise InternalError(f"Participant {wager.participant_id} vanished")
            await self._repo.append_transaction(
                db,
                wager.participant_id,
                payout,
                participant.balance,
                SETTLEMENT_REASONS[status].value,
                wager_id,
                now,
            )
            return SettlementResponse.from_domain(settled, participant)

        result = await run_in_transaction(db, _settle)
        logger.info(
            "Wager settled: id=%s status=%s payout=%d balance=%d",
            result.wager_id,
            result.status,
            result.payout_cents,
            result.balance_cents,
        )
        return result

    async def settle_matchup(
        self,
        db: AsyncSession,
        week: int,
        matchup_id: str,
        scores: dict[str, float],
        now: datetime,
    ) -> MatchupSettlementResponse:
        """Grade and settle every pending wager on a matchup, one transaction each."""
        pending = await self._repo.list_pending_wagers(db, week, matchup_id)
        await db.commit()

        try:
            graded = [(wager, grade_wager(wager, scores)) for wager in pending]
        except ValueError as exc:
            raise InvalidOutcomeError(str(exc)) from exc

        settled: list[SettlementResponse] = []
        skipped: list[str] = []
        for wager, status in graded:
            try:
                settled.append(await self.settle_wager(db, wager.id, status.value, now))
            except AlreadySettledError:
                skipped.append(wager.id)

        logger.info(
            "Matchup settled: week=%d matchup=%s settled=%d skipped=%d",
            week,
            matchup_id,
            len(settled),
            len(skipped),
        )
        return MatchupSettlementResponse(
            week=week, matchup_id=matchup_id, settled=settled, skipped=skipped
        )
