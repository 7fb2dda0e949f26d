"""WagerApplicationService — validate and atomically place wagers.

Placement order:
  1. Validate request shape (stake, bet type, odds) before touching storage.
  2. Inside one transaction: read the current published line, check the
     week lock, price the selection and compare it with what was displayed,
     debit the stake with a compare-and-swap, insert the PENDING wager and
     append the BET_PLACED ledger transaction.
  3. Commit. Any failure in step 2 rolls back everything.
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_common.cents import faab_to_display, validate_american_odds
from src.fb_common.enums import BetType, LedgerReason
from src.fb_common.errors import (
    InsufficientBalanceError,
    InvalidBetTypeError,
    InvalidOddsError,
    InvalidSelectionError,
    InvalidStakeError,
    LineChangedError,
    LineValueRequiredError,
    LinesLockedError,
    ParticipantInactiveError,
    ParticipantNotFoundError,
    UnknownMatchupError,
)
from src.fb_common.transaction import run_in_transaction
from src.fb_ledger.domain.models import Participant, Wager
from src.fb_ledger.domain.repository import LedgerRepositoryProtocol
from src.fb_ledger.infrastructure.persistence import LedgerRepository
from src.fb_odds.domain.repository import LineBoardProtocol
from src.fb_schedule.domain.lock_window import is_locked
from src.fb_wager.application.schemas import (
    BetSlipRequest,
    BetSlipResponse,
    PlaceWagerRequest,
    PlaceWagerResponse,
    WagerHistoryResponse,
    WagerResponse,
    WagerSelection,
    WagerStatsResponse,
)
from src.fb_wager.domain.stats import compute_wager_stats

logger = logging.getLogger(__name__)


def _validate_selection(pick: WagerSelection) -> BetType:
    if pick.stake <= 0:
        raise InvalidStakeError(pick.stake)
    try:
        bet_type = BetType(pick.bet_type)
    except ValueError:
        raise InvalidBetTypeError(pick.bet_type) from None
    try:
        validate_american_odds(pick.odds)
    except ValueError:
        raise InvalidOddsError(pick.odds) from None
    if bet_type is not BetType.MONEYLINE and pick.line_value is None:
        raise LineValueRequiredError(bet_type.value)
    return bet_type


class WagerApplicationService:
    def __init__(self, repo: LedgerRepositoryProtocol | None = None) -> None:
        self._repo: LedgerRepositoryProtocol = repo or LedgerRepository()

    async def _debit_or_raise(
        self, db: AsyncSession, participant_id: str, stake: int, now: datetime
    ) -> Participant:
        participant = await self._repo.debit(db, participant_id, stake, now)
        if participant is not None:
            return participant
        # CAS failed: work out which guard rejected it
        current = await self._repo.get_participant(db, participant_id)
        if current is None:
            raise ParticipantNotFoundError(participant_id)
        if not current.is_active:
            raise ParticipantInactiveError(participant_id)
        raise InsufficientBalanceError(stake, current.balance)

    async def _place_one(
        self,
        db: AsyncSession,
        board: LineBoardProtocol,
        participant_id: str,
        pick: WagerSelection,
        bet_type: BetType,
        now: datetime,
    ) -> tuple[Wager, Participant]:
        line = await board.get_line(pick.matchup_id)
        if line is None:
            raise UnknownMatchupError(pick.matchup_id)
        if is_locked(now, line.week):
            raise LinesLockedError(line.week)

        quote = line.quote(bet_type, pick.selection)
        if quote is None:
            raise InvalidSelectionError(pick.selection, bet_type.value)
        if quote.odds != pick.odds:
            raise LineChangedError(
                pick.matchup_id, f"odds now {quote.odds}, displayed {pick.odds}"
            )
        if quote.line_value != pick.line_value:
            raise LineChangedError(
                pick.matchup_id, f"line now {quote.line_value}, displayed {pick.line_value}"
            )

        participant = await self._debit_or_raise(db, participant_id, pick.stake, now)
        wager = await self._repo.insert_wager(
            db,
            Wager(
                id=uuid.uuid4().hex,
                participant_id=participant_id,
                matchup_id=pick.matchup_id,
                week=line.week,
                bet_type=bet_type.value,
                selection=pick.selection,
                stake=pick.stake,
                odds=quote.odds,
                line_value=quote.line_value,
                placed_at=now,
            ),
        )
        await self._repo.append_transaction(
            db,
            participant_id,
            -pick.stake,
            participant.balance,
            LedgerReason.BET_PLACED.value,
            wager.id,
            now,
        )
        return wager, participant

    async def place_wager(
        self,
        db: AsyncSession,
        board: LineBoardProtocol,
        req: PlaceWagerRequest,
        now: datetime,
    ) -> PlaceWagerResponse:
        bet_type = _validate_selection(req)

        async def _place() -> tuple[Wager, Participant]:
            return await self._place_one(db, board, req.participant_id, req, bet_type, now)

        wager, participant = await run_in_transaction(db, _place)
        logger.info(
            "Wager placed: id=%s participant=%s matchup=%s %s/%s stake=%d odds=%d",
            wager.id,
            wager.participant_id,
            wager.matchup_id,
            wager.bet_type,
            wager.selection,
            wager.stake,
            wager.odds,
        )
        return PlaceWagerResponse(
            wager=WagerResponse.from_domain(wager),
            balance_cents=participant.balance,
            balance_display=faab_to_display(participant.balance),
        )

    async def place_bet_slip(
        self,
        db: AsyncSession,
        board: LineBoardProtocol,
        req: BetSlipRequest,
        now: datetime,
    ) -> BetSlipResponse:
        """Place every pick on the slip or none of them."""
        bet_types = [_validate_selection(pick) for pick in req.bets]

        async def _place_all() -> list[tuple[Wager, Participant]]:
            return [
                await self._place_one(db, board, req.participant_id, pick, bet_type, now)
                for pick, bet_type in zip(req.bets, bet_types)
            ]

        placed = await run_in_transaction(db, _place_all)
        wagers = [wager for wager, _ in placed]
        participant = placed[-1][1]
        total_stake = sum(w.stake for w in wagers)
        logger.info(
            "Bet slip placed: participant=%s wagers=%d total_stake=%d",
            req.participant_id,
            len(wagers),
            total_stake,
        )
        return BetSlipResponse(
            wagers=[WagerResponse.from_domain(w) for w in wagers],
            total_stake_cents=total_stake,
            balance_cents=participant.balance,
            balance_display=faab_to_display(participant.balance),
        )

    async def list_wagers(self, db: AsyncSession, participant_id: str) -> WagerHistoryResponse:
        if await self._repo.get_participant(db, participant_id) is None:
            raise ParticipantNotFoundError(participant_id)
        wagers = await self._repo.list_wagers(db, participant_id)
        return WagerHistoryResponse(
            participant_id=participant_id,
            wagers=[WagerResponse.from_domain(w) for w in wagers],
            stats=WagerStatsResponse.from_domain(compute_wager_stats(wagers)),
        )
