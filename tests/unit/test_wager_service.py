"""Unit tests for WagerApplicationService using a mock repository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

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
from src.fb_ledger.domain.models import Participant, Wager
from src.fb_wager.application.schemas import BetSlipRequest, PlaceWagerRequest, WagerSelection
from src.fb_wager.application.service import WagerApplicationService

OPEN_NOW = datetime(2026, 10, 20, 16, 0, tzinfo=UTC)    # Tuesday
LOCKED_NOW = datetime(2026, 10, 23, 16, 0, tzinfo=UTC)  # Friday


def _participant(balance: int = 10000, active: bool = True) -> Participant:
    return Participant(id="p1", display_name="Alice", balance=balance, is_active=active, version=1)


def _req(**overrides: object) -> PlaceWagerRequest:
    data: dict[str, object] = {
        "participant_id": "p1",
        "matchup_id": "m1",
        "bet_type": "spread",
        "selection": "1",
        "stake": 1000,
        "odds": -120,
        "line_value": -20.0,
    }
    data.update(overrides)
    return PlaceWagerRequest(**data)  # type: ignore[arg-type]


def _repo(balance_after: int = 9000) -> AsyncMock:
    repo = AsyncMock()
    repo.debit.return_value = _participant(balance_after)
    repo.insert_wager.side_effect = lambda db, wager: wager
    return repo


class TestValidation:
    @pytest.mark.parametrize("stake", [0, -100])
    async def test_non_positive_stake(self, line_board, stake: int) -> None:
        repo = _repo()
        with pytest.raises(InvalidStakeError):
            await WagerApplicationService(repo).place_wager(AsyncMock(), line_board, _req(stake=stake), OPEN_NOW)
        repo.debit.assert_not_awaited()

    async def test_bad_bet_type(self, line_board) -> None:
        with pytest.raises(InvalidBetTypeError):
            await WagerApplicationService(_repo()).place_wager(
                AsyncMock(), line_board, _req(bet_type="parlay"), OPEN_NOW
            )

    @pytest.mark.parametrize("odds", [0, 99, -99])
    async def test_bad_odds(self, line_board, odds: int) -> None:
        with pytest.raises(InvalidOddsError):
            await WagerApplicationService(_repo()).place_wager(
                AsyncMock(), line_board, _req(odds=odds), OPEN_NOW
            )


class TestLineValueRequired:
    @pytest.mark.parametrize(("bet_type", "selection"), [("spread", "1"), ("total", "over")])
    async def test_missing_line_value_rejected(self, line_board, bet_type: str, selection: str) -> None:
        repo = _repo()
        with pytest.raises(LineValueRequiredError) as exc_info:
            await WagerApplicationService(repo).place_wager(
                AsyncMock(), line_board, _req(bet_type=bet_type, selection=selection, line_value=None), OPEN_NOW
            )
        assert exc_info.value.code == 4008
        repo.debit.assert_not_awaited()

    async def test_moneyline_needs_no_line_value(self, line_board) -> None:
        result = await WagerApplicationService(_repo()).place_wager(
            AsyncMock(), line_board, _req(bet_type="moneyline", odds=-355, line_value=None), OPEN_NOW
        )
        assert result.wager.line_value is None

    async def test_moved_spread_at_same_odds_rejected(self, line_board) -> None:
        # Displayed -7 at -120; the board now has team 1 at -20 with the same price
        repo = _repo()
        with pytest.raises(LineChangedError):
            await WagerApplicationService(repo).place_wager(
                AsyncMock(), line_board, _req(line_value=-7.0), OPEN_NOW
            )
        repo.debit.assert_not_awaited()


class TestLineChecks:
    async def test_unknown_matchup_rolls_back(self, line_board) -> None:
        repo = _repo()
        db = AsyncMock()
        with pytest.raises(UnknownMatchupError):
            await WagerApplicationService(repo).place_wager(db, line_board, _req(matchup_id="nope"), OPEN_NOW)
        db.rollback.assert_awaited()
        db.commit.assert_not_awaited()
        repo.debit.assert_not_awaited()

    async def test_locked_week(self, line_board) -> None:
        repo = _repo()
        with pytest.raises(LinesLockedError):
            await WagerApplicationService(repo).place_wager(AsyncMock(), line_board, _req(), LOCKED_NOW)
        repo.debit.assert_not_awaited()

    async def test_selection_not_on_line(self, line_board) -> None:
        with pytest.raises(InvalidSelectionError):
            await WagerApplicationService(_repo()).place_wager(
                AsyncMock(), line_board, _req(selection="over"), OPEN_NOW
            )

    async def test_odds_moved(self, line_board) -> None:
        repo = _repo()
        with pytest.raises(LineChangedError):
            await WagerApplicationService(repo).place_wager(AsyncMock(), line_board, _req(odds=-110), OPEN_NOW)
        repo.debit.assert_not_awaited()

    async def test_line_value_moved(self, line_board) -> None:
        with pytest.raises(LineChangedError):
            await WagerApplicationService(_repo()).place_wager(
                AsyncMock(), line_board, _req(line_value=-19.5), OPEN_NOW
            )


class TestDebitFailures:
    async def test_insufficient_balance(self, line_board) -> None:
        repo = _repo()
        repo.debit.return_value = None
        repo.get_participant.return_value = _participant(500)
        with pytest.raises(InsufficientBalanceError) as exc_info:
            await WagerApplicationService(repo).place_wager(AsyncMock(), line_board, _req(), OPEN_NOW)
        assert exc_info.value.code == 2001
        repo.insert_wager.assert_not_awaited()
        repo.append_transaction.assert_not_awaited()

    async def test_unknown_participant(self, line_board) -> None:
        repo = _repo()
        repo.debit.return_value = None
        repo.get_participant.return_value = None
        with pytest.raises(ParticipantNotFoundError):
            await WagerApplicationService(repo).place_wager(AsyncMock(), line_board, _req(), OPEN_NOW)

    async def test_inactive_participant(self, line_board) -> None:
        repo = _repo()
        repo.debit.return_value = None
        repo.get_participant.return_value = _participant(10000, active=False)
        with pytest.raises(ParticipantInactiveError):
            await WagerApplicationService(repo).place_wager(AsyncMock(), line_board, _req(), OPEN_NOW)


class TestPlaceWager:
    async def test_success(self, line_board) -> None:
        repo = _repo(balance_after=9000)
        db = AsyncMock()
        result = await WagerApplicationService(repo).place_wager(
            db, line_board, _req(line_value=-20.0), OPEN_NOW
        )

        assert result.balance_cents == 9000
        assert result.balance_display == "$90.00"
        assert result.wager.status == "PENDING"
        assert result.wager.week == 6
        assert result.wager.line_value == -20.0
        assert result.wager.potential_payout_cents == 1833
        repo.debit.assert_awaited_once_with(db, "p1", 1000, OPEN_NOW)
        args = repo.append_transaction.await_args.args
        assert args[1:6] == ("p1", -1000, 9000, "BET_PLACED", result.wager.id)
        db.commit.assert_awaited_once()

    async def test_locks_current_line_value(self, line_board) -> None:
        repo = _repo()
        await WagerApplicationService(repo).place_wager(
            AsyncMock(), line_board, _req(selection="2", odds=-120, line_value=20.0), OPEN_NOW
        )
        wager: Wager = repo.insert_wager.await_args.args[1]
        assert wager.line_value == 20.0
        assert wager.odds == -120


class TestBetSlip:
    async def test_all_placed(self, line_board) -> None:
        repo = _repo()
        repo.debit.side_effect = [_participant(9000), _participant(8000)]
        slip = BetSlipRequest(
            participant_id="p1",
            bets=[
                WagerSelection(matchup_id="m1", bet_type="total", selection="over", stake=1000, odds=-110, line_value=220.0),
                WagerSelection(matchup_id="m1", bet_type="moneyline", selection="2", stake=1000, odds=355),
            ],
        )
        result = await WagerApplicationService(repo).place_bet_slip(AsyncMock(), line_board, slip, OPEN_NOW)
        assert len(result.wagers) == 2
        assert result.total_stake_cents == 2000
        assert result.balance_cents == 8000

    async def test_one_bad_pick_rolls_back_all(self, line_board) -> None:
        repo = _repo()
        db = AsyncMock()
        slip = BetSlipRequest(
            participant_id="p1",
            bets=[
                WagerSelection(matchup_id="m1", bet_type="total", selection="over", stake=1000, odds=-110, line_value=220.0),
                WagerSelection(matchup_id="m9", bet_type="total", selection="over", stake=1000, odds=-110, line_value=220.0),
            ],
        )
        with pytest.raises(UnknownMatchupError):
            await WagerApplicationService(repo).place_bet_slip(db, line_board, slip, OPEN_NOW)
        db.rollback.assert_awaited()
        db.commit.assert_not_awaited()

    async def test_validation_before_any_debit(self, line_board) -> None:
        repo = _repo()
        slip = BetSlipRequest(
            participant_id="p1",
            bets=[
                WagerSelection(matchup_id="m1", bet_type="total", selection="over", stake=1000, odds=-110, line_value=220.0),
                WagerSelection(matchup_id="m1", bet_type="total", selection="under", stake=0, odds=-110, line_value=220.0),
            ],
        )
        with pytest.raises(InvalidStakeError):
            await WagerApplicationService(repo).place_bet_slip(AsyncMock(), line_board, slip, OPEN_NOW)
        repo.debit.assert_not_awaited()


class TestListWagers:
    async def test_unknown_participant(self) -> None:
        repo = AsyncMock()
        repo.get_participant.return_value = None
        with pytest.raises(ParticipantNotFoundError):
            await WagerApplicationService(repo).list_wagers(AsyncMock(), "ghost")
