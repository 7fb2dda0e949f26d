"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Participant
  2xxx: Balance
  3xxx: Betting lines / matchups
  4xxx: Wager
  9xxx: System

Validation and business-rule errors are raised before any mutation.
State-conflict and storage errors are raised inside a transaction and
always followed by a rollback.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Participant ---

class ParticipantNotFoundError(AppError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(1001, f"Participant not found: {participant_id}", 404)


class ParticipantInactiveError(AppError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(1002, f"Participant is deactivated: {participant_id}", 422)


# --- 2xxx: Balance ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient FAAB balance: required {required}, available {available}",
            422,
        )


# --- 3xxx: Lines ---

class UnknownMatchupError(AppError):
    def __init__(self, matchup_id: str) -> None:
        super().__init__(3001, f"No published line for matchup: {matchup_id}", 404)


class LinesLockedError(AppError):
    def __init__(self, week: int) -> None:
        super().__init__(
            3002,
            f"Betting is locked for week {week}. Lines reopen after games complete.",
            422,
        )


class LineChangedError(AppError):
    def __init__(self, matchup_id: str, detail: str) -> None:
        super().__init__(3003, f"Line changed for matchup {matchup_id}: {detail}", 409)


# --- 4xxx: Wager ---

class InvalidStakeError(AppError):
    def __init__(self, stake: int) -> None:
        super().__init__(4001, f"Invalid stake amount: {stake}", 422)


class InvalidBetTypeError(AppError):
    def __init__(self, bet_type: str) -> None:
        super().__init__(4002, f"Invalid bet type: {bet_type}", 422)


class InvalidSelectionError(AppError):
    def __init__(self, selection: str, bet_type: str) -> None:
        super().__init__(4003, f"Invalid selection {selection!r} for {bet_type} bet", 422)


class InvalidOddsError(AppError):
    def __init__(self, odds: int) -> None:
        super().__init__(4004, f"Invalid American odds: {odds}", 422)


class WagerNotFoundError(AppError):
    def __init__(self, wager_id: str) -> None:
        super().__init__(4005, f"Wager not found: {wager_id}", 404)


class AlreadySettledError(AppError):
    def __init__(self, wager_id: str, status: str) -> None:
        super().__init__(4006, f"Wager {wager_id} already settled as {status}", 409)


class InvalidOutcomeError(AppError):
    def __init__(self, outcome: str) -> None:
        super().__init__(4007, f"Invalid settlement outcome: {outcome}", 422)


class LineValueRequiredError(AppError):
    def __init__(self, bet_type: str) -> None:
        super().__init__(4008, f"line_value is required for {bet_type} bets", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class TransientStorageError(AppError):
    def __init__(self, detail: str = "Ledger is busy, please retry") -> None:
        super().__init__(9003, detail, 503)
