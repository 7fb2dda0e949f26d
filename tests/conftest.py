"""Shared test fixtures."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.fb_common.database import Database
from src.fb_ledger.infrastructure import db_models  # noqa: F401  registers tables
from src.fb_odds.domain.line_generator import build_line
from src.fb_odds.domain.models import BettingLine, TeamWeek

# Tuesday noon in New York: outside the weekly lock window
OPEN_NOW = datetime(2026, 10, 20, 16, 0, tzinfo=UTC)
# Friday noon in New York: inside the weekly lock window
LOCKED_NOW = datetime(2026, 10, 23, 16, 0, tzinfo=UTC)


class FakeLineBoard:
    """In-memory LineBoardProtocol."""

    def __init__(self) -> None:
        self.lines: dict[str, BettingLine] = {}

    async def publish(self, week: int, lines: list[BettingLine]) -> None:
        for mid in [m for m, line in self.lines.items() if line.week == week]:
            del self.lines[mid]
        for line in lines:
            self.lines[line.matchup_id] = line

    async def get_line(self, matchup_id: str) -> BettingLine | None:
        return self.lines.get(matchup_id)

    async def list_week(self, week: int) -> list[BettingLine]:
        return sorted(
            (line for line in self.lines.values() if line.week == week),
            key=lambda line: line.matchup_id,
        )


def make_line(
    matchup_id: str = "m1",
    week: int = 6,
    proj1: float = 120.0,
    proj2: float = 100.0,
) -> BettingLine:
    """Team "1" vs team "2". Defaults: team 1 favored by 20, total 220, ML -355/+355."""
    return build_line(
        week,
        TeamWeek(matchup_id=matchup_id, team_id="1", name="Alpha", owner="alice"),
        proj1,
        TeamWeek(matchup_id=matchup_id, team_id="2", name="Bravo", owner="bob"),
        proj2,
        OPEN_NOW,
    )


@pytest.fixture
def line_board() -> FakeLineBoard:
    board = FakeLineBoard()
    board.lines["m1"] = make_line("m1")
    return board


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """File-backed SQLite database with all tables created."""
    db = Database.from_url(
        f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        connect_args={"timeout": 30},
    )
    await db.create_all()
    yield db
    await db.dispose()
