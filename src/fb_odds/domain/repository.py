"""Line board Protocol — dependency inversion for testability.

Unit tests inject an in-memory board that conforms to this Protocol.
Infrastructure layer provides the Redis implementation.
"""

from typing import Protocol

from src.fb_odds.domain.models import BettingLine


class LineBoardProtocol(Protocol):
    async def publish(self, week: int, lines: list[BettingLine]) -> None: ...

    async def get_line(self, matchup_id: str) -> BettingLine | None: ...

    async def list_week(self, week: int) -> list[BettingLine]: ...
