"""LineApplicationService — generate, publish and read betting lines.

Lines for a week can only be (re)generated while that week is open; once the
lock window starts the published board is frozen until it reopens.
"""

import logging
import random
from datetime import datetime

from config.settings import settings
from src.fb_common.errors import LinesLockedError
from src.fb_odds.application.schemas import BettingLineOut, GenerateLinesRequest, LinesResponse
from src.fb_odds.domain.line_generator import generate_lines
from src.fb_odds.domain.repository import LineBoardProtocol
from src.fb_schedule.domain.lock_window import is_locked

logger = logging.getLogger(__name__)


class LineApplicationService:
    def __init__(
        self,
        variance_width: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._variance_width = (
            settings.LINE_VARIANCE_POINTS if variance_width is None else variance_width
        )
        self._rng = rng or random.Random()

    async def generate_lines(
        self,
        board: LineBoardProtocol,
        week: int,
        req: GenerateLinesRequest,
        now: datetime,
    ) -> LinesResponse:
        if is_locked(now, week):
            raise LinesLockedError(week)
        lines = generate_lines(
            week,
            [team.to_domain() for team in req.teams],
            now,
            variance_width=self._variance_width,
            rng=self._rng,
        )
        await board.publish(week, lines)
        logger.info("Published %d lines for week %d", len(lines), week)
        return LinesResponse(week=week, lines=[BettingLineOut.from_domain(line) for line in lines])

    async def get_lines(self, board: LineBoardProtocol, week: int) -> LinesResponse:
        lines = await board.list_week(week)
        return LinesResponse(week=week, lines=[BettingLineOut.from_domain(line) for line in lines])
