"""fb_settlement REST API — settle single wagers or whole matchups."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_common.database import get_db_session
from src.fb_common.datetime_utils import utc_now
from src.fb_common.response import ApiResponse, success_response
from src.fb_settlement.application.schemas import SettleMatchupRequest, SettleWagerRequest
from src.fb_settlement.application.service import SettlementApplicationService

router = APIRouter(tags=["settlement"])

_service = SettlementApplicationService()


@router.post("/wagers/{wager_id}/settle")
async def settle_wager(
    wager_id: str,
    body: SettleWagerRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    now: Annotated[datetime, Depends(utc_now)],
    request: Request,
) -> ApiResponse:
    data = await _service.settle_wager(db, wager_id, body.outcome, now)
    return success_response(data.model_dump(), request)


@router.post("/matchups/{week}/{matchup_id}/settle")
async def settle_matchup(
    week: Annotated[int, Path(ge=1, le=18)],
    matchup_id: str,
    body: SettleMatchupRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    now: Annotated[datetime, Depends(utc_now)],
    request: Request,
) -> ApiResponse:
    data = await _service.settle_matchup(db, week, matchup_id, body.scores, now)
    return success_response(data.model_dump(), request)
