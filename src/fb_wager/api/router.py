"""fb_wager REST API — place wagers and read wager history."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_common.database import get_db_session
from src.fb_common.datetime_utils import utc_now
from src.fb_common.response import ApiResponse, success_response
from src.fb_odds.api.router import get_line_board
from src.fb_odds.domain.repository import LineBoardProtocol
from src.fb_wager.application.schemas import BetSlipRequest, PlaceWagerRequest
from src.fb_wager.application.service import WagerApplicationService

router = APIRouter(tags=["wagers"])

_service = WagerApplicationService()


@router.post("/wagers", status_code=201)
async def place_wager(
    body: PlaceWagerRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    board: Annotated[LineBoardProtocol, Depends(get_line_board)],
    now: Annotated[datetime, Depends(utc_now)],
    request: Request,
) -> ApiResponse:
    data = await _service.place_wager(db, board, body, now)
    return success_response(data.model_dump(), request)


@router.post("/wagers/slip", status_code=201)
async def place_bet_slip(
    body: BetSlipRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    board: Annotated[LineBoardProtocol, Depends(get_line_board)],
    now: Annotated[datetime, Depends(utc_now)],
    request: Request,
) -> ApiResponse:
    data = await _service.place_bet_slip(db, board, body, now)
    return success_response(data.model_dump(), request)


@router.get("/participants/{participant_id}/wagers")
async def list_wagers(
    participant_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_wagers(db, participant_id)
    return success_response(data.model_dump(), request)
