"""fb_odds REST API — generate and read weekly betting lines."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from src.fb_common.datetime_utils import utc_now
from src.fb_common.response import ApiResponse, success_response
from src.fb_odds.application.schemas import GenerateLinesRequest
from src.fb_odds.application.service import LineApplicationService
from src.fb_odds.domain.repository import LineBoardProtocol

router = APIRouter(prefix="/lines", tags=["lines"])

_service = LineApplicationService()

Week = Annotated[int, Path(ge=1, le=18, description="League week (1-18)")]


def get_line_board(request: Request) -> LineBoardProtocol:
    """FastAPI dependency: the line board opened in the application lifespan."""
    board: LineBoardProtocol = request.app.state.line_board
    return board


@router.post("/{week}")
async def generate_lines(
    week: Week,
    body: GenerateLinesRequest,
    board: Annotated[LineBoardProtocol, Depends(get_line_board)],
    now: Annotated[datetime, Depends(utc_now)],
    request: Request,
) -> ApiResponse:
    data = await _service.generate_lines(board, week, body, now)
    return success_response(data.model_dump(), request)


@router.get("/{week}")
async def get_lines(
    week: Week,
    board: Annotated[LineBoardProtocol, Depends(get_line_board)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_lines(board, week)
    return success_response(data.model_dump(), request)
