"""fb_ledger REST API — participant balances, transaction log and roster sync."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_common.database import get_db_session
from src.fb_common.datetime_utils import utc_now
from src.fb_common.response import ApiResponse, success_response
from src.fb_ledger.application.schemas import SyncParticipantsRequest
from src.fb_ledger.application.service import LedgerApplicationService

router = APIRouter(prefix="/participants", tags=["participants"])

_service = LedgerApplicationService()


@router.post("/sync")
async def sync_participants(
    body: SyncParticipantsRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    now: Annotated[datetime, Depends(utc_now)],
    request: Request,
) -> ApiResponse:
    data = await _service.sync_participants(db, body.members, now)
    return success_response(data.model_dump(), request)


@router.get("/{participant_id}/balance")
async def get_balance(
    participant_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, participant_id)
    return success_response(data.model_dump(), request)


@router.get("/{participant_id}/ledger")
async def list_ledger(
    participant_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = await _service.get_ledger(db, participant_id, cursor, limit)
    return success_response(data.model_dump(), request)


@router.post("/{participant_id}/deactivate")
async def deactivate(
    participant_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    now: Annotated[datetime, Depends(utc_now)],
    request: Request,
) -> ApiResponse:
    data = await _service.set_active(db, participant_id, False, now)
    return success_response(data.model_dump(), request)
