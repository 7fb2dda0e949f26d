# src/fb_admin/api/router.py
"""Admin REST API."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_admin.application.service import AdminService
from src.fb_common.database import get_db_session
from src.fb_common.response import ApiResponse, success_response

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


@router.get("/invariants")
async def verify_invariants(
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.verify_ledger_invariants(db)
    return success_response(result)


@router.get("/faab-adjustments")
async def export_faab_adjustments(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    week: int = Query(..., ge=1, le=18),
) -> Response:
    content = await _service.faab_adjustments_csv(db, week)
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="faab-adjustments-week-{week}.csv"'
        },
    )
