"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.fb_admin.api.router import router as admin_router
from src.fb_common.database import Database
from src.fb_common.errors import AppError
from src.fb_common.redis_client import close_redis, create_redis
from src.fb_common.response import error_response
from src.fb_gateway.middleware.request_log import RequestLogMiddleware
from src.fb_ledger.api.router import router as participants_router
from src.fb_odds.api.router import router as lines_router
from src.fb_odds.infrastructure.line_board import RedisLineBoard
from src.fb_settlement.api.router import router as settlement_router
from src.fb_wager.api.router import router as wagers_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: open and verify DB + Redis. Shutdown: dispose both."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    database = Database.from_url(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=settings.DEBUG,
    )
    await database.ping()
    redis = create_redis(settings.REDIS_URL)
    await redis.ping()

    app.state.database = database
    app.state.redis = redis
    app.state.line_board = RedisLineBoard(redis)
    logger.info("%s started", settings.APP_NAME)
    yield
    # Shutdown
    await database.dispose()
    await close_redis(redis)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        resp = error_response(exc.code, exc.message)
        resp.request_id = getattr(request.state, "request_id", resp.request_id)
        return JSONResponse(
            status_code=exc.http_status,
            content=resp.model_dump(),
        )

    app.include_router(lines_router, prefix="/api/v1")
    app.include_router(wagers_router, prefix="/api/v1")
    app.include_router(settlement_router, prefix="/api/v1")
    app.include_router(participants_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": "0.1.0"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, loop="uvloop")
