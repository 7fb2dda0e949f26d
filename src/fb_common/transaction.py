"""Commit-or-rollback runner with bounded retry on storage conflicts.

Every balance-mutating operation goes through ``run_in_transaction``: the
operation's statements and the commit form one unit. Business errors roll
back and propagate unchanged. Lock contention (serialization failure,
deadlock, lock timeout, SQLite busy) rolls back and re-runs the whole
operation after a short delay; once the attempts are spent the caller gets
TransientStorageError, which is safe to retry because nothing was committed.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fb_common.errors import TransientStorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# serialization_failure, deadlock_detected, lock_not_available
_RETRYABLE_SQLSTATES = frozenset({"40001", "40P01", "55P03"})


def is_retryable(exc: DBAPIError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    return "database is locked" in str(orig)


async def run_in_transaction(
    db: AsyncSession,
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int | None = None,
    retry_delays: list[float] | None = None,
) -> T:
    attempts = max_attempts or settings.TX_MAX_ATTEMPTS
    delays = settings.TX_RETRY_DELAYS if retry_delays is None else retry_delays

    for attempt in range(attempts):
        try:
            result = await operation()
            await db.commit()
            return result
        except DBAPIError as exc:
            await db.rollback()
            if not is_retryable(exc):
                raise
            if attempt == attempts - 1:
                logger.error("Storage conflict, giving up after %d attempts: %s", attempts, exc.orig)
                raise TransientStorageError() from exc
            delay = delays[min(attempt, len(delays) - 1)] if delays else 0.0
            logger.warning(
                "Storage conflict, retrying: attempt=%d delay=%.2fs error=%s",
                attempt + 1,
                delay,
                exc.orig,
            )
            await asyncio.sleep(delay)
        except Exception:
            await db.rollback()
            raise

    raise TransientStorageError()
