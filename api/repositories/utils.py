"""Repository utility functions for common database operations."""

import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from core.wide_event import set_wide_event_fields

logger = get_logger(__name__)

# Threshold for logging slow queries (milliseconds)
SLOW_QUERY_THRESHOLD_MS = 500

P = ParamSpec("P")
R = TypeVar("R")


def log_slow_query(
    operation_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator to log slow repository operations and errors.

    Queries exceeding SLOW_QUERY_THRESHOLD_MS are logged and flagged on the
    wide event. Exceptions are recorded and re-raised.

    Usage:
        @log_slow_query("search_companies")
        async def search(self, zip_code: str, category: str) -> list[Company]:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
                duration_ms = (time.perf_counter() - start_time) * 1000
                if duration_ms > SLOW_QUERY_THRESHOLD_MS:
                    logger.warning(
                        "db.query.slow",
                        operation=operation_name,
                        duration_ms=round(duration_ms, 2),
                    )
                    set_wide_event_fields(
                        db_slow_query=True,
                        db_operation=operation_name,
                        db_duration_ms=round(duration_ms, 2),
                    )
                return result
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                set_wide_event_fields(
                    db_query_error=True,
                    db_operation=operation_name,
                    db_duration_ms=round(duration_ms, 2),
                    db_error=str(e),
                    db_error_type=type(e).__name__,
                )
                raise

        return wrapper

    return decorator


async def insert_on_conflict_do_nothing(
    db: AsyncSession,
    model: type,
    values: dict[str, Any],
    index_elements: list[str],
) -> Any | None:
    """INSERT ... ON CONFLICT DO NOTHING RETURNING id.

    Returns the new primary key, or None when the unique constraint on
    ``index_elements`` already holds a row. The store decides, so concurrent
    callers can never both succeed.

    Note:
        Does NOT commit. Caller owns the transaction.
        Python-side column defaults are applied by SQLAlchemy Core.
    """
    bind = db.get_bind()
    dialect = bind.dialect.name if bind else ""

    if dialect in ("postgresql", "sqlite"):
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as dialect_insert
        else:
            from sqlalchemy.dialects.sqlite import insert as dialect_insert

        stmt = (
            dialect_insert(model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=index_elements)
            .returning(model.id)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    try:
        async with db.begin_nested():
            result = await db.execute(insert(model).values(**values).returning(model.id))
            return result.scalar_one()
    except IntegrityError:
        return None
