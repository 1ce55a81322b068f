"""FastAPI dependency injection helpers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.domain.timing import LinearTimeModel, TimeModel
from src.infrastructure.cache import RouteResultCache
from src.infrastructure.database import async_session_factory
from src.infrastructure.redis_client import get_redis


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_time_model() -> TimeModel:
    """Time model configured through ``MINUTES_PER_KM`` / ``DWELL_MINUTES``."""
    return LinearTimeModel(settings.minutes_per_km, settings.dwell_minutes)


async def get_cache(
    time_model: TimeModel = Depends(get_time_model),
) -> RouteResultCache:
    # Responses are only reusable under the time model that produced them.
    return RouteResultCache(
        await get_redis(),
        settings.result_cache_ttl_seconds,
        variant=repr(time_model),
    )
