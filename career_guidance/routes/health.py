from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import text

from career_guidance.config.database import get_db
from career_guidance.core.deps import get_cache
from career_guidance.services.cache import CacheService

router = APIRouter()


@router.get("")
async def health_check(
    db: AsyncSession = Depends(get_db),
    cache: CacheService = Depends(get_cache),
) -> dict:
    """
    Check the health of the service and its dependencies
    """
    health_status = {
        "service": "healthy",
        "dependencies": {
            "database": "unhealthy",
            "redis": "disabled",
        }
    }

    try:
        await db.execute(text("SELECT 1"))
        health_status["dependencies"]["database"] = "healthy"
    except Exception:
        logger.exception("Database health check failed")
        health_status["service"] = "unhealthy"

    if cache.enabled:
        try:
            await cache.ping()
            health_status["dependencies"]["redis"] = "healthy"
        except Exception:
            logger.exception("Redis health check failed")
            health_status["service"] = "unhealthy"
            health_status["dependencies"]["redis"] = "unhealthy"

    return health_status
