import asyncio
import json
from typing import Any, Optional

from loguru import logger
from redis.asyncio import Redis

from career_guidance.config.settings import settings


class CacheService:
    """JSON cache on Redis. Every call is a no-op when REDIS_URL is unset."""

    def __init__(self, redis_client: Optional[Redis] = None):
        self.redis_client = redis_client
        if self.redis_client is None and settings.REDIS_URL:
            self.redis_client = Redis.from_url(
                settings.REDIS_URL, decode_responses=True, health_check_interval=30
            )
            logger.info("Redis cache initialized")

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    async def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        try:
            value = await asyncio.wait_for(self.redis_client.get(key), timeout=5.0)
        except Exception as e:
            logger.warning(f"Error reading cache key {key}: {str(e)}")
            return None
        return json.loads(value) if value else None

    async def set(self, key: str, value: Any, expiry: int = None) -> bool:
        if not self.enabled:
            return False
        try:
            result = await asyncio.wait_for(
                self.redis_client.setex(key, expiry or settings.CACHE_EXPIRE_TIME, json.dumps(value, default=str)),
                timeout=5.0,
            )
        except Exception as e:
            logger.warning(f"Error caching key {key}: {str(e)}")
            return False
        return bool(result)

    async def ping(self) -> bool:
        if not self.enabled:
            return False
        return bool(await self.redis_client.ping())

    async def close(self) -> None:
        if self.enabled:
            await self.redis_client.aclose()
