"""Redis-backed cache for aggregated category listings."""

from __future__ import annotations

import logging

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from storefront_catalog.config import settings
from storefront_catalog.models.listing import CategoryListing

logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Return a singleton Redis client for the current process."""

    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


class ListingSnapshotStore:
    """Wrapper around Redis storing listing snapshots with a TTL."""

    def __init__(self, client: redis.Redis, *, ttl: int | None = None):
        self._client = client
        self._prefix = settings.LISTING_CACHE_KEY_PREFIX
        self._ttl = ttl or settings.LISTING_CACHE_TTL_SECONDS

    def _key(self, category_id: str) -> str:
        return f"{self._prefix}{category_id}"

    async def save(self, category_id: str, listing: CategoryListing) -> bool:
        """Cache ``listing``; empty listings from failed fetches are skipped."""

        if listing.category is None:
            return False
        try:
            await self._client.set(
                self._key(category_id),
                listing.model_dump_json(by_alias=True),
                ex=self._ttl,
            )
        except RedisError as exc:
            logger.warning("Failed caching listing for category %s: %s", category_id, exc)
            return False
        return True

    async def fetch(self, category_id: str) -> CategoryListing | None:
        try:
            raw = await self._client.get(self._key(category_id))
        except RedisError as exc:
            logger.warning("Listing cache unavailable for category %s: %s", category_id, exc)
            return None
        if not raw:
            return None
        try:
            return CategoryListing.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable listing snapshot for %s", category_id)
            return None
