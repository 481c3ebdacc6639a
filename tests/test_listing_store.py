"""Tests for the Redis listing snapshot cache."""

import pytest

from storefront_catalog.config import settings
from storefront_catalog.models.listing import CategoryListing, CategorySummary
from storefront_catalog.services.cache.listing_store import ListingSnapshotStore


@pytest.mark.asyncio
async def test_snapshot_is_stored_with_ttl(redis_client, make_product):
    store = ListingSnapshotStore(redis_client, ttl=60)
    listing = CategoryListing(
        products=[make_product("1", attrs=[("Size", "M")], brand="Reusch")],
        category=CategorySummary(id="cat-1", name="Gloves"),
    )

    assert await store.save("cat-1", listing) is True
    cached = await store.fetch("cat-1")

    assert cached.model_dump() == listing.model_dump()
    ttl = await redis_client.ttl(f"{settings.LISTING_CACHE_KEY_PREFIX}cat-1")
    assert 0 < ttl <= 60


@pytest.mark.asyncio
async def test_failed_listings_are_not_cached(redis_client):
    store = ListingSnapshotStore(redis_client)

    assert await store.save("cat-1", CategoryListing()) is False
    assert await store.fetch("cat-1") is None


@pytest.mark.asyncio
async def test_unreadable_snapshot_is_a_miss(redis_client):
    store = ListingSnapshotStore(redis_client)
    await redis_client.set(f"{settings.LISTING_CACHE_KEY_PREFIX}cat-1", "{not json")

    assert await store.fetch("cat-1") is None
