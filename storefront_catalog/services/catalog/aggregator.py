"""Category product aggregation shared by every listing page."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import ValidationError

from storefront_catalog.config import settings
from storefront_catalog.models.listing import CategoryListing, CategorySummary
from storefront_catalog.models.product import Category, Product
from storefront_catalog.services.catalog.dedupe import dedupe
from storefront_catalog.services.catalog.pagination import paginate, truncate
from storefront_catalog.services.clients.catalog_client import (
    CatalogClient,
    CatalogRequestError,
)

logger = logging.getLogger(__name__)

# Missing or unparsable timestamps sort after every real one
_EARLIEST = datetime.min.replace(tzinfo=UTC)


def created_at_key(product: Product) -> datetime:
    """Sort key for ``created_at``; invalid values map to the earliest instant."""

    raw = (product.created_at or "").strip()
    if not raw:
        return _EARLIEST
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return _EARLIEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def sort_newest_first(products: Iterable[Product]) -> list[Product]:
    """Stable sort by ``created_at`` descending."""

    return sorted(products, key=created_at_key, reverse=True)


def merge_category_products(category: Category) -> list[Product]:
    """Direct products first, then each subcategory's in the order returned."""

    merged = list(category.products)
    for sub in category.sub_categories:
        merged.extend(sub.products)
    return merged


class CategoryAggregator:
    """Fetch a two-level category tree and shape it into a listing."""

    def __init__(self, client: CatalogClient, *, page_size: int | None = None) -> None:
        self._client = client
        self._page_size = page_size or settings.DEFAULT_PAGE_SIZE

    @property
    def page_size(self) -> int:
        return self._page_size

    async def aggregate(
        self,
        category_id: str,
        *,
        page: int | None = None,
        page_size: int | None = None,
        limit: int | None = None,
    ) -> CategoryListing:
        """Return the deduplicated, newest-first products of a category.

        ``page`` selects a 1-based page of ``page_size`` products, using the
        backend's limit/offset when it has them. ``limit`` truncates the full
        listing instead. Failures produce an empty listing with no category.
        """

        if not category_id:
            logger.warning("Cannot aggregate products without a category id")
            return CategoryListing()

        size = page_size or self._page_size
        try:
            if page is not None and self._client.supports_paged_products:
                return await self._aggregate_paged(category_id, page, size)
            listing = await self._aggregate_tree(category_id)
        except (CatalogRequestError, ValidationError) as exc:
            logger.warning("Category %s could not be fetched: %s", category_id, exc)
            return CategoryListing()

        if page is not None:
            listing.products = paginate(listing.products, page, size).items
        elif limit is not None:
            listing.products = truncate(listing.products, limit)
        return listing

    async def aggregate_by_slug(
        self,
        slug: str,
        *,
        page: int | None = None,
        page_size: int | None = None,
        limit: int | None = None,
    ) -> CategoryListing:
        """Resolve ``slug`` to a category id, then aggregate it."""

        try:
            refs = await self._client.categories()
        except (CatalogRequestError, ValidationError) as exc:
            logger.warning("Category list could not be fetched: %s", exc)
            return CategoryListing()

        match = next((ref for ref in refs if ref.slug == slug), None)
        if match is None:
            logger.info("No category found for slug %s", slug)
            return CategoryListing()
        return await self.aggregate(
            match.id,
            page=page,
            page_size=page_size,
            limit=limit,
        )

    async def _aggregate_tree(self, category_id: str) -> CategoryListing:
        category = await self._client.category_by_id(category_id)
        if category is None:
            logger.info("Category %s did not resolve", category_id)
            return CategoryListing()

        merged = merge_category_products(category)
        products = sort_newest_first(dedupe(merged))
        logger.debug(
            "Aggregated category %s: %d fetched, %d unique",
            category_id,
            len(merged),
            len(products),
        )
        return CategoryListing(
            products=products,
            category=CategorySummary.from_category(category),
        )

    async def _aggregate_paged(
        self,
        category_id: str,
        page: int,
        page_size: int,
    ) -> CategoryListing:
        page = max(page, 1)
        category = await self._client.category_header(category_id)
        if category is None:
            logger.info("Category %s did not resolve", category_id)
            return CategoryListing()

        products = await self._client.products_by_category_paged(
            category_id,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        return CategoryListing(
            products=sort_newest_first(dedupe(products)),
            category=CategorySummary.from_category(category),
        )
