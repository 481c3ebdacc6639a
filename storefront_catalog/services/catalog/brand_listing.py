"""Brand page data: products of a brand plus wishlist state, fetched together."""

from __future__ import annotations

import asyncio
import logging

from storefront_catalog.models.listing import BrandListing
from storefront_catalog.models.product import Product
from storefront_catalog.services.catalog.aggregator import sort_newest_first
from storefront_catalog.services.catalog.dedupe import dedupe
from storefront_catalog.services.clients.catalog_client import CatalogClient

logger = logging.getLogger(__name__)


class BrandListingService:
    """Loads the independent fetches of a brand page concurrently."""

    def __init__(self, client: CatalogClient) -> None:
        self._client = client

    async def load(
        self,
        brand_id: str,
        *,
        wishlist_id: str | None = None,
        token: str | None = None,
    ) -> BrandListing:
        """Fetch products and wishlist ids; a failed fetch only empties its own part."""

        brand_id = str(brand_id).strip()
        if not brand_id:
            return BrandListing(brand_id="")

        products_result, wishlist_result = await asyncio.gather(
            self._client.products_by_brand(brand_id),
            self._wishlist_ids(wishlist_id, token),
            return_exceptions=True,
        )

        products: list[Product] = []
        if isinstance(products_result, BaseException):
            logger.warning(
                "Products for brand %s could not be fetched: %s",
                brand_id,
                products_result,
            )
        else:
            products = sort_newest_first(dedupe(products_result))
            if not products:
                logger.info("No products found for brand %s", brand_id)

        wishlist_ids: list[str] = []
        if isinstance(wishlist_result, BaseException):
            logger.warning("Wishlist %s could not be fetched: %s", wishlist_id, wishlist_result)
        else:
            wishlist_ids = wishlist_result

        return BrandListing(
            brand_id=brand_id,
            products=products,
            wishlist_product_ids=wishlist_ids,
        )

    async def _wishlist_ids(self, wishlist_id: str | None, token: str | None) -> list[str]:
        if not wishlist_id:
            return []
        return await self._client.wishlist_product_ids(wishlist_id, token=token)
