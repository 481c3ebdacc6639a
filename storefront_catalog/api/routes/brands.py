"""Routes serving brand listing pages."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Header, Query

from storefront_catalog.api.routes.params import bearer_token, build_criteria
from storefront_catalog.config import settings
from storefront_catalog.models.listing import BrandListingResponse
from storefront_catalog.services.catalog.brand_listing import BrandListingService
from storefront_catalog.services.catalog.facets import build_facets
from storefront_catalog.services.catalog.filters import filter_products
from storefront_catalog.services.catalog.pagination import paginate
from storefront_catalog.services.catalog.pricing import price_cards
from storefront_catalog.services.clients.catalog_client import CatalogClientDependency

router = APIRouter(prefix="/v1/brands", tags=["brands"])

# Brand pages show 20 products per page
BRAND_PAGE_SIZE = 20


@router.get(
    "/{brand_id}/products",
    response_model=BrandListingResponse,
    summary="List the products of a brand",
)
async def list_brand_products(
    brand_id: str,
    client: CatalogClientDependency,
    page: Annotated[int, Query(ge=1)] = 1,
    wishlist_id: str | None = None,
    attr: Annotated[list[str] | None, Query(alias="attr")] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> BrandListingResponse:
    criteria = build_criteria(None, None, attr)
    service = BrandListingService(client)
    listing = await service.load(
        brand_id,
        wishlist_id=wishlist_id,
        token=bearer_token(authorization),
    )

    filtered = filter_products(listing.products, criteria)
    listing_page = paginate(filtered, page, BRAND_PAGE_SIZE)
    return BrandListingResponse(
        brand_id=listing.brand_id,
        facets=build_facets(listing.products),
        wishlist_product_ids=listing.wishlist_product_ids,
        listing=listing_page,
        prices=price_cards(
            listing_page.items,
            rate=settings.CURRENCY_RATE,
            currency=settings.DISPLAY_CURRENCY,
        ),
    )
