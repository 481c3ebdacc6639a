"""Routes serving category listing pages."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storefront_catalog.api.routes.params import build_criteria
from storefront_catalog.config import settings
from storefront_catalog.models.listing import (
    AttributeFacet,
    CategoryListing,
    CategoryListingResponse,
    ListingFilter,
)
from storefront_catalog.services.cache.listing_store import (
    ListingSnapshotStore,
    get_redis_client,
)
from storefront_catalog.services.catalog.aggregator import CategoryAggregator
from storefront_catalog.services.catalog.facets import build_facets, extract_brands
from storefront_catalog.services.catalog.filter_path import (
    build_filter_path,
    parse_filter_path,
)
from storefront_catalog.services.catalog.filters import filter_products
from storefront_catalog.services.catalog.pagination import paginate
from storefront_catalog.services.catalog.pricing import price_cards
from storefront_catalog.services.catalog.request_guard import LatestRequestGuard
from storefront_catalog.services.clients.catalog_client import CatalogClientDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/categories", tags=["categories"])

_request_guard = LatestRequestGuard()


def _get_snapshot_store() -> ListingSnapshotStore | None:
    if not settings.LISTING_CACHE_ENABLED:
        return None
    return ListingSnapshotStore(get_redis_client())


def _get_aggregator(client: CatalogClientDependency) -> CategoryAggregator:
    return CategoryAggregator(client, page_size=settings.DEFAULT_PAGE_SIZE)


def _get_request_guard() -> LatestRequestGuard:
    return _request_guard


AggregatorDependency = Annotated[CategoryAggregator, Depends(_get_aggregator)]
SnapshotStoreDependency = Annotated[
    ListingSnapshotStore | None,
    Depends(_get_snapshot_store),
]
GuardDependency = Annotated[LatestRequestGuard, Depends(_get_request_guard)]

PageQuery = Annotated[int, Query(ge=1)]
PageSizeQuery = Annotated[int | None, Query(ge=1, le=settings.MAX_PAGE_SIZE)]
BrandQuery = Annotated[list[str] | None, Query(alias="brand")]
AttrQuery = Annotated[
    list[str] | None,
    Query(alias="attr", description="Attribute filter as Label:Value, repeatable"),
]


async def _load_listing(
    category_id: str,
    aggregator: CategoryAggregator,
    store: ListingSnapshotStore | None,
) -> CategoryListing:
    if store is not None:
        cached = await store.fetch(category_id)
        if cached is not None:
            logger.debug("Serving category %s from listing cache", category_id)
            return cached

    listing = await aggregator.aggregate(category_id)
    if store is not None:
        await store.save(category_id, listing)
    return listing


def build_listing_response(
    listing: CategoryListing,
    criteria: ListingFilter,
    page: int,
    page_size: int,
    *,
    facets: list[AttributeFacet] | None = None,
    brands: list[str] | None = None,
) -> CategoryListingResponse:
    """Derive facets and brands from the full listing, then filter and page it."""

    if facets is None:
        facets = build_facets(listing.products)
    if brands is None:
        brands = extract_brands(listing.products)

    filtered = filter_products(listing.products, criteria)
    listing_page = paginate(filtered, page, page_size)
    return CategoryListingResponse(
        category=listing.category,
        facets=facets,
        brands=brands,
        filter_path=build_filter_path(criteria),
        listing=listing_page,
        prices=price_cards(
            listing_page.items,
            rate=settings.CURRENCY_RATE,
            currency=settings.DISPLAY_CURRENCY,
        ),
    )


@router.get(
    "/by-slug/{slug}/products",
    response_model=CategoryListingResponse,
    summary="List the products of a category resolved by slug",
)
async def list_category_products_by_slug(
    slug: str,
    aggregator: AggregatorDependency,
    page: PageQuery = 1,
    page_size: PageSizeQuery = None,
    brand: BrandQuery = None,
    category: str | None = None,
    attr: AttrQuery = None,
) -> CategoryListingResponse:
    criteria = build_criteria(brand, category, attr)
    listing = await aggregator.aggregate_by_slug(slug)
    return build_listing_response(
        listing,
        criteria,
        page,
        page_size or aggregator.page_size,
    )


@router.get(
    "/by-slug/{slug}/products/{filters:path}",
    response_model=CategoryListingResponse,
    summary="List a category's products filtered by SEO path segments",
)
async def list_category_products_by_filter_path(
    slug: str,
    filters: str,
    aggregator: AggregatorDependency,
    page: PageQuery = 1,
    page_size: PageSizeQuery = None,
    brand: BrandQuery = None,
) -> CategoryListingResponse:
    listing = await aggregator.aggregate_by_slug(slug)
    facets = build_facets(listing.products)
    brands = extract_brands(listing.products)

    criteria = parse_filter_path(filters, facets, brands)
    criteria.brands.extend(name for name in brand or [] if name.strip())
    return build_listing_response(
        listing,
        criteria,
        page,
        page_size or aggregator.page_size,
        facets=facets,
        brands=brands,
    )


@router.get(
    "/{category_id}/products",
    response_model=CategoryListingResponse,
    summary="List the products of a category and its subcategories",
)
async def list_category_products(
    category_id: str,
    aggregator: AggregatorDependency,
    store: SnapshotStoreDependency,
    guard: GuardDependency,
    page: PageQuery = 1,
    page_size: PageSizeQuery = None,
    brand: BrandQuery = None,
    category: str | None = None,
    attr: AttrQuery = None,
    view_id: Annotated[
        str | None,
        Query(description="Identifies the listing view; older requests are discarded"),
    ] = None,
) -> CategoryListingResponse:
    criteria = build_criteria(brand, category, attr)

    if view_id:
        listing = await guard.run_latest(
            view_id,
            _load_listing(category_id, aggregator, store),
        )
        if listing is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Superseded by a newer request for this view",
            )
    else:
        listing = await _load_listing(category_id, aggregator, store)

    return build_listing_response(
        listing,
        criteria,
        page,
        page_size or aggregator.page_size,
    )


@router.get(
    "/{category_id}/page",
    response_model=CategoryListing,
    summary="Fetch one page of a category, paged by the backend when possible",
)
async def fetch_category_page(
    category_id: str,
    aggregator: AggregatorDependency,
    page: PageQuery = 1,
    page_size: PageSizeQuery = None,
) -> CategoryListing:
    return await aggregator.aggregate(category_id, page=page, page_size=page_size)
