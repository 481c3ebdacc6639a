"""Stateless routes exposing the listing functions over posted products."""

from __future__ import annotations

from fastapi import APIRouter

from storefront_catalog.models.listing import (
    AttributeFacet,
    FilterRequest,
    ProductsRequest,
)
from storefront_catalog.models.product import Product
from storefront_catalog.services.catalog.dedupe import dedupe
from storefront_catalog.services.catalog.facets import build_facets, extract_brands
from storefront_catalog.services.catalog.filters import filter_products

router = APIRouter(prefix="/v1/listings", tags=["listings"])


@router.post("/dedupe", response_model=list[Product])
async def dedupe_products(payload: ProductsRequest) -> list[Product]:
    """Collapse duplicate products by id or sku."""

    return dedupe(payload.products)


@router.post("/facets", response_model=list[AttributeFacet])
async def compute_facets(payload: ProductsRequest) -> list[AttributeFacet]:
    return build_facets(payload.products)


@router.post("/brands", response_model=list[str])
async def compute_brands(payload: ProductsRequest) -> list[str]:
    return extract_brands(payload.products)


@router.post("/filter", response_model=list[Product])
async def filter_listing(payload: FilterRequest) -> list[Product]:
    """Apply brand, category and attribute criteria to the posted products."""

    return filter_products(payload.products, payload.criteria)
