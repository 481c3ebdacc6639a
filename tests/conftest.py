"""Pytest configuration and fixtures for the catalog service."""

import asyncio

import pytest
import pytest_asyncio
from fakeredis import aioredis as fakeredis
from httpx import ASGITransport, AsyncClient

from storefront_catalog.models.product import Category, CategoryRef, Product
from storefront_catalog.services.clients.catalog_client import (
    CatalogClient,
    CatalogRequestError,
    get_catalog_client,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


class StubCatalogClient(CatalogClient):
    """In-memory catalog used instead of the GraphQL backend."""

    def __init__(self) -> None:
        self.categories_by_id: dict[str, dict] = {}
        self.brand_products: dict[str, list[dict]] = {}
        self.wishlists: dict[str, list[str]] = {}
        self.supports_paged_products = False
        self.fail = False
        self.fail_wishlist = False
        self.calls: list[tuple] = []

    def _check(self) -> None:
        if self.fail:
            raise CatalogRequestError("backend unavailable")

    async def category_by_id(self, category_id: str) -> Category | None:
        await asyncio.sleep(0)
        self.calls.append(("category_by_id", category_id))
        self._check()
        raw = self.categories_by_id.get(category_id)
        return Category.model_validate(raw) if raw else None

    async def category_header(self, category_id: str) -> Category | None:
        self.calls.append(("category_header", category_id))
        self._check()
        raw = self.categories_by_id.get(category_id)
        if not raw:
            return None
        header = {key: raw.get(key) for key in ("id", "name", "slug", "image")}
        return Category.model_validate(header)

    async def products_by_category_paged(self, category_id, *, limit, offset):
        self.calls.append(("products_by_category_paged", category_id, limit, offset))
        self._check()
        raw = self.categories_by_id.get(category_id) or {}
        products = list(raw.get("products") or [])
        for sub in raw.get("subCategories") or []:
            products.extend(sub.get("products") or [])
        page = products[offset : offset + limit]
        return [Product.model_validate(item) for item in page]

    async def products_by_brand(self, brand_id: str) -> list[Product]:
        await asyncio.sleep(0)
        self.calls.append(("products_by_brand", brand_id))
        self._check()
        raw = self.brand_products.get(brand_id, [])
        return [Product.model_validate(item) for item in raw]

    async def categories(self) -> list[CategoryRef]:
        self.calls.append(("categories",))
        self._check()
        return [
            CategoryRef(id=raw["id"], name=raw.get("name"), slug=raw.get("slug"))
            for raw in self.categories_by_id.values()
        ]

    async def wishlist_product_ids(self, wishlist_id, *, token=None):
        self.calls.append(("wishlist_product_ids", wishlist_id, token))
        if self.fail_wishlist:
            raise CatalogRequestError("wishlist unavailable")
        return list(self.wishlists.get(wishlist_id, []))


def _product(
    id=None,
    *,
    sku=None,
    name=None,
    created_at=None,
    attrs=(),
    brand=None,
    **extra,
):
    data = {
        "id": id,
        "sku": sku,
        "name": name or f"Product {id or sku}",
        "created_at": created_at,
    }
    data["productAttributeValues"] = [
        {"key": value, "attribute": {"label": label}} for label, value in attrs
    ]
    if brand is not None:
        data["brand"] = {"name": brand}
    data.update(extra)
    return data


@pytest.fixture()
def product_data():
    """Factory building raw product payloads in the backend's wire shape."""
    return _product


@pytest.fixture()
def make_product():
    """Factory building validated ``Product`` models."""

    def _make(*args, **kwargs) -> Product:
        return Product.model_validate(_product(*args, **kwargs))

    return _make


@pytest.fixture()
def catalog_stub():
    """Provide a stub catalog so tests do not call the GraphQL backend."""
    from storefront_catalog.main import app

    stub = StubCatalogClient()
    app.dependency_overrides[get_catalog_client] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_catalog_client, None)


@pytest_asyncio.fixture()
async def redis_client():
    """Provide a fake Redis client for each test."""
    client = fakeredis.FakeRedis()
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()


@pytest_asyncio.fixture()
async def client(catalog_stub):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from storefront_catalog.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
