"""Catalog client abstractions and the GraphQL-backed implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any

import httpx
from fastapi import Depends

from storefront_catalog.config import settings
from storefront_catalog.models.product import Category, CategoryRef, Product
from storefront_catalog.services.clients import queries

logger = logging.getLogger(__name__)


class CatalogRequestError(RuntimeError):
    """Raised when the storefront backend cannot answer a catalog request."""


class CatalogClient(ABC):
    """Abstract read-only interface to the storefront catalog."""

    supports_paged_products: bool = False

    @abstractmethod
    async def category_by_id(self, category_id: str) -> Category | None:
        """Return the category tree (direct products plus subcategories)."""

    @abstractmethod
    async def category_header(self, category_id: str) -> Category | None:
        """Return the category without products."""

    @abstractmethod
    async def products_by_category_paged(
        self,
        category_id: str,
        *,
        limit: int,
        offset: int,
    ) -> list[Product]:
        """Return one page of a category's products, paged by the backend."""

    @abstractmethod
    async def products_by_brand(self, brand_id: str) -> list[Product]:
        """Return every product of a brand."""

    @abstractmethod
    async def categories(self) -> list[CategoryRef]:
        """Return all root categories without their products."""

    @abstractmethod
    async def wishlist_product_ids(
        self,
        wishlist_id: str,
        *,
        token: str | None = None,
    ) -> list[str]:
        """Return the product ids saved in a wishlist."""

    async def aclose(self) -> None:
        """Release transport resources."""


class GraphQLCatalogClient(CatalogClient):
    """Catalog client posting GraphQL documents over HTTP."""

    def __init__(
        self,
        *,
        endpoint: str,
        timeout: float = 10.0,
        supports_paging: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not endpoint:
            raise ValueError("GraphQL endpoint is required to initialize catalog client")

        self._endpoint = endpoint
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.supports_paged_products = supports_paging

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        token: str | None = None,
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its ``data`` member."""

        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.post(
                self._endpoint,
                json={"query": query, "variables": variables or {}},
                headers=headers,
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise CatalogRequestError(
                f"GraphQL request failed: {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise CatalogRequestError(f"GraphQL request failed: {exc}") from exc

        if not isinstance(body, dict):
            raise CatalogRequestError(
                f"GraphQL response is not an object: {type(body).__name__}"
            )

        errors = body.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            message = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise CatalogRequestError(f"GraphQL errors: {message}")

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise CatalogRequestError(
                f"GraphQL data is not an object: {type(data).__name__}"
            )
        return data

    async def category_by_id(self, category_id: str) -> Category | None:
        data = await self.execute(
            queries.CATEGORY_BY_ID_QUERY,
            {"categoryId": category_id},
        )
        raw = data.get("rootCategory")
        return Category.model_validate(raw) if raw else None

    async def category_header(self, category_id: str) -> Category | None:
        data = await self.execute(
            queries.CATEGORY_HEADER_QUERY,
            {"categoryId": category_id},
        )
        raw = data.get("rootCategory")
        return Category.model_validate(raw) if raw else None

    async def products_by_category_paged(
        self,
        category_id: str,
        *,
        limit: int,
        offset: int,
    ) -> list[Product]:
        data = await self.execute(
            queries.PRODUCTS_BY_CATEGORY_PAGED_QUERY,
            {"categoryId": category_id, "limit": limit, "offset": offset},
        )
        return [Product.model_validate(item) for item in data.get("productsByCategory") or []]

    async def products_by_brand(self, brand_id: str) -> list[Product]:
        data = await self.execute(
            queries.PRODUCTS_BY_BRAND_QUERY,
            {"brand_id": brand_id},
        )
        return [Product.model_validate(item) for item in data.get("productsByBrand") or []]

    async def categories(self) -> list[CategoryRef]:
        data = await self.execute(queries.CATEGORIES_ONLY_QUERY)
        return [CategoryRef.model_validate(item) for item in data.get("rootCategories") or []]

    async def wishlist_product_ids(
        self,
        wishlist_id: str,
        *,
        token: str | None = None,
    ) -> list[str]:
        data = await self.execute(
            queries.WISHLIST_ITEMS_QUERY,
            {"wishlistId": wishlist_id},
            token=token,
        )
        wishlist = data.get("wishlist") or {}
        ids: list[str] = []
        for item in wishlist.get("items") or []:
            product = item.get("product") or {}
            if product.get("id") is not None:
                ids.append(str(product["id"]))
        return ids

    async def aclose(self) -> None:
        await self._client.aclose()


_catalog_client: CatalogClient | None = None


def _initialize_catalog_client() -> CatalogClient:
    return GraphQLCatalogClient(
        endpoint=settings.GRAPHQL_ENDPOINT,
        timeout=settings.GRAPHQL_TIMEOUT_SECONDS,
        supports_paging=settings.GRAPHQL_SUPPORTS_PAGING,
    )


def get_catalog_client() -> CatalogClient:
    """FastAPI dependency returning the process-wide catalog client."""

    global _catalog_client
    if _catalog_client is None:
        _catalog_client = _initialize_catalog_client()
    return _catalog_client


async def close_catalog_client() -> None:
    global _catalog_client
    if _catalog_client is not None:
        await _catalog_client.aclose()
        _catalog_client = None


CatalogClientDependency = Annotated[CatalogClient, Depends(get_catalog_client)]
