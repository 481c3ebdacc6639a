"""Derived listing models: facets, filter criteria, pages and API envelopes."""

from __future__ import annotations

from pydantic import BaseModel, Field

from storefront_catalog.models.product import Category, Product

FilterSelection = dict[str, list[str]]


class AttributeFacet(BaseModel):
    """Filterable attribute label with the distinct values seen for it."""

    attribute: str
    values: list[str] = Field(default_factory=list)


class ListingFilter(BaseModel):
    """Shopper filter state applied to an already fetched product collection."""

    brands: list[str] = Field(
        default_factory=list,
        description="Brand names to keep; empty means every brand",
    )
    category_id: str | None = Field(
        None,
        description="Only keep products assigned to this category",
    )
    attributes: FilterSelection = Field(default_factory=dict)


class CategorySummary(BaseModel):
    """Category header information returned alongside a listing."""

    id: str
    name: str | None = None
    slug: str | None = None
    image: str | None = None

    @classmethod
    def from_category(cls, category: Category) -> CategorySummary:
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            image=category.image,
        )


class CategoryListing(BaseModel):
    """Result of aggregating a category tree.

    ``category`` only carries the header; its products live in ``products``.
    """

    products: list[Product] = Field(default_factory=list)
    category: CategorySummary | None = None


class ListingPage(BaseModel):
    """One page of a product listing."""

    items: list[Product] = Field(default_factory=list)
    page: int = Field(1, ge=1)
    page_size: int = Field(..., ge=1)
    total: int = Field(0, ge=0)
    total_pages: int = Field(0, ge=0)


class PriceCard(BaseModel):
    """Prices derived for one product card."""

    product_id: str
    display_price: float
    sale_price: float
    discount_percent: float | None = None
    converted_price: float
    currency: str


class CategoryListingResponse(BaseModel):
    """Response body for category listing routes."""

    category: CategorySummary | None = None
    facets: list[AttributeFacet] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    filter_path: str = Field(
        "",
        description="Applied filters as SEO path segments, e.g. brand-nike/black/size-large",
    )
    listing: ListingPage
    prices: list[PriceCard] = Field(default_factory=list)


class BrandListing(BaseModel):
    """Products of a single brand plus the shopper's wishlist state."""

    brand_id: str
    products: list[Product] = Field(default_factory=list)
    wishlist_product_ids: list[str] = Field(default_factory=list)


class BrandListingResponse(BaseModel):
    """Response body for the brand listing route."""

    brand_id: str
    facets: list[AttributeFacet] = Field(default_factory=list)
    wishlist_product_ids: list[str] = Field(default_factory=list)
    listing: ListingPage
    prices: list[PriceCard] = Field(default_factory=list)


class ProductsRequest(BaseModel):
    """Request body carrying a raw product collection."""

    products: list[Product] = Field(default_factory=list)


class FilterRequest(ProductsRequest):
    """Request body for filtering a posted product collection."""

    criteria: ListingFilter = Field(default_factory=ListingFilter)
