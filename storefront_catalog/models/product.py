"""Product and category models as returned by the storefront GraphQL backend."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_WIRE_CONFIG = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


def _none_as_empty(value: Any) -> Any:
    # GraphQL returns null for empty relations
    return [] if value is None else value


class Brand(BaseModel):
    """Brand attached to a product."""

    model_config = _WIRE_CONFIG

    id: str | None = None
    name: str | None = None


class AttributeRef(BaseModel):
    """Attribute definition referenced by a product attribute value."""

    model_config = _WIRE_CONFIG

    id: str | None = None
    label: str | None = None
    key: str | None = None


class ProductAttributeValue(BaseModel):
    """A single attribute assignment, e.g. ``Size`` -> ``M``."""

    model_config = _WIRE_CONFIG

    id: str | None = None
    key: str | None = Field(None, description="Attribute value shown to shoppers")
    attribute: AttributeRef | None = None

    @property
    def label(self) -> str | None:
        if self.attribute is None:
            return None
        return self.attribute.label


class ProductBadge(BaseModel):
    """Promotional badge such as ``NEW`` or ``20%``."""

    model_config = _WIRE_CONFIG

    label: str | None = None
    color: str | None = None


class CategoryRef(BaseModel):
    """Lightweight category reference carried on a product."""

    model_config = _WIRE_CONFIG

    id: str
    name: str | None = None
    slug: str | None = None


class Product(BaseModel):
    """Read-only product snapshot used by listing pages."""

    model_config = _WIRE_CONFIG

    id: str | None = Field(None, description="Opaque product identifier")
    sku: str | None = Field(None, description="Fallback identifier when id is absent")
    name: str | None = None
    images: list[str] = Field(default_factory=list)
    brand: Brand | None = None
    list_price_amount: float | None = None
    list_price_currency: str | None = None
    price_range_exact_amount: float | None = None
    created_at: str | None = None
    updated_at: str | None = None
    product_attribute_values: list[ProductAttributeValue] = Field(
        default_factory=list,
        alias="productAttributeValues",
    )
    product_badges: list[ProductBadge] = Field(
        default_factory=list,
        alias="productBadges",
    )
    root_categories: list[CategoryRef] = Field(
        default_factory=list,
        alias="rootCategories",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_wire_shape(cls, data: Any) -> Any:
        """Fold the flat brand/discount/image variants into the nested shape."""

        if not isinstance(data, dict):
            return data

        data = dict(data)
        brand_name = data.pop("brand_name", None)
        if data.get("brand") is None and brand_name:
            data["brand"] = {"name": brand_name}

        images = data.get("images")
        if isinstance(images, str):
            data["images"] = [images]

        discount = data.pop("offer_discount_percentage", None)
        if discount and not data.get("productBadges") and not data.get("product_badges"):
            data["productBadges"] = [{"label": f"{discount}%", "color": "#888"}]
        return data

    @field_validator(
        "images",
        "product_attribute_values",
        "product_badges",
        "root_categories",
        mode="before",
    )
    @classmethod
    def _empty_relations(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @property
    def dedup_key(self) -> str | None:
        """Identifier used to collapse duplicates: ``id``, falling back to ``sku``."""

        return self.id or self.sku or None

    @property
    def brand_name(self) -> str | None:
        if self.brand is None:
            return None
        return self.brand.name or None


class SubCategory(BaseModel):
    """Direct child of a root category together with its products."""

    model_config = _WIRE_CONFIG

    id: str
    name: str | None = None
    slug: str | None = None
    products: list[Product] = Field(default_factory=list)

    @field_validator("products", mode="before")
    @classmethod
    def _empty_products(cls, value: Any) -> Any:
        return _none_as_empty(value)


class Category(BaseModel):
    """Root category with its direct products and one level of subcategories."""

    model_config = _WIRE_CONFIG

    id: str
    name: str | None = None
    slug: str | None = None
    image: str | None = None
    products: list[Product] = Field(default_factory=list)
    sub_categories: list[SubCategory] = Field(
        default_factory=list,
        alias="subCategories",
    )

    @field_validator("products", "sub_categories", mode="before")
    @classmethod
    def _empty_relations(cls, value: Any) -> Any:
        return _none_as_empty(value)
