"""Derive filter affordances (attribute facets and brand names) from products."""

from __future__ import annotations

from collections.abc import Sequence

from storefront_catalog.models.listing import AttributeFacet
from storefront_catalog.models.product import Product


def build_facets(products: Sequence[Product] | None) -> list[AttributeFacet]:
    """Group every attribute value by its label.

    Labels come out in first-seen order and each label's values are distinct,
    also in first-seen order. Entries without a label or a value are skipped.
    """

    values_by_label: dict[str, dict[str, None]] = {}
    for product in products or ():
        for entry in product.product_attribute_values:
            label = entry.label
            value = entry.key
            if not label or not value:
                continue
            values_by_label.setdefault(label, {})[value] = None

    return [
        AttributeFacet(attribute=label, values=list(values))
        for label, values in values_by_label.items()
    ]


def extract_brands(products: Sequence[Product] | None) -> list[str]:
    """Return the distinct brand names present, in first-seen order."""

    brands: dict[str, None] = {}
    for product in products or ():
        name = product.brand_name
        if name:
            brands[name] = None
    return list(brands)
