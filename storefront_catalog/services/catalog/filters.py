"""Apply shopper filter selections to a fetched product collection."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from storefront_catalog.models.listing import ListingFilter
from storefront_catalog.models.product import Product

BRAND_LABEL = "Brand"


def _normalize(value: object) -> str:
    return str(value).strip().lower()


def _matches_attribute(product: Product, label: str, wanted: set[str]) -> bool:
    label = _normalize(label)
    for entry in product.product_attribute_values:
        # Same label rule as build_facets: unlabelled entries are not filterable
        if not entry.label or not entry.key:
            continue
        if _normalize(entry.label) == label and _normalize(entry.key) in wanted:
            return True
    return False


def filter_by_attributes(
    products: Sequence[Product] | None,
    selection: Mapping[str, Sequence[str]] | None,
) -> list[Product]:
    """Keep products satisfying every label of ``selection``.

    Values selected for one label are alternatives; different labels must all
    match. Labels with no selected values do not constrain anything. Matching
    ignores case and the input order is preserved.
    """

    constraints = {
        label: {_normalize(value) for value in values}
        for label, values in (selection or {}).items()
        if values
    }
    if not constraints:
        return list(products or ())

    return [
        product
        for product in products or ()
        if all(
            _matches_attribute(product, label, wanted)
            for label, wanted in constraints.items()
        )
    ]


def split_brand_selection(
    attributes: Mapping[str, Sequence[str]],
) -> tuple[dict[str, list[str]], list[str]]:
    """Separate a ``Brand`` selection, under any casing, from real attributes."""

    remaining: dict[str, list[str]] = {}
    brands: list[str] = []
    for label, values in attributes.items():
        if _normalize(label) == _normalize(BRAND_LABEL):
            brands.extend(value for value in values if value)
        else:
            remaining[label] = list(values)
    return remaining, brands


def _brand_set(names: Sequence[str]) -> set[str]:
    return {_normalize(name) for name in names if name and name.strip()}


def filter_products(
    products: Sequence[Product] | None,
    criteria: ListingFilter,
) -> list[Product]:
    """Apply brand, category and attribute criteria together.

    ``criteria.brands`` and a ``Brand`` attribute selection are each a set of
    alternatives; when both are given a product has to satisfy both.
    """

    attributes, brand_selection = split_brand_selection(criteria.attributes)
    brand_sets = [
        brands
        for brands in (_brand_set(criteria.brands), _brand_set(brand_selection))
        if brands
    ]

    result = filter_by_attributes(products, attributes)

    for brands in brand_sets:
        result = [
            product
            for product in result
            if product.brand_name and _normalize(product.brand_name) in brands
        ]

    if criteria.category_id is not None:
        category_id = str(criteria.category_id)
        result = [
            product
            for product in result
            if any(ref.id == category_id for ref in product.root_categories)
        ]
    return result
