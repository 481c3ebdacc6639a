"""Tests for attribute facets and brand extraction."""

import pytest

from storefront_catalog.models.product import Product
from storefront_catalog.services.catalog.facets import build_facets, extract_brands


@pytest.mark.unit
def test_facets_group_values_by_label(make_product):
    products = [
        make_product("1", attrs=[("Size", "M"), ("Color", "Red")]),
        make_product("2", attrs=[("Size", "L")]),
    ]

    facets = build_facets(products)

    assert [f.model_dump() for f in facets] == [
        {"attribute": "Size", "values": ["M", "L"]},
        {"attribute": "Color", "values": ["Red"]},
    ]


@pytest.mark.unit
def test_duplicate_values_collapse(make_product):
    products = [
        make_product("1", attrs=[("Size", "M")]),
        make_product("2", attrs=[("Size", "M"), ("Size", "S")]),
    ]

    facets = build_facets(products)

    assert facets[0].values == ["M", "S"]


@pytest.mark.unit
def test_entries_missing_label_or_value_are_skipped(make_product, product_data):
    raw = product_data("1", attrs=[("Size", "M")])
    raw["productAttributeValues"] += [
        {"key": "Loose", "attribute": None},
        {"key": None, "attribute": {"label": "Fit"}},
        {"key": "", "attribute": {"label": "Fit"}},
    ]
    products = [make_product("2"), Product.model_validate(raw)]

    facets = build_facets(products)

    assert [f.attribute for f in facets] == ["Size"]


@pytest.mark.unit
def test_facets_are_deterministic(make_product):
    products = [make_product(str(i), attrs=[("Size", s)]) for i, s in enumerate("SMLM")]

    assert build_facets(products) == build_facets(products)


@pytest.mark.unit
def test_empty_inputs():
    assert build_facets([]) == []
    assert build_facets(None) == []
    assert extract_brands(None) == []
    assert extract_brands([]) == []


@pytest.mark.unit
def test_extract_brands_distinct_in_first_seen_order(make_product):
    products = [
        make_product("1", brand="Reusch"),
        make_product("2", brand="Uhlsport"),
        make_product("3"),
        make_product("4", brand="Reusch"),
        make_product("5", brand=""),
    ]

    assert extract_brands(products) == ["Reusch", "Uhlsport"]


@pytest.mark.unit
def test_flat_brand_name_is_normalized_before_extraction(make_product):
    products = [make_product("1", brand_name="Jako")]

    assert extract_brands(products) == ["Jako"]
