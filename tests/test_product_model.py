"""Tests for normalizing backend product payloads."""

import pytest

from storefront_catalog.models.product import Category, Product


@pytest.mark.unit
def test_null_relations_become_empty_lists():
    product = Product.model_validate(
        {
            "id": "1",
            "images": None,
            "productAttributeValues": None,
            "productBadges": None,
            "rootCategories": None,
        }
    )

    assert product.images == []
    assert product.product_attribute_values == []
    assert product.product_badges == []
    assert product.root_categories == []
    assert product.brand is None


@pytest.mark.unit
def test_numeric_ids_are_strings():
    product = Product.model_validate({"id": 12, "rootCategories": [{"id": 3}]})

    assert product.id == "12"
    assert product.root_categories[0].id == "3"


@pytest.mark.unit
def test_flat_brand_name_becomes_nested_brand():
    product = Product.model_validate({"id": "1", "brand_name": "Jako"})

    assert product.brand.name == "Jako"
    assert product.brand_name == "Jako"


@pytest.mark.unit
def test_nested_brand_wins_over_flat_name():
    product = Product.model_validate(
        {"id": "1", "brand": {"name": "Reusch"}, "brand_name": "Other"}
    )

    assert product.brand_name == "Reusch"


@pytest.mark.unit
def test_single_image_string_is_wrapped():
    product = Product.model_validate({"id": "1", "images": "https://cdn.test/a.jpg"})

    assert product.images == ["https://cdn.test/a.jpg"]


@pytest.mark.unit
def test_offer_discount_becomes_badge():
    product = Product.model_validate({"id": "1", "offer_discount_percentage": 15})

    assert [b.label for b in product.product_badges] == ["15%"]


@pytest.mark.unit
def test_existing_badges_are_kept_over_offer_discount():
    product = Product.model_validate(
        {
            "id": "1",
            "offer_discount_percentage": 15,
            "productBadges": [{"label": "NEW"}],
        }
    )

    assert [b.label for b in product.product_badges] == ["NEW"]


@pytest.mark.unit
def test_python_names_and_aliases_are_both_accepted():
    by_alias = Product.model_validate(
        {"id": "1", "productAttributeValues": [{"key": "M", "attribute": {"label": "Size"}}]}
    )
    by_name = Product(
        id="1",
        product_attribute_values=[{"key": "M", "attribute": {"label": "Size"}}],
    )

    assert by_alias.model_dump() == by_name.model_dump()
    assert "productAttributeValues" in by_name.model_dump(by_alias=True)


@pytest.mark.unit
def test_category_without_subcategories():
    category = Category.model_validate({"id": 1, "subCategories": None, "products": None})

    assert category.sub_categories == []
    assert category.products == []
