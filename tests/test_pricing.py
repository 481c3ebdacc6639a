"""Tests for product card price derivations."""

import math

import pytest

from storefront_catalog.services.catalog.pricing import (
    convert_price,
    discount_percent,
    display_price,
    price_cards,
    sale_price,
)


@pytest.mark.unit
def test_display_price_prefers_exact_range_price(make_product):
    product = make_product("1", list_price_amount=100, price_range_exact_amount=80)

    assert display_price(product) == 80


@pytest.mark.unit
def test_display_price_falls_back_to_list_price_then_zero(make_product):
    assert display_price(make_product("1", list_price_amount="49.90")) == 49.9
    assert display_price(make_product("2")) == 0


@pytest.mark.unit
def test_percentage_badge_discounts_list_price(make_product):
    product = make_product(
        "1",
        list_price_amount=200,
        productBadges=[{"label": "-25% OFF", "color": "red"}, {"label": "50%"}],
    )

    assert discount_percent(product) == 25
    assert sale_price(product) == 150


@pytest.mark.unit
def test_non_percentage_badge_keeps_list_price(make_product):
    product = make_product("1", list_price_amount=60, productBadges=[{"label": "NEW"}])

    assert discount_percent(product) is None
    assert sale_price(product) == 60


@pytest.mark.unit
@pytest.mark.parametrize("amount", [None, "abc", math.nan, True])
def test_convert_price_rejects_unusable_amounts(amount):
    assert convert_price(amount, 4.6) == 0


@pytest.mark.unit
def test_convert_price_uses_explicit_rate():
    assert convert_price(10, 4.6) == pytest.approx(46.0)


@pytest.mark.unit
def test_price_cards_skip_unaddressable_products(make_product):
    products = [
        make_product("1", list_price_amount=100, productBadges=[{"label": "10%"}]),
        make_product(name="ghost", list_price_amount=5),
    ]

    cards = price_cards(products, rate=2.0, currency="SAR")

    assert len(cards) == 1
    card = cards[0]
    assert card.product_id == "1"
    assert card.display_price == 100
    assert card.sale_price == 90
    assert card.converted_price == 200
    assert card.currency == "SAR"
