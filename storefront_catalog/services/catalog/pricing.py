"""Price derivations shown on product cards."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from storefront_catalog.models.listing import PriceCard
from storefront_catalog.models.product import Product

_PERCENT_RE = re.compile(r"(\d+)%")


def display_price(product: Product) -> float:
    """Price shown on listings: exact range price, else list price, else 0."""

    if product.price_range_exact_amount is not None:
        return product.price_range_exact_amount
    return product.list_price_amount or 0.0


def discount_percent(product: Product) -> float | None:
    """Percentage advertised by the first badge, e.g. ``"20%"`` -> 20."""

    if not product.product_badges:
        return None
    label = product.product_badges[0].label or ""
    match = _PERCENT_RE.search(label)
    if match is None:
        return None
    return float(match.group(1))


def sale_price(product: Product) -> float:
    """List price reduced by the badge discount, if any."""

    base = product.list_price_amount or 0.0
    percent = discount_percent(product)
    if percent is None:
        return base
    return base - (base * percent) / 100


def convert_price(amount: float | None, rate: float) -> float:
    """Convert ``amount`` with an explicit currency rate; unusable amounts give 0."""

    if amount is None or isinstance(amount, bool):
        return 0.0
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return value * rate


def price_cards(
    products: Sequence[Product],
    *,
    rate: float,
    currency: str,
) -> list[PriceCard]:
    """Build the price block of each product card."""

    cards: list[PriceCard] = []
    for product in products:
        if not product.dedup_key:
            continue
        shown = display_price(product)
        cards.append(
            PriceCard(
                product_id=product.dedup_key,
                display_price=shown,
                sale_price=sale_price(product),
                discount_percent=discount_percent(product),
                converted_price=convert_price(shown, rate),
                currency=currency,
            )
        )
    return cards
