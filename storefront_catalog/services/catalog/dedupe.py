"""Collapse products that appear under several categories of the same tree."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from storefront_catalog.models.product import Product

logger = logging.getLogger(__name__)


def dedupe(products: Sequence[Product] | None) -> list[Product]:
    """Return the products unique by ``id`` (or ``sku``), first occurrence wins.

    Products carrying neither identifier cannot be linked to and are dropped.
    Anything that is not a list or tuple, including ``None`` from a failed
    fetch, yields an empty list.
    """

    if not isinstance(products, (list, tuple)):
        return []

    unique: dict[str, Product] = {}
    dropped = 0
    for product in products:
        key = product.dedup_key
        if not key:
            dropped += 1
            continue
        unique.setdefault(key, product)

    if dropped:
        logger.debug("Dropped %d products without id or sku", dropped)
    return list(unique.values())
