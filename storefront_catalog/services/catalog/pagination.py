"""Client-side slicing helpers for product grids."""

from __future__ import annotations

import math
from collections.abc import Sequence

from storefront_catalog.models.listing import ListingPage
from storefront_catalog.models.product import Product


def truncate(products: Sequence[Product], limit: int | None) -> list[Product]:
    """Keep the first ``limit`` products; ``None`` keeps everything."""

    if limit is None:
        return list(products)
    return list(products[: max(limit, 0)])


def paginate(products: Sequence[Product], page: int, page_size: int) -> ListingPage:
    """Slice ``products`` into a 1-based page.

    Pages past the end come back empty with the real totals so the caller can
    still render the pager.
    """

    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    page = max(page, 1)
    total = len(products)
    start = (page - 1) * page_size
    return ListingPage(
        items=list(products[start : start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
    )
