"""Query-string helpers shared by the listing routes."""

from __future__ import annotations

from fastapi import HTTPException, status

from storefront_catalog.models.listing import FilterSelection, ListingFilter


def parse_attribute_params(values: list[str] | None) -> FilterSelection:
    """Turn repeated ``attr=Label:Value`` parameters into a selection mapping."""

    selection: FilterSelection = {}
    for raw in values or []:
        label, sep, value = raw.partition(":")
        label, value = label.strip(), value.strip()
        if not sep or not label or not value:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid attribute filter '{raw}', expected Label:Value",
            )
        selection.setdefault(label, []).append(value)
    return selection


def build_criteria(
    brands: list[str] | None,
    category_id: str | None,
    attrs: list[str] | None,
) -> ListingFilter:
    return ListingFilter(
        brands=[brand for brand in brands or [] if brand.strip()],
        category_id=category_id,
        attributes=parse_attribute_params(attrs),
    )


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
