"""Encode filter selections as SEO-friendly URL path segments and back.

A selection such as ``brands=["Reusch"]``, ``{"Color": ["Black"], "Size": ["Large"]}``
is written as ``brand-reusch/black/size-large``:

* every brand becomes ``brand-<brand>``;
* a single selected colour is written as its bare value;
* every other value is written as ``<label>-<value>``.

Parsing needs the facets and brands of the listing, since a slug alone cannot
tell labels, values and brand names apart.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from storefront_catalog.models.listing import AttributeFacet, ListingFilter
from storefront_catalog.services.catalog.filters import split_brand_selection

logger = logging.getLogger(__name__)

BRAND_PREFIX = "brand-"
COLOR_LABEL = "color"

_SEPARATORS = re.compile(r"[\s_]+")
_DISALLOWED = re.compile(r"[^\w-]+")
_HYPHENS = re.compile(r"-+")


def to_slug(value: object) -> str:
    """Lowercase ``value`` and keep only word characters joined by single hyphens."""

    if value is None:
        return ""
    slug = str(value).strip().lower()
    slug = _SEPARATORS.sub("-", slug)
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def from_slug(slug: str) -> str:
    """Best-effort readable name for a slug: ``adidas-predator`` -> ``Adidas Predator``."""

    return " ".join(part.capitalize() for part in slug.split("-") if part)


def _attribute_order(label: str) -> tuple[int, str]:
    return (0 if label.lower() == COLOR_LABEL else 1, label.casefold())


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def build_filter_path(criteria: ListingFilter) -> str:
    """Render ``criteria`` as slash-separated path segments.

    Brands from ``criteria.brands`` and from a ``Brand`` attribute selection are
    both written as ``brand-`` segments. The category constraint is not part of
    the path.
    """

    attributes, brand_selection = split_brand_selection(criteria.attributes)
    segments = _unique(
        f"{BRAND_PREFIX}{slug}"
        for slug in map(to_slug, [*criteria.brands, *brand_selection])
        if slug
    )

    bare_colour_written = False
    for label in sorted(attributes, key=_attribute_order):
        values = [to_slug(value) for value in attributes[label]]
        values = [value for value in values if value]
        if not values:
            continue
        label_slug = to_slug(label)
        if not bare_colour_written and label.lower() == COLOR_LABEL and len(values) == 1:
            segments.append(values[0])
            bare_colour_written = True
            continue
        segments.extend(f"{label_slug}-{value}" for value in values)

    return "/".join(segments)


def _split_segments(path: str | Sequence[str]) -> list[str]:
    if isinstance(path, str):
        path = path.split("/")
    return [segment.strip().lower() for segment in path if segment and segment.strip()]


def _append(selection: dict[str, list[str]], label: str, value: str) -> None:
    values = selection.setdefault(label, [])
    if value not in values:
        values.append(value)


def parse_filter_path(
    path: str | Sequence[str],
    facets: Sequence[AttributeFacet],
    brands: Sequence[str] = (),
) -> ListingFilter:
    """Resolve path segments against known facets and brands.

    Each segment is tried in turn as:

    1. ``brand-<brand>``, matched against ``brands``. When no brands are known,
       the name is rebuilt from the slug.
    2. ``<label>-<value>``. When label slugs overlap, the longest one wins.
    3. A bare value of any facet, first facet first.
    4. A bare brand name.

    Segments that match nothing are ignored.
    """

    values_by_label = {
        facet.attribute: {to_slug(value): value for value in facet.values}
        for facet in facets
    }
    labels_by_slug = sorted(
        ((to_slug(label), label) for label in values_by_label),
        key=lambda item: len(item[0]),
        reverse=True,
    )
    brands_by_slug = {to_slug(name): name for name in brands if name}

    selected_brands: list[str] = []
    attributes: dict[str, list[str]] = {}

    for segment in _split_segments(path):
        if segment.startswith(BRAND_PREFIX):
            brand_slug = segment[len(BRAND_PREFIX):]
            name = brands_by_slug.get(brand_slug) if brands_by_slug else from_slug(brand_slug)
            if name:
                if name not in selected_brands:
                    selected_brands.append(name)
                continue

        if _match_labelled_value(segment, labels_by_slug, values_by_label, attributes):
            continue

        label = next(
            (label for label, values in values_by_label.items() if segment in values),
            None,
        )
        if label is not None:
            _append(attributes, label, values_by_label[label][segment])
            continue

        if segment in brands_by_slug:
            name = brands_by_slug[segment]
            if name not in selected_brands:
                selected_brands.append(name)
            continue

        logger.debug("Ignoring unknown filter path segment %r", segment)

    return ListingFilter(brands=selected_brands, attributes=attributes)


def _match_labelled_value(
    segment: str,
    labels_by_slug: Sequence[tuple[str, str]],
    values_by_label: dict[str, dict[str, str]],
    attributes: dict[str, list[str]],
) -> bool:
    for label_slug, label in labels_by_slug:
        if not label_slug or not segment.startswith(f"{label_slug}-"):
            continue
        value = values_by_label[label].get(segment[len(label_slug) + 1:])
        if value is not None:
            _append(attributes, label, value)
            return True
    return False
