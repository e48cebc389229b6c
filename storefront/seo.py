"""
Ukrainian SEO copy for size and product pages.
"""

from collections.abc import Iterable
from typing import Optional

from config.categories import CATEGORY_LABELS, SEGMENT_DESCRIPTIONS
from storefront.core.constants import (
    BRAND_ORDER,
    DEFAULT_BRAND,
    HTML_TAG_PATTERN,
    WHITESPACE_RUN_PATTERN,
)
from storefront.core.models import (
    AvailabilityInfo,
    Product,
    ProductSeoData,
    SizeSeoData,
)
from storefront.core.types import Availability

SELLER_NAME = "Agro-Solar"


def format_list(items: list[str]) -> str:
    """
    Joins items as a Ukrainian enumeration.

    Examples:
        ["a"] -> "a"
        ["a", "b"] -> "a та b"
        ["a", "b", "c"] -> "a, b та c"
    """
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} та {items[-1]}"


def build_categories_list(categories: list[str]) -> str:
    if not categories:
        return "різної сільськогосподарської техніки"
    return format_list([CATEGORY_LABELS.get(c, c) for c in categories])


def build_segments_description(segments: list[str]) -> str:
    if not segments:
        return "різних напрямів аграрної та індустріальної техніки"
    return format_list([
        SEGMENT_DESCRIPTIONS.get(s, f"рішень для сегмента {s.lower()}")
        for s in segments
    ])


def _unique(values: Iterable[Optional[str]]) -> list[str]:
    """Distinct non-empty values in first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def derive_size_seo_data(products: list[Product]) -> SizeSeoData:
    """Summarizes the categories and segments found for one size."""
    categories = _unique(p.category for p in products)
    segments = _unique(p.segment for p in products)

    return SizeSeoData(
        categories=categories,
        segments=segments,
        categories_list=build_categories_list(categories),
        segments_description=build_segments_description(segments),
    )


def detect_brand(*candidates: Optional[str]) -> str:
    """
    First known brand mentioned by any candidate string.

    Candidates are checked in order, brands in BRAND_ORDER; CEAT is the
    default when nothing matches.
    """
    for candidate in candidates:
        if not candidate:
            continue
        normalized = candidate.lower()
        for brand in BRAND_ORDER:
            if brand.lower() in normalized:
                return brand
    return DEFAULT_BRAND


def importer_headline(brand: str) -> str:
    return f"Агро-Солар — офіційний імпортер в Україні шин {brand}"


def sanitize_description(text: Optional[str]) -> str:
    """Strips tags and collapses whitespace."""
    if not text:
        return ""
    out = HTML_TAG_PATTERN.sub(" ", text)
    return WHITESPACE_RUN_PATTERN.sub(" ", out).strip()


def availability_info(warehouse: Optional[str]) -> AvailabilityInfo:
    # Only "in stock" is advertised as available; everything else is made to order
    in_stock = Availability.from_warehouse(warehouse) == Availability.IN_STOCK
    if in_stock:
        return AvailabilityInfo(
            short="в наявності",
            phrase=f"в наявності у {SELLER_NAME} в Україні",
        )
    return AvailabilityInfo(
        short="під замовлення",
        phrase=f"під замовлення у {SELLER_NAME} в Україні",
    )


def build_product_seo(product: Product) -> ProductSeoData:
    """Brand, headline, plain-text description and availability for a product."""
    brand = detect_brand(product.brand, product.product_name)
    return ProductSeoData(
        brand=brand,
        headline=importer_headline(brand),
        description=sanitize_description(product.description or product.specifications),
        availability=availability_info(product.warehouse),
    )
