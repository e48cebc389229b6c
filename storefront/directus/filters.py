"""
Catalog query -> Directus item query parameters.
"""

from decimal import Decimal
from typing import Optional

from config.categories import map_category_to_api
from storefront.core.constants import UNPAGINATED_LIMIT, WAREHOUSE_ANY
from storefront.core.models import CatalogQuery

QueryParams = list[tuple[str, str]]


def _filter_key(field: str, operator: str) -> str:
    return f"filter[{field}][{operator}]"


def _format_price(value: Decimal) -> str:
    return format(value, "f")


def build_search_params(search: str, fields: tuple[str, ...]) -> QueryParams:
    """
    Case-insensitive "contains" search over one or more fields.

    A single field is a plain filter; several fields are combined with _or.
    """
    if len(fields) == 1:
        return [(_filter_key(fields[0], "_icontains"), search)]

    return [
        (f"filter[_or][{index}][{field}][_icontains]", search)
        for index, field in enumerate(fields)
    ]


def build_item_params(
    query: CatalogQuery,
    *,
    limit: int = UNPAGINATED_LIMIT,
    fields: Optional[list[str]] = None,
) -> QueryParams:
    """
    Builds query parameters for GET /items/Product.

    The default limit asks for the complete filtered set so sorting and
    pagination can be done locally over all matches.

    Args:
        query: Filter criteria
        limit: Upstream limit (-1 means everything)
        fields: Restrict returned fields

    Returns:
        Ordered list of (key, value) pairs
    """
    params: QueryParams = []

    if query.category:
        params.append((_filter_key("Category", "_eq"), map_category_to_api(query.category)))

    if query.categories:
        categories = [map_category_to_api(c) for c in query.categories]
        params.append((_filter_key("Category", "_in"), ",".join(categories)))

    if query.segments:
        params.append((_filter_key("Segment", "_in"), ",".join(query.segments)))

    if query.size:
        params.append((_filter_key("size", "_eq"), query.size))

    if query.min_price is not None:
        params.append((_filter_key("regular_price", "_gte"), _format_price(query.min_price)))
    if query.max_price is not None:
        params.append((_filter_key("regular_price", "_lte"), _format_price(query.max_price)))

    if query.warehouse and query.warehouse != WAREHOUSE_ANY:
        params.append((_filter_key("warehouse", "_eq"), query.warehouse))

    if query.search:
        params.extend(build_search_params(query.search, query.search_fields))

    if fields:
        params.append(("fields", ",".join(fields)))

    params.append(("limit", str(limit)))
    params.append(("meta", "total_count"))

    return params


def build_lookup_params(field: str, value: str) -> QueryParams:
    """Single-item lookup by an exact field value."""
    return [
        (_filter_key(field, "_eq"), value),
        ("limit", "1"),
    ]
