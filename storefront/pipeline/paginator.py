"""
Local pagination over a fully sorted list.
"""

import math
from typing import Sequence, TypeVar

from storefront.core.exceptions import ValidationError
from storefront.core.models import PaginationInfo

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, limit: int) -> tuple[list[T], PaginationInfo]:
    """
    Slices one page out of a sorted sequence.

    An empty sequence has zero pages; pages past the end are empty.

    Args:
        items: Complete sorted sequence
        page: 1-based page number
        limit: Page size

    Returns:
        Tuple (page items, pagination info)

    Raises:
        ValidationError: page or limit below 1
    """
    if page < 1:
        raise ValidationError("Page must be >= 1", field="page", value=page)
    if limit < 1:
        raise ValidationError("Limit must be >= 1", field="limit", value=limit)

    total_items = len(items)
    total_pages = math.ceil(total_items / limit)

    start = (page - 1) * limit
    page_items = list(items[start:start + limit])

    pagination = PaginationInfo(
        page=page,
        limit=limit,
        total_items=total_items,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1 and total_items > 0,
    )
    return page_items, pagination
