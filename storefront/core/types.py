"""
Custom types and enumerations.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import Field, StringConstraints


# ENUMERATIONS

class Availability(str, Enum):
    """Warehouse availability status, in display order."""

    IN_STOCK = "In stock"
    ON_ORDER = "On order"
    OUT_OF_STOCK = "out of stock"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int:
        """Sort rank: in stock first, unknown statuses last."""
        return _AVAILABILITY_RANKS[self]

    @classmethod
    def from_warehouse(cls, warehouse: str | None) -> "Availability":
        """Maps the raw catalog warehouse string to a status."""
        if not warehouse:
            return cls.UNKNOWN

        normalized = warehouse.strip().lower()
        for status in (cls.IN_STOCK, cls.ON_ORDER, cls.OUT_OF_STOCK):
            if status.value.lower() == normalized:
                return status

        return cls.UNKNOWN


_AVAILABILITY_RANKS: dict[Availability, int] = {
    Availability.IN_STOCK: 1,
    Availability.ON_ORDER: 2,
    Availability.OUT_OF_STOCK: 3,
    Availability.UNKNOWN: 4,
}


class SizeIndexSource(str, Enum):
    """Where a size filter index was built from."""

    STATIC = "static"             # Precomputed by the offline job
    LIVE_SAMPLE = "live_sample"   # Bounded live query, may be incomplete


# ANNOTATED TYPES

# Catalog text fields that support "contains" search
SearchField = Literal["product_name", "model", "size", "sku"]

# 1-based page number
PageNumber = Annotated[int, Field(ge=1)]

# Page size
PageSize = Annotated[int, Field(ge=1)]

# Vendor SKU used as a file name
VendorSKU = Annotated[
    str,
    StringConstraints(
        pattern=r"^[A-Za-z0-9][A-Za-z0-9_.\-]*$",
        strip_whitespace=True,
        max_length=100,
    ),
]
