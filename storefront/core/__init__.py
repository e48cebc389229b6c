"""
Core module: data models, exceptions, types and constants.
"""

from storefront.core.models import (
    Product,
    PaginationInfo,
    ProductPage,
    CatalogQuery,
    SizeFilterIndex,
    CCalcEntry,
    CCalcMeta,
    CCalcTable,
    PressureRecommendation,
)
from storefront.core.exceptions import (
    StorefrontError,
    CatalogError,
    UpstreamError,
    PayloadFormatError,
    NotFoundError,
    VendorDataError,
    ValidationError,
)
from storefront.core.types import (
    Availability,
    SizeIndexSource,
    SearchField,
)
from storefront.core.constants import (
    TRANSLATION_RULES,
    TABLE_HEADER_BREAKS,
    FULL_SEARCH_FIELDS,
    NAME_SEARCH_FIELDS,
)

__all__ = [
    # Models
    "Product",
    "PaginationInfo",
    "ProductPage",
    "CatalogQuery",
    "SizeFilterIndex",
    "CCalcEntry",
    "CCalcMeta",
    "CCalcTable",
    "PressureRecommendation",
    # Exceptions
    "StorefrontError",
    "CatalogError",
    "UpstreamError",
    "PayloadFormatError",
    "NotFoundError",
    "VendorDataError",
    "ValidationError",
    # Types
    "Availability",
    "SizeIndexSource",
    "SearchField",
    # Constants
    "TRANSLATION_RULES",
    "TABLE_HEADER_BREAKS",
    "FULL_SEARCH_FIELDS",
    "NAME_SEARCH_FIELDS",
]
