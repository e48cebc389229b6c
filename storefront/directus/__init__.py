"""
Catalog API access: query encoding, HTTP client and response cache.
"""

from storefront.directus.cache import ResponseCache
from storefront.directus.client import DirectusClient
from storefront.directus.filters import (
    build_item_params,
    build_lookup_params,
    build_search_params,
)

__all__ = [
    "DirectusClient",
    "ResponseCache",
    "build_item_params",
    "build_lookup_params",
    "build_search_params",
]
