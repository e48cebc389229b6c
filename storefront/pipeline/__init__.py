"""
Pipeline module: catalog listing, size index, vendor table and pressure tools.
"""

from storefront.pipeline.catalog import CatalogService
from storefront.pipeline.paginator import paginate
from storefront.pipeline.parser import ValueParser
from storefront.pipeline.pressure import PressureCalculator
from storefront.pipeline.size_index import (
    SizeIndexBuilder,
    build_size_filter_map,
    sort_diameter_values,
)
from storefront.pipeline.sorting import sort_products
from storefront.pipeline.table_normalizer import TableNormalizer

__all__ = [
    "CatalogService",
    "paginate",
    "ValueParser",
    "PressureCalculator",
    "SizeIndexBuilder",
    "build_size_filter_map",
    "sort_diameter_values",
    "sort_products",
    "TableNormalizer",
]
