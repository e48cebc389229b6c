"""
Agro tyre storefront backend.
Catalog querying, size filter index, vendor table and pressure tools.
"""

__version__ = "0.1.0"
