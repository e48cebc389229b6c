"""
HTTP API (FastAPI).
"""

from storefront.api.app import create_app, router

__all__ = [
    "create_app",
    "router",
]
