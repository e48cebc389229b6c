"""
Configuration package.
Exports settings, category aliases and logging setup used across the project.
"""

from config.settings import Settings, get_settings
from config.categories import CATEGORY_TO_API, map_category_to_api
from config.logging_config import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "CATEGORY_TO_API",
    "map_category_to_api",
    "setup_logging",
]
