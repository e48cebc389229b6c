"""
Storefront facade.
Wires the catalog client, listing pipeline, size index and vendor tools
together so the HTTP app and the CLI share one setup.
"""

from pathlib import Path
from typing import Optional

import httpx

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from storefront.core.models import SizeFilterIndex
from storefront.directus.client import DirectusClient
from storefront.pipeline.catalog import CatalogService
from storefront.pipeline.pressure import PressureCalculator
from storefront.pipeline.size_index import SizeIndexBuilder
from storefront.vendor.trelleborg import TrelleborgRepository


class Storefront(LoggerMixin):
    """
    Entry point to every storefront operation.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Settings (defaults to get_settings())
            transport: Custom HTTP transport for the catalog client
        """
        self.settings = settings or get_settings()

        self.client = DirectusClient.from_settings(self.settings, transport=transport)
        self.catalog = CatalogService(self.client)
        self.size_index = SizeIndexBuilder(
            self.client,
            self.settings.size_index_path,
            page_size=self.settings.size_index_page_size,
            fallback_limit=self.settings.size_index_fallback_limit,
        )
        self.trelleborg = TrelleborgRepository(self.settings.vendor_data_path)
        self.pressure = PressureCalculator()

    async def __aenter__(self) -> "Storefront":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # PAGINATION

    def clamp_limit(self, limit: Optional[int]) -> int:
        """Default page size when unset, capped at max_page_size."""
        if not limit:
            return self.settings.default_page_size
        return min(limit, self.settings.max_page_size)

    # SIZE INDEX

    async def load_size_index(self) -> SizeFilterIndex:
        return await self.size_index.load()

    async def rebuild_size_index(self, path: Optional[Path] = None) -> tuple[SizeFilterIndex, Path]:
        """
        Offline job: full build over the catalog, written as JSON.

        Args:
            path: Output file (defaults to size_index_path)

        Returns:
            Tuple (index, written path)
        """
        index = await self.size_index.build_full()
        return index, self.size_index.write(index, path)

