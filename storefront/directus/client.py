"""
Async client for the Directus catalog API.
No retries: any transport error or non-2xx answer fails the call at once.
"""

from typing import Any, Optional

import httpx

from config.logging_config import LoggerMixin
from config.settings import Settings
from storefront.core.constants import DEFAULT_HEADERS, PRODUCT_COLLECTION
from storefront.core.exceptions import PayloadFormatError, UpstreamError
from storefront.directus.cache import ResponseCache
from storefront.directus.filters import QueryParams


class DirectusClient(LoggerMixin):
    """
    Thin wrapper around httpx.AsyncClient for item queries.

    Usage:
        async with DirectusClient.from_settings(settings) as client:
            items = await client.fetch_items(params)
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 30.0,
        cache_ttl_seconds: int = 300,
        cache_max_entries: int = 128,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Catalog API root URL
            token: Static bearer token
            timeout: Request timeout in seconds
            cache_ttl_seconds: Revalidation window for GET responses
            cache_max_entries: Upper bound on cached GET responses
            transport: Custom transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.cache = ResponseCache(cache_ttl_seconds, max_entries=cache_max_entries)
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={**DEFAULT_HEADERS, "Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "DirectusClient":
        return cls(
            settings.directus_url,
            settings.directus_token.get_secret_value(),
            timeout=settings.request_timeout,
            cache_ttl_seconds=settings.cache_ttl_seconds,
            cache_max_entries=settings.cache_max_entries,
            transport=transport,
        )

    async def __aenter__(self) -> "DirectusClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self.cache.enabled:
            self.logger.info("Catalog client closed", **self.cache.get_stats())
        self.cache.reset()
        await self._http.aclose()

    # REQUESTS

    async def get_json(self, path: str, params: QueryParams) -> dict[str, Any]:
        """
        Performs a GET and returns the decoded JSON object.

        Args:
            path: Path relative to the API root
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            UpstreamError: Network failure or non-2xx status
            PayloadFormatError: Body is not a JSON object
        """
        cache_key = (path, tuple(params))
        cached = self.cache.get(cache_key)
        if cached is not None:
            self.logger.debug("Catalog response served from cache", path=path)
            return cached

        url = f"{self.base_url}{path}"

        try:
            response = await self._http.get(path, params=params)
        except httpx.HTTPError as e:
            self.logger.error("Catalog request failed", url=url, error=str(e))
            raise UpstreamError(
                "Catalog API is unreachable",
                url=url,
                cause=e,
            ) from e

        if response.is_error:
            self.logger.error(
                "Catalog answered with error status",
                url=url,
                status=response.status_code,
            )
            raise UpstreamError(
                f"HTTP error! status: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise PayloadFormatError(
                "Catalog API returned invalid JSON",
                url=url,
                raw_data=response.text,
                cause=e,
            ) from e

        if not isinstance(payload, dict):
            raise PayloadFormatError(url=url, raw_data=response.text)

        self.cache.set(cache_key, payload)
        return payload

    async def fetch_items(
        self,
        params: QueryParams,
        collection: str = PRODUCT_COLLECTION,
    ) -> list[dict[str, Any]]:
        """
        Runs an item query and returns the raw "data" array.

        Raises:
            PayloadFormatError: "data" is missing or not an array
        """
        path = f"/items/{collection}"
        payload = await self.get_json(path, params)

        data = payload.get("data")
        if not isinstance(data, list):
            raise PayloadFormatError(
                "Invalid data format received from catalog API",
                url=f"{self.base_url}{path}",
                raw_data=str(payload),
            )

        self.logger.debug(
            "Catalog items fetched",
            collection=collection,
            count=len(data),
            total_count=payload.get("meta", {}).get("total_count")
            if isinstance(payload.get("meta"), dict) else None,
        )
        return data

    async def fetch_all_pages(
        self,
        fields: list[str],
        page_size: int = 500,
        collection: str = PRODUCT_COLLECTION,
    ) -> list[dict[str, Any]]:
        """
        Walks the whole collection with offset paging.

        Stops after the first page shorter than page_size.

        Args:
            fields: Fields to request
            page_size: Items per request
            collection: Collection name

        Returns:
            Every item of the collection
        """
        items: list[dict[str, Any]] = []
        offset = 0

        while True:
            page_items = await self.fetch_items(
                [
                    ("fields", ",".join(fields)),
                    ("limit", str(page_size)),
                    ("offset", str(offset)),
                ],
                collection=collection,
            )
            items.extend(page_items)

            if len(page_items) < page_size:
                break

            offset += page_size

        self.logger.info(
            "Collection fetched",
            collection=collection,
            total=len(items),
            requests=offset // page_size + 1,
        )
        return items
