"""
Catalog query pipeline.
Flow: CatalogQuery -> upstream item query (everything) -> validation ->
sort by availability and name -> local pagination.
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from config.logging_config import LoggerMixin
from storefront.core.constants import NAME_SEARCH_FIELDS
from storefront.core.exceptions import NotFoundError
from storefront.core.models import CatalogQuery, Product, ProductPage
from storefront.directus.client import DirectusClient
from storefront.directus.filters import build_item_params, build_lookup_params
from storefront.pipeline.paginator import paginate
from storefront.pipeline.sorting import sort_products


class CatalogService(LoggerMixin):
    """
    Catalog listings with global ordering.

    The catalog API cannot order by availability rank, so every listing
    fetches the complete filtered set and sorts and paginates it locally.
    """

    def __init__(self, client: DirectusClient):
        self.client = client

    # LISTINGS

    async def query_products(self, query: CatalogQuery) -> ProductPage:
        """
        Returns one sorted page of products matching the query.

        Args:
            query: Filters plus page and limit

        Returns:
            ProductPage with data and pagination

        Raises:
            UpstreamError: Catalog API failure
            PayloadFormatError: Malformed catalog response
        """
        log = self.log_operation("query_products", page=query.page, limit=query.limit)

        products = await self.fetch_products(query)
        ordered = sort_products(products)
        page_items, pagination = paginate(ordered, query.page, query.limit)

        log.info(
            "Listing built",
            total_items=pagination.total_items,
            total_pages=pagination.total_pages,
            returned=len(page_items),
        )
        return ProductPage(data=page_items, pagination=pagination)

    async def filter_products(self, query: CatalogQuery) -> ProductPage:
        """Filter sidebar listing: search looks at product names only."""
        return await self.query_products(
            query.model_copy(update={"search_fields": NAME_SEARCH_FIELDS})
        )

    async def products_by_segment(self, segment: str, page: int = 1, limit: int = 30) -> ProductPage:
        return await self.query_products(
            CatalogQuery(segments=[segment], page=page, limit=limit)
        )

    async def products_by_size(self, size: str, page: int = 1, limit: int = 30) -> ProductPage:
        return await self.query_products(CatalogQuery(size=size, page=page, limit=limit))

    async def similar_products(
        self,
        size: str,
        exclude_id: Optional[int] = None,
    ) -> list[Product]:
        """
        All products of exactly the given size, sorted, unpaginated.

        Args:
            size: Size string, e.g. "710/70R42"
            exclude_id: Product id removed after the query (the current product)

        Returns:
            Sorted product list
        """
        products = sort_products(await self.fetch_products(CatalogQuery(size=size)))

        if exclude_id is not None:
            products = [p for p in products if p.id != exclude_id]

        self.logger.debug("Similar products", size=size, count=len(products))
        return products

    # SINGLE PRODUCTS

    async def get_product(self, product_id: int) -> Product:
        return await self._get_one("id", str(product_id))

    async def get_product_by_slug(self, slug: str) -> Product:
        return await self._get_one("slug", slug)

    async def _get_one(self, field: str, value: str) -> Product:
        items = await self.client.fetch_items(build_lookup_params(field, value))
        products = self._validate_products(items)

        if not products:
            raise NotFoundError(
                "Product not found",
                resource="product",
                key=f"{field}={value}",
            )
        return products[0]

    # FETCH

    async def fetch_products(self, query: CatalogQuery) -> list[Product]:
        """Fetches and validates the complete filtered set."""
        items = await self.client.fetch_items(build_item_params(query))
        return self._validate_products(items)

    def _validate_products(self, items: list[Any]) -> list[Product]:
        """
        Validates raw catalog entries.

        Entries that do not match the Product schema are dropped and logged.
        """
        products: list[Product] = []
        rejected = 0

        for item in items:
            try:
                products.append(Product.model_validate(item))
            except PydanticValidationError as e:
                rejected += 1
                self.logger.warning(
                    "Malformed catalog entry rejected",
                    item_id=item.get("id") if isinstance(item, dict) else None,
                    errors=e.error_count(),
                )

        if rejected:
            self.logger.info("Catalog entries rejected", rejected=rejected, kept=len(products))

        return products
