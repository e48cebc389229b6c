"""
Integration tests for CatalogService against the fake catalog API.
"""

from decimal import Decimal

import pytest

from storefront.core.exceptions import NotFoundError, UpstreamError
from storefront.core.models import CatalogQuery
from storefront.directus.client import DirectusClient
from storefront.pipeline.catalog import CatalogService


class TestCatalogService:
    """Tests for CatalogService."""

    @pytest.fixture
    def service(self, directus_client) -> CatalogService:
        return CatalogService(directus_client)

    # LISTINGS

    async def test_harvester_in_stock_first_page(self, service, fake_directus):
        query = CatalogQuery(category="Harvester", warehouse="In stock", page=1, limit=2)

        page = await service.query_products(query)

        assert [p.product_name for p in page.data] == [
            "CEAT Farmax 650/75R32",
            "Mitas SFT 800/70R32",
        ]
        assert page.pagination.total_items == 3
        assert page.pagination.total_pages == 2
        assert page.pagination.has_next is True
        assert page.pagination.has_prev is False

        params = fake_directus.params_of()
        assert ("filter[Category][_eq]", "Комбайни") in params
        assert ("limit", "-1") in params

    async def test_harvester_in_stock_second_page(self, service):
        query = CatalogQuery(category="Harvester", warehouse="In stock", page=2, limit=2)

        page = await service.query_products(query)

        assert [p.id for p in page.data] == [1]
        assert page.pagination.has_next is False
        assert page.pagination.has_prev is True

    async def test_in_stock_items_lead_across_pages(self, service):
        query = CatalogQuery(category="Harvester", limit=3)

        first = await service.query_products(query)
        second = await service.query_products(query.model_copy(update={"page": 2}))

        assert [p.id for p in first.data] == [3, 2, 1]
        assert [p.id for p in second.data] == [4, 5]

    async def test_price_range(self, service):
        query = CatalogQuery(
            categories="Harvester",
            min_price=Decimal("40000"),
            max_price=Decimal("50000"),
        )

        page = await service.query_products(query)

        assert [p.id for p in page.data] == [2, 4, 5]

    async def test_search_over_size(self, service):
        page = await service.query_products(CatalogQuery(search="710/70"))

        assert [p.id for p in page.data] == [7, 6, 8]

    async def test_filtered_search_uses_name_only(self, service, fake_directus):
        page = await service.filter_products(CatalogQuery(search="FARMAX"))

        assert [p.id for p in page.data] == [3, 7]
        assert ("filter[product_name][_icontains]", "FARMAX") in fake_directus.params_of()

    async def test_filtered_search_ignores_sku(self, service):
        page = await service.filter_products(CatalogQuery(search="SKU-001"))

        assert page.data == []
        assert page.pagination.total_pages == 0

    async def test_segment(self, service):
        page = await service.products_by_segment("Індустріальні та багатофункціональні шини")

        assert [p.id for p in page.data] == [11, 9, 10]

    async def test_size(self, service):
        page = await service.products_by_size("710/70R42", page=1, limit=2)

        assert [p.id for p in page.data] == [7, 6]
        assert page.pagination.total_items == 3

    async def test_empty_result(self, service):
        page = await service.products_by_size("1/1R1")

        assert page.data == []
        assert page.pagination.total_items == 0
        assert page.pagination.has_next is False
        assert page.pagination.has_prev is False

    # SIMILAR PRODUCTS

    async def test_similar_products(self, service):
        products = await service.similar_products("710/70R42")

        assert [p.id for p in products] == [7, 6, 8]

    async def test_similar_products_exclude(self, service):
        products = await service.similar_products("710/70R42", exclude_id=7)

        assert [p.id for p in products] == [6, 8]

    # SINGLE PRODUCTS

    async def test_get_product(self, service):
        product = await service.get_product(7)

        assert product.slug == "ceat-farmax-r70-710-70r42"

    async def test_get_product_by_slug(self, service):
        product = await service.get_product_by_slug("mitas-sft-800-70r32")

        assert product.id == 2

    async def test_missing_product(self, service):
        with pytest.raises(NotFoundError):
            await service.get_product(999)

        with pytest.raises(NotFoundError):
            await service.get_product_by_slug("nope")

    # FAILURES

    async def test_malformed_entries_are_skipped(self, directus_factory):
        fake = directus_factory([
            {"id": 1, "product_name": "Good", "warehouse": "In stock"},
            {"product_name": "No id"},
            {"id": 2, "regular_price": "not a price"},
        ])
        client = DirectusClient("https://catalog.test", "t", cache_ttl_seconds=0, transport=fake.transport)

        page = await CatalogService(client).query_products(CatalogQuery())

        assert [p.id for p in page.data] == [1]
        assert page.pagination.total_items == 1
        await client.aclose()

    async def test_upstream_failure(self, directus_factory):
        fake = directus_factory([], status_code=500)
        client = DirectusClient("https://catalog.test", "t", cache_ttl_seconds=0, transport=fake.transport)

        with pytest.raises(UpstreamError) as exc_info:
            await CatalogService(client).query_products(CatalogQuery())

        assert exc_info.value.status_code == 500
        await client.aclose()
