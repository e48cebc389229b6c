"""
Shared pytest configuration and fixtures.
"""

import re
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest

from config.settings import Settings, get_settings
from storefront.core.models import CCalcEntry, Product
from storefront.directus.client import DirectusClient
from storefront.service import Storefront

FIXTURES_DIR = Path(__file__).parent / "fixtures"
VENDOR_DIR = FIXTURES_DIR / "vendor"

SEGMENT_AGRI = "Сільськогосподарські шини (С/Г)"
SEGMENT_INDUSTRIAL = "Індустріальні та багатофункціональні шини"


# FAKE CATALOG API

_SIMPLE_FILTER = re.compile(r"^filter\[(\w+)\]\[(_\w+)\]$")
_OR_FILTER = re.compile(r"^filter\[_or\]\[\d+\]\[(\w+)\]\[_icontains\]$")


def _matches(item: dict[str, Any], field: str, operator: str, value: str) -> bool:
    current = item.get(field)
    if current is None:
        return False

    if operator == "_eq":
        return str(current) == value
    if operator == "_in":
        return str(current) in value.split(",")
    if operator == "_icontains":
        return value.lower() in str(current).lower()
    if operator == "_gte":
        return Decimal(str(current)) >= Decimal(value)
    if operator == "_lte":
        return Decimal(str(current)) <= Decimal(value)

    raise AssertionError(f"Unsupported operator {operator}")


class FakeDirectus:
    """
    In-memory stand-in for the catalog API item endpoint.

    Understands the filter operators, limit/offset paging and field
    selection used by the storefront, and records every request.
    """

    def __init__(self, items: list[dict[str, Any]], status_code: int = 200):
        self.items = items
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def params_of(self, index: int = -1) -> list[tuple[str, str]]:
        return list(self.requests[index].url.params.multi_items())

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"errors": [{"message": "boom"}]})

        if request.url.path != "/items/Product":
            return httpx.Response(404, json={"errors": [{"message": "unknown collection"}]})

        params = request.url.params
        result = list(self.items)

        or_terms: list[tuple[str, str]] = []
        for key, value in params.multi_items():
            or_match = _OR_FILTER.match(key)
            if or_match:
                or_terms.append((or_match.group(1), value))
                continue

            simple = _SIMPLE_FILTER.match(key)
            if simple:
                field, operator = simple.groups()
                result = [i for i in result if _matches(i, field, operator, value)]

        if or_terms:
            result = [
                i for i in result
                if any(_matches(i, field, "_icontains", value) for field, value in or_terms)
            ]

        total = len(result)

        offset = int(params.get("offset", "0"))
        limit = int(params.get("limit", "100"))
        result = result[offset:] if limit == -1 else result[offset:offset + limit]

        if "fields" in params:
            fields = params["fields"].split(",")
            result = [{f: i.get(f) for f in fields} for i in result]

        body: dict[str, Any] = {"data": result}
        if params.get("meta") == "total_count":
            body["meta"] = {"total_count": total}

        return httpx.Response(200, json=body)


# CATALOG DATA

def _product(
    id: int,
    name: str,
    size: str,
    diameter: str,
    brand: str,
    price: int,
    category: str,
    segment: str,
    warehouse: Optional[str],
    **extra,
) -> dict[str, Any]:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return {
        "id": id,
        "sku": f"SKU-{id:03d}",
        "slug": slug,
        "product_name": name,
        "model": name.split()[1],
        "size": size,
        "diameter": diameter,
        "brand": brand,
        "regular_price": price,
        "discount_price": None,
        "Category": category,
        "Segment": segment,
        "warehouse": warehouse,
        "on_the_way": None,
        **extra,
    }


@pytest.fixture
def catalog_items() -> list[dict[str, Any]]:
    """Eleven products across harvesters, tractors, sprayers and loaders."""
    return [
        _product(1, "Trelleborg TM2000 800/65R32", "800/65R32", "32", "Trelleborg", 52000,
                 "Комбайни", SEGMENT_AGRI, "In stock"),
        _product(2, "Mitas SFT 800/70R32", "800/70R32", "32", "Mitas", 48000,
                 "Комбайни", SEGMENT_AGRI, "In stock"),
        _product(3, "CEAT Farmax 650/75R32", "650/75R32", "32", "CEAT", 39000,
                 "Комбайни", SEGMENT_AGRI, "In stock"),
        _product(4, "Alliance 360 800/65R32", "800/65R32", "32", "Alliance", 45000,
                 "Комбайни", SEGMENT_AGRI, "out of stock"),
        _product(5, "BKT Agrimax 650/85R38", "650/85R38", "38", "BKT", 41000,
                 "Комбайни", SEGMENT_AGRI, "out of stock"),
        _product(6, "Trelleborg TM900 710/70R42", "710/70R42", "42", "Trelleborg", 61000,
                 "Трактори Великої Потужності", SEGMENT_AGRI, "On order",
                 description="<p>Шина   для <b>тракторів</b></p>"),
        _product(7, "CEAT Farmax R70 710/70R42", "710/70R42", "42", "CEAT", 43000,
                 "Трактори Великої Потужності", SEGMENT_AGRI, "In stock"),
        _product(8, "Mitas HC1000 710/70R42", "710/70R42", "42", "Mitas", 55000,
                 "Обприскувачі", SEGMENT_AGRI, None),
        _product(9, "CEAT Loader 405/70-24", "405/70-24", "24", "CEAT", 21000,
                 "Навантажувачі (Телескопічні, Колісні, Екскаватори-навантажувачі)",
                 SEGMENT_INDUSTRIAL, "In stock"),
        _product(10, "CEAT Skid 10-16.5", "10-16.5", "16.5", "CEAT", 9000,
                 "Міні-навантажувачі (Skid Steer)", SEGMENT_INDUSTRIAL, "On order"),
        _product(11, "CEAT Loader 12.5/80-18", "12.5/80-18", "18", "CEAT", 15000,
                 "Навантажувачі (Телескопічні, Колісні, Екскаватори-навантажувачі)",
                 SEGMENT_INDUSTRIAL, "In stock"),
    ]


@pytest.fixture
def fake_directus(catalog_items) -> FakeDirectus:
    return FakeDirectus(catalog_items)


@pytest.fixture
def products(catalog_items) -> list[Product]:
    """Catalog items validated as Product models."""
    return [Product.model_validate(item) for item in catalog_items]


# CALCULATOR DATA

@pytest.fixture
def ccalc_entries() -> list[CCalcEntry]:
    """Two rows at 70 km/h: 1000 kg at 0.8 bar, 2000 kg at 1.2 bar."""
    return [
        CCalcEntry(speed="70", load="1000", pressure="0.8"),
        CCalcEntry(speed="70", load="2000", pressure="1.2"),
    ]


# SETTINGS

@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment and .env file."""
    return Settings(
        _env_file=None,
        env="testing",
        log_level="DEBUG",
        directus_url="https://catalog.test/",
        directus_token="test-token",
        size_index_path=tmp_path / "public" / "size-filter-data.json",
        vendor_data_path=VENDOR_DIR,
        log_path=tmp_path / "logs",
    )


@pytest.fixture
def settings_override(tmp_path, monkeypatch):
    """Environment for code paths that call get_settings() themselves."""
    monkeypatch.setenv("ENV", "testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DIRECTUS_URL", "https://catalog.test")
    monkeypatch.setenv("DIRECTUS_TOKEN", "test-token")
    monkeypatch.setenv("VENDOR_DATA_PATH", str(VENDOR_DIR))
    monkeypatch.setenv("SIZE_INDEX_PATH", str(tmp_path / "size-filter-data.json"))


# CLIENTS

@pytest.fixture
async def directus_client(fake_directus):
    client = DirectusClient(
        "https://catalog.test",
        "test-token",
        cache_ttl_seconds=0,
        transport=fake_directus.transport,
    )
    yield client
    await client.aclose()


@pytest.fixture
async def storefront(settings, fake_directus):
    instance = Storefront(
        settings.model_copy(update={"cache_ttl_seconds": 0}),
        transport=fake_directus.transport,
    )
    yield instance
    await instance.aclose()


@pytest.fixture
def directus_factory():
    """Builds a fake catalog API over custom items or a failing status."""
    return FakeDirectus
