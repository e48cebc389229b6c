"""
Pydantic data models.
Validated shapes for catalog products, listing pages, the size filter
index and the vendor pressure calculator.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from storefront.core.constants import FULL_SEARCH_FIELDS
from storefront.core.types import (
    Availability,
    PageNumber,
    PageSize,
    SearchField,
    SizeIndexSource,
)


def _stringify(value: Any) -> Any:
    """Catalog numeric-as-string fields sometimes arrive as numbers."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


def _split_csv(value: Any) -> Any:
    """Accepts "a, b" as well as ["a", "b"]; drops blank items."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return value


class Product(BaseModel):
    """
    Catalog product as returned by the catalog API.
    Field aliases keep the upstream names on output.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Identification
    id: int
    sku: Optional[str] = None
    slug: Optional[str] = None

    # Descriptive data
    product_name: Optional[str] = None
    model: Optional[str] = None
    size: Optional[str] = None
    diameter: Optional[str] = None
    brand: Optional[str] = None

    # Prices
    regular_price: Optional[Decimal] = Field(default=None, ge=0)
    discount_price: Optional[Decimal] = Field(default=None, ge=0)

    # Classification
    category: Optional[str] = Field(default=None, alias="Category")
    segment: Optional[str] = Field(default=None, alias="Segment")

    # Availability
    warehouse: Optional[str] = None
    on_the_way: bool = False

    # Long-form content
    description: Optional[str] = None
    specifications: Optional[str] = None
    product_image: Optional[str] = None

    @field_validator("sku", "model", "size", "diameter", "product_name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        """Accepts numbers for text fields."""
        return _stringify(v)

    @field_validator("on_the_way", mode="before")
    @classmethod
    def null_as_false(cls, v: Any) -> Any:
        """The catalog sends null for unset flags."""
        return False if v is None else v

    @property
    def availability(self) -> Availability:
        """Availability status derived from the warehouse field."""
        return Availability.from_warehouse(self.warehouse)

    @property
    def display_name(self) -> str:
        return self.product_name or ""

    def to_api(self) -> dict[str, Any]:
        """Serializes with upstream field names."""
        return self.model_dump(mode="json", by_alias=True)


class PaginationInfo(BaseModel):
    """Pagination metadata of a listing page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next: bool
    has_prev: bool


class ProductPage(BaseModel):
    """One page of a sorted product listing."""

    data: list[Product] = Field(default_factory=list)
    pagination: PaginationInfo

    def to_api(self) -> dict[str, Any]:
        """Response body: {"data": [...], "pagination": {...}}."""
        return {
            "data": [product.to_api() for product in self.data],
            "pagination": self.pagination.model_dump(mode="json", by_alias=True),
        }


class CatalogQuery(BaseModel):
    """
    Filter criteria for a catalog listing.
    Every criterion is optional; page and limit are always set.
    """

    category: Optional[str] = None
    categories: list[str] = Field(default_factory=list)
    segments: list[str] = Field(default_factory=list)
    size: Optional[str] = None

    search: Optional[str] = None
    search_fields: tuple[SearchField, ...] = FULL_SEARCH_FIELDS

    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)
    warehouse: Optional[str] = None

    page: PageNumber = 1
    limit: PageSize = 30

    @field_validator("categories", "segments", mode="before")
    @classmethod
    def split_lists(cls, v: Any) -> Any:
        return _split_csv(v)

    @field_validator("category", "search", "warehouse", "size", mode="before")
    @classmethod
    def blank_as_none(cls, v: Any) -> Any:
        """Empty query parameters mean "no filter"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("search_fields")
    @classmethod
    def require_search_field(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("At least one search field is required")
        return v


# =============================================================================
# SIZE FILTER INDEX
# =============================================================================

class SizeFilterIndex(BaseModel):
    """Diameter -> sorted sizes, with provenance."""

    diameters: dict[str, list[str]] = Field(default_factory=dict)
    source: SizeIndexSource = SizeIndexSource.STATIC
    is_complete: bool = True

    @computed_field
    @property
    def total_sizes(self) -> int:
        return sum(len(sizes) for sizes in self.diameters.values())


# =============================================================================
# VENDOR PRESSURE CALCULATOR
# =============================================================================

class CCalcEntry(BaseModel):
    """One (pressure, speed, load) row of a vendor calculator table."""

    pressure: str
    speed: str
    load: str

    @field_validator("pressure", "speed", "load", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _stringify(v)


class CCalcMeta(BaseModel):
    """Tyre dimensions shown next to the calculator."""

    model_config = ConfigDict(populate_by_name=True)

    od: Optional[str] = Field(default=None, alias="OD")
    rc: Optional[str] = Field(default=None, alias="RC")
    sri: Optional[str] = Field(default=None, alias="SRI")
    rim_width: Optional[str] = Field(default=None, alias="RimWidth")
    permitted_rims: Optional[str] = Field(default=None, alias="PermittedRims")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _stringify(v)


class CCalcTable(BaseModel):
    """Calculator data for a single vendor SKU."""

    sku: str
    cclist: list[CCalcEntry] = Field(default_factory=list)
    meta: CCalcMeta = Field(default_factory=CCalcMeta)

    def to_api(self) -> dict[str, Any]:
        return {
            "cclist": [entry.model_dump(mode="json") for entry in self.cclist],
            "meta": self.meta.model_dump(mode="json", by_alias=True, exclude_none=True),
        }


class PressureRecommendation(BaseModel):
    """Minimum pressure that covers the requested load at a speed."""

    speed: str
    pressure_label: str
    pressure_value: Decimal
    load_label: str
    load_value: Decimal
    exact_match: bool = False


# =============================================================================
# SEO
# =============================================================================

class SizeSeoData(BaseModel):
    """Text fragments for a size landing page."""

    categories: list[str] = Field(default_factory=list)
    segments: list[str] = Field(default_factory=list)
    categories_list: str
    segments_description: str


class AvailabilityInfo(BaseModel):
    """Short and long availability phrases."""

    short: str
    phrase: str


class ProductSeoData(BaseModel):
    """Text fragments for a product page."""

    brand: str
    headline: str
    description: str
    availability: AvailabilityInfo
