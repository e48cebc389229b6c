"""
HTTP API of the storefront.
Every error is answered with {"error": "<Ukrainian message>"}: 404 for
missing resources, 422 for invalid parameters, 500 for everything else.
Internal details stay in logs.
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.logging_config import get_logger, request_context, setup_logging
from config.settings import get_settings
from storefront.core.exceptions import NotFoundError, StorefrontError
from storefront.core.models import CatalogQuery
from storefront.seo import build_product_seo, derive_size_seo_data
from storefront.service import Storefront

logger = get_logger("api")

router = APIRouter(prefix="/api")

# Error messages shown to shoppers
MSG_PRODUCTS = "Помилка отримання товарів з сервера"
MSG_FILTERED = "Помилка отримання відфільтрованих товарів"
MSG_SEGMENT = "Помилка отримання товарів за сегментом"
MSG_SIZE = "Помилка отримання товарів за розміром"
MSG_SIMILAR = "Помилка отримання схожих товарів"
MSG_PRODUCT = "Помилка отримання товару з сервера"
MSG_PRODUCT_NOT_FOUND = "Товар не знайдено"
MSG_SIZE_FILTER = "Помилка завантаження фільтра розмірів"
MSG_TABLE = "Не вдалося завантажити технічну таблицю"
MSG_TABLE_NOT_FOUND = "Таблицю не знайдено"
MSG_CCALC = "Не вдалося завантажити калькулятор тиску"
MSG_CCALC_NOT_FOUND = "Калькулятор не знайдено"
MSG_BAD_REQUEST = "Некоректні параметри запиту"
MSG_INTERNAL = "Внутрішня помилка сервера"


def get_storefront(request: Request) -> Storefront:
    return request.app.state.storefront


def _failure(
    error: StorefrontError,
    message: str,
    not_found_message: Optional[str] = None,
) -> JSONResponse:
    """Maps a storefront error to a localized JSON response."""
    if isinstance(error, NotFoundError) and not_found_message:
        logger.info("Resource not found", **error.to_dict())
        return JSONResponse({"error": not_found_message}, status_code=404)

    logger.error("Request failed", **error.to_dict())
    return JSONResponse({"error": message}, status_code=500)


# =============================================================================
# PRODUCT LISTINGS
# =============================================================================

@router.get("/products")
async def list_products(
    category: Optional[str] = None,
    categories: Optional[str] = None,
    segments: Optional[str] = None,
    search: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    warehouse: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    storefront: Storefront = Depends(get_storefront),
):
    """General listing; search matches name, model, size and SKU."""
    query = CatalogQuery(
        category=category,
        categories=categories,
        segments=segments,
        search=search,
        min_price=min_price,
        max_price=max_price,
        warehouse=warehouse,
        page=page,
        limit=storefront.clamp_limit(limit),
    )
    try:
        result = await storefront.catalog.query_products(query)
    except StorefrontError as e:
        return _failure(e, MSG_PRODUCTS)
    return result.to_api()


@router.get("/products/filtered")
async def filtered_products(
    categories: Optional[str] = None,
    segments: Optional[str] = None,
    search: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    warehouse: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    storefront: Storefront = Depends(get_storefront),
):
    """Filter sidebar listing; search matches product names only."""
    query = CatalogQuery(
        categories=categories,
        segments=segments,
        search=search,
        min_price=min_price,
        max_price=max_price,
        warehouse=warehouse,
        page=page,
        limit=storefront.clamp_limit(limit),
    )
    try:
        result = await storefront.catalog.filter_products(query)
    except StorefrontError as e:
        return _failure(e, MSG_FILTERED)
    return result.to_api()


@router.get("/products/segment/{segment:path}")
async def products_by_segment(
    segment: str,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    storefront: Storefront = Depends(get_storefront),
):
    try:
        result = await storefront.catalog.products_by_segment(
            segment, page=page, limit=storefront.clamp_limit(limit)
        )
    except StorefrontError as e:
        return _failure(e, MSG_SEGMENT)
    return result.to_api()


@router.get("/products/size/{size:path}")
async def products_by_size(
    size: str,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    storefront: Storefront = Depends(get_storefront),
):
    try:
        result = await storefront.catalog.products_by_size(
            size, page=page, limit=storefront.clamp_limit(limit)
        )
    except StorefrontError as e:
        return _failure(e, MSG_SIZE)
    return result.to_api()


@router.get("/products/similar/{size:path}")
async def similar_products(
    size: str,
    exclude: Optional[int] = None,
    storefront: Storefront = Depends(get_storefront),
):
    """Every product of the same size, minus the excluded one."""
    try:
        products = await storefront.catalog.similar_products(size, exclude_id=exclude)
    except StorefrontError as e:
        return _failure(e, MSG_SIMILAR)
    return {"data": [p.to_api() for p in products]}


# =============================================================================
# SINGLE PRODUCTS
# =============================================================================

@router.get("/products/slug/{slug}")
async def product_by_slug(slug: str, storefront: Storefront = Depends(get_storefront)):
    try:
        product = await storefront.catalog.get_product_by_slug(slug)
    except StorefrontError as e:
        return _failure(e, MSG_PRODUCT, MSG_PRODUCT_NOT_FOUND)
    return {"data": product.to_api()}


@router.get("/products/{product_id}")
async def product_by_id(product_id: int, storefront: Storefront = Depends(get_storefront)):
    try:
        product = await storefront.catalog.get_product(product_id)
    except StorefrontError as e:
        return _failure(e, MSG_PRODUCT, MSG_PRODUCT_NOT_FOUND)
    return {"data": product.to_api()}


# =============================================================================
# SIZE FILTER AND SEO
# =============================================================================

@router.get("/size-filter")
async def size_filter(storefront: Storefront = Depends(get_storefront)):
    try:
        index = await storefront.load_size_index()
    except StorefrontError as e:
        return _failure(e, MSG_SIZE_FILTER)
    return index.model_dump(mode="json")


@router.get("/seo/size/{size:path}")
async def size_seo(size: str, storefront: Storefront = Depends(get_storefront)):
    try:
        products = await storefront.catalog.similar_products(size)
    except StorefrontError as e:
        return _failure(e, MSG_SIZE)
    return derive_size_seo_data(products).model_dump(mode="json")


@router.get("/seo/product/{slug}")
async def product_seo(slug: str, storefront: Storefront = Depends(get_storefront)):
    try:
        product = await storefront.catalog.get_product_by_slug(slug)
    except StorefrontError as e:
        return _failure(e, MSG_PRODUCT, MSG_PRODUCT_NOT_FOUND)
    return build_product_seo(product).model_dump(mode="json")


# =============================================================================
# TRELLEBORG VENDOR DATA
# =============================================================================

@router.get("/trelleborg/size")
def trelleborg_table(
    sku: Optional[str] = None,
    storefront: Storefront = Depends(get_storefront),
):
    """Normalized technical table of a Trelleborg SKU."""
    try:
        html = storefront.trelleborg.load_size_table(sku)
    except StorefrontError as e:
        return _failure(e, MSG_TABLE, MSG_TABLE_NOT_FOUND)
    return {"html": html}


@router.get("/trelleborg/ccalc")
def trelleborg_calculator(
    sku: Optional[str] = None,
    storefront: Storefront = Depends(get_storefront),
):
    try:
        table = storefront.trelleborg.load_calculator(sku)
    except StorefrontError as e:
        return _failure(e, MSG_CCALC, MSG_CCALC_NOT_FOUND)
    return table.to_api()


@router.get("/trelleborg/ccalc/recommend")
def trelleborg_recommendation(
    sku: Optional[str] = None,
    speed: Optional[str] = None,
    load: Optional[str] = None,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Speed/load options plus the recommended pressure.

    Without a speed the recommendation is null.
    """
    try:
        table = storefront.trelleborg.load_calculator(sku)
    except StorefrontError as e:
        return _failure(e, MSG_CCALC, MSG_CCALC_NOT_FOUND)

    calculator = storefront.pressure
    recommendation = calculator.recommend(table.cclist, speed, load)

    return {
        "speeds": calculator.speeds(table.cclist),
        "loads": calculator.load_options(table.cclist, speed) if speed else [],
        "speed": speed,
        "load": load,
        "recommendation": recommendation.model_dump(mode="json") if recommendation else None,
    }


# =============================================================================
# APPLICATION
# =============================================================================

def create_app(storefront: Optional[Storefront] = None) -> FastAPI:
    """
    Builds the FastAPI application.

    Args:
        storefront: Pre-built facade (tests); built from settings otherwise
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if storefront is not None:
            app.state.storefront = storefront
            yield
            return

        settings = get_settings()
        setup_logging(
            level=settings.log_level,
            log_path=settings.log_path if settings.is_production else None,
            json_format=settings.is_production,
            component="api",
        )
        async with Storefront(settings) as instance:
            app.state.storefront = instance
            yield

    app = FastAPI(title="Agro Tyre Storefront API", lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.add_exception_handler(Exception, _unexpected_error)

    @app.middleware("http")
    async def bind_request_fields(request: Request, call_next):
        with request_context(method=request.method, path=request.url.path):
            return await call_next(request)

    return app


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        "Invalid request parameters",
        path=request.url.path,
        fields=[".".join(str(part) for part in error["loc"]) for error in exc.errors()],
    )
    return JSONResponse({"error": MSG_BAD_REQUEST}, status_code=422)


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse({"error": MSG_INTERNAL}, status_code=500)
