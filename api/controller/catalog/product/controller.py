"""
Product Controller - API endpoints for product search and detail
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from controller.dependencies import get_product_service
from core.config import Settings, get_settings
from services.catalog.product_service import ProductService
from utils.schema.catalog.product_schema import (
    ProductFilterParams,
    ProductListResponse,
    ProductQuery,
)


router = APIRouter()


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: Optional[str] = Query(None, description="Case-insensitive substring of product name"),
    category: Optional[str] = Query(None, description="Comma-separated category keys"),
    brands: Optional[str] = Query(None, description="Comma-separated brand names"),
    priceFrom: Optional[str] = Query(None, description="Lower price bound (requires priceTo)"),
    priceTo: Optional[str] = Query(None, description="Upper price bound (requires priceFrom)"),
    priceRanges: Optional[str] = Query(None, description="Comma-separated buckets like 0-500,1000+"),
    volumes: Optional[str] = Query(None, description="Comma-separated volumes"),
    types: Optional[str] = Query(None, description="Comma-separated product types"),
    random: Optional[str] = Query(None, description="'true' for random order in browse mode"),
    hasRating: Optional[str] = Query(None, description="'true' to keep only rated products"),
    page: Optional[str] = Query(None, description="Page number (default: 1)"),
    limit: Optional[str] = Query(None, description="Items per page or 'all'"),
    service: ProductService = Depends(get_product_service),
    settings: Settings = Depends(get_settings),
):
    """
    Search and list products.

    **Modes:**
    - With `search` or `category`: every match is returned ordered by id,
      plus `groupedResults` summarising matches per category
    - Otherwise: paginated browse, ordered by id or randomly

    **Example:**
    ```
    GET /products?priceRanges=0-500,1000%2B&brands=Nivea,Garnier&page=2&limit=24
    ```
    """
    params = ProductFilterParams(
        search=search,
        category=category,
        brands=brands,
        priceFrom=priceFrom,
        priceTo=priceTo,
        priceRanges=priceRanges,
        volumes=volumes,
        types=types,
        random=random,
        hasRating=hasRating,
        page=page,
        limit=limit,
    )
    query = ProductQuery.from_params(params, default_limit=settings.default_limit())
    return await service.list_products(query)


@router.get("/{product_id}", response_model=dict)
def get_product(
    product_id: int = Path(..., description="Product ID"),
    service: ProductService = Depends(get_product_service),
):
    """
    Get a product by ID with details, features, images and store prices.

    Each successful fetch increments the product's view counter.
    """
    return service.get_product(product_id)
