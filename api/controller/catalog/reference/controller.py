"""
Reference Controller - public lookups for stores, brands, categories,
cities, store locations and filter options
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from controller.dependencies import get_current_user, get_reference_service
from services.catalog.reference_service import ReferenceService


router = APIRouter()


@router.get("/cities", response_model=list)
def list_cities(service: ReferenceService = Depends(get_reference_service)):
    """Get all cities"""
    return service.list_cities()


@router.get("/stores", response_model=list)
def list_stores(service: ReferenceService = Depends(get_reference_service)):
    """Get all stores"""
    return service.list_stores()


@router.get("/stores/{store_id}", response_model=dict, dependencies=[Depends(get_current_user)])
def get_store(
    store_id: int = Path(..., description="Store ID"),
    service: ReferenceService = Depends(get_reference_service),
):
    return service.get_store(store_id)


@router.get("/brands", response_model=list)
def list_brands(service: ReferenceService = Depends(get_reference_service)):
    """Get all brands"""
    return service.list_brands()


@router.get("/brands/{brand_id}", response_model=dict, dependencies=[Depends(get_current_user)])
def get_brand(
    brand_id: int = Path(..., description="Brand ID"),
    service: ReferenceService = Depends(get_reference_service),
):
    return service.get_brand(brand_id)


@router.get("/categories/public", response_model=list)
def list_categories(service: ReferenceService = Depends(get_reference_service)):
    """Get all product categories"""
    return service.list_categories()


@router.get("/store-locations", response_model=list)
def list_store_locations(
    productId: Optional[int] = Query(None, description="Only stores that sell this product"),
    service: ReferenceService = Depends(get_reference_service),
):
    """Get store locations, optionally narrowed to a product's stores"""
    return service.list_store_locations(productId)


@router.get("/store-locations/{location_id}", response_model=dict)
def get_store_location(
    location_id: int = Path(..., description="Store location ID"),
    service: ReferenceService = Depends(get_reference_service),
):
    return service.get_store_location(location_id)


@router.get("/filter-options", response_model=dict)
async def get_filter_options(
    category: Optional[str] = Query(None, description="Comma-separated category keys"),
    service: ReferenceService = Depends(get_reference_service),
):
    """
    Get available filter values.

    **Returns:**
    - Brand names, volumes and types present in the category set
    - Min/max store price
    """
    categories = category.split(",") if category else None
    return await service.get_filter_options(categories)
