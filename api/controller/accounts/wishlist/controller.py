"""
Wishlist Controller - saved products and saved categories of the current user
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Path

from controller.dependencies import get_current_user, get_wishlist_service
from services.accounts.wishlist_service import WishlistService
from utils.schema.accounts.wishlist_schema import (
    BulkCheckRequest,
    MoveSavedProductRequest,
    SavedCategoryRequest,
    SaveProductRequest,
)


router = APIRouter()


# ============================================================================
# SAVED CATEGORIES
# ============================================================================

@router.get("/categories/list", response_model=list)
def list_saved_categories(
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.list_categories(user["id"])


@router.post("/categories", response_model=dict)
def create_saved_category(
    data: SavedCategoryRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.create_category(user["id"], data.name)


@router.put("/categories/{category_id}", response_model=dict)
def rename_saved_category(
    data: SavedCategoryRequest,
    category_id: int = Path(..., description="Saved category ID"),
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.rename_category(user["id"], category_id, data.name)


@router.delete("/categories/{category_id}", response_model=dict)
def delete_saved_category(
    category_id: int = Path(..., description="Saved category ID"),
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.delete_category(user["id"], category_id)


# ============================================================================
# SAVED PRODUCTS
# ============================================================================

@router.get("", response_model=dict)
def list_saved_products(
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.list_saved(user["id"])


@router.post("", response_model=dict)
def save_product(
    data: SaveProductRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.save(user["id"], data.productId)


@router.post("/bulk", response_model=dict)
def bulk_check_saved(
    data: BulkCheckRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Which of the given product ids are saved"""
    return service.bulk_check(user["id"], data.productIds)


@router.get("/{product_id}", response_model=dict)
def check_saved_product(
    product_id: int = Path(..., description="Product ID"),
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.is_saved(user["id"], product_id)


@router.patch("/{product_id}", response_model=dict)
def move_saved_product(
    data: MoveSavedProductRequest,
    product_id: int = Path(..., description="Product ID"),
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.move_to_category(user["id"], product_id, data.saved_category_id)


@router.delete("/{product_id}", response_model=dict)
def remove_saved_product(
    product_id: int = Path(..., description="Product ID"),
    user: Dict[str, Any] = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.remove(user["id"], product_id)
