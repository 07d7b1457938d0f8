"""
Wishlist Service - saved products and the user's saved categories
"""
import logging
from typing import Any, Dict, List, Optional

from core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class WishlistService:
    """All operations are scoped to one user id"""

    def __init__(self, db_connection):
        self.crud = db_connection

    # ============================================================================
    # SAVED PRODUCTS
    # ============================================================================

    def list_saved(self, user_id: int) -> Dict[str, Any]:
        rows = self.crud.fetch_records(
            "SELECT product_id, saved_category_id FROM saved_products WHERE user_id = :user_id",
            {"user_id": user_id},
        )
        saved = [
            {"product_id": r["product_id"], "saved_category_id": r["saved_category_id"]}
            for r in rows
        ]
        logger.info("Saved products fetched: user=%s count=%d", user_id, len(saved))
        return {"savedProducts": saved}

    def is_saved(self, user_id: int, product_id: int) -> Dict[str, bool]:
        row = self.crud.fetch_one(
            "SELECT id FROM saved_products WHERE user_id = :user_id AND product_id = :product_id",
            {"user_id": user_id, "product_id": product_id},
        )
        return {"isSaved": row is not None}

    def save(self, user_id: int, product_id: int) -> Dict[str, str]:
        rows = self.crud.execute_returning(
            """
            INSERT INTO saved_products (user_id, product_id)
            VALUES (:user_id, :product_id)
            ON CONFLICT DO NOTHING
            RETURNING id
            """,
            {"user_id": user_id, "product_id": product_id},
        )
        if not rows:
            raise ConflictError("Product is already saved")
        return {"message": "Product saved"}

    def bulk_check(self, user_id: int, product_ids: Optional[List[int]]) -> Dict[str, List[int]]:
        if not product_ids:
            return {"savedProductIds": []}
        rows = self.crud.fetch_records(
            "SELECT product_id FROM saved_products WHERE user_id = :user_id AND product_id = ANY(:product_ids)",
            {"user_id": user_id, "product_ids": list(product_ids)},
        )
        return {"savedProductIds": [r["product_id"] for r in rows]}

    def move_to_category(self, user_id: int, product_id: int, saved_category_id: Optional[int]) -> Dict[str, Any]:
        """
        Put a saved product into one of the user's categories, or clear it.

        Raises:
            ForbiddenError: the category belongs to someone else or is missing
            NotFoundError: the product is not saved by this user
        """
        if saved_category_id:
            owned = self.crud.fetch_one(
                "SELECT id FROM saved_categories WHERE id = :category_id AND user_id = :user_id",
                {"category_id": saved_category_id, "user_id": user_id},
            )
            if owned is None:
                raise ForbiddenError("Category does not belong to user")

        rows = self.crud.execute_returning(
            """
            UPDATE saved_products
            SET saved_category_id = :category_id
            WHERE product_id = :product_id AND user_id = :user_id
            RETURNING product_id, saved_category_id
            """,
            {"category_id": saved_category_id or None, "product_id": product_id, "user_id": user_id},
        )
        if not rows:
            raise NotFoundError("Product is not in saved list")
        return {"message": "Saved product category updated", "saved_category_id": rows[0]["saved_category_id"]}

    def remove(self, user_id: int, product_id: int) -> Dict[str, str]:
        rows = self.crud.execute_returning(
            "DELETE FROM saved_products WHERE user_id = :user_id AND product_id = :product_id RETURNING id",
            {"user_id": user_id, "product_id": product_id},
        )
        if not rows:
            raise NotFoundError("Product is not in saved list")
        return {"message": "Product removed from saved list"}

    # ============================================================================
    # SAVED CATEGORIES
    # ============================================================================

    def list_categories(self, user_id: int) -> List[Dict[str, Any]]:
        return self.crud.fetch_records(
            """
            SELECT id, name, created_at
            FROM saved_categories
            WHERE user_id = :user_id AND name IS NOT NULL AND TRIM(name) != ''
            ORDER BY created_at ASC
            """,
            {"user_id": user_id},
        )

    def create_category(self, user_id: int, name: Optional[str]) -> Dict[str, Any]:
        clean_name = _require_name(name)
        rows = self.crud.execute_returning(
            """
            INSERT INTO saved_categories (user_id, name)
            VALUES (:user_id, :name)
            RETURNING id, name, created_at
            """,
            {"user_id": user_id, "name": clean_name},
        )
        return rows[0]

    def rename_category(self, user_id: int, category_id: int, name: Optional[str]) -> Dict[str, Any]:
        clean_name = _require_name(name)
        rows = self.crud.execute_returning(
            """
            UPDATE saved_categories
            SET name = :name
            WHERE id = :category_id AND user_id = :user_id
            RETURNING id, name, created_at
            """,
            {"name": clean_name, "category_id": category_id, "user_id": user_id},
        )
        if not rows:
            raise NotFoundError("Category not found or access denied")
        return rows[0]

    def delete_category(self, user_id: int, category_id: int) -> Dict[str, str]:
        rows = self.crud.execute_returning(
            "DELETE FROM saved_categories WHERE id = :category_id AND user_id = :user_id RETURNING id",
            {"category_id": category_id, "user_id": user_id},
        )
        if not rows:
            raise NotFoundError("Category not found or access denied")
        return {"message": "Category deleted"}


def _require_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise ValidationError("Category name is required")
    return name.strip()
