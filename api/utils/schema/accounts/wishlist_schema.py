"""
Pydantic schemas for saved products and saved categories
"""
from typing import List, Optional

from pydantic import BaseModel


class SaveProductRequest(BaseModel):
    productId: int


class BulkCheckRequest(BaseModel):
    productIds: Optional[List[int]] = None


class MoveSavedProductRequest(BaseModel):
    saved_category_id: Optional[int] = None


class SavedCategoryRequest(BaseModel):
    name: Optional[str] = None
