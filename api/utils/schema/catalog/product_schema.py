"""
Pydantic schemas for product listing and detail
"""
import math
import re
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from core.exceptions import ValidationError
from utils.constants import ALL_LIMIT, OPEN_ENDED_PRICE_FLOOR, TRUE_LITERAL


_NUMBER = r"\d+(?:\.\d+)?"
_CLOSED_RANGE = re.compile(rf"^\s*({_NUMBER})\s*-\s*({_NUMBER})\s*$")
# A raw "+" in a query string decodes to a space
_OPEN_RANGE = re.compile(rf"^\s*({_NUMBER})\s*[+ ]\s*$")


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class ProductFilterParams(BaseModel):
    """Raw query-string parameters of GET /products, all as received"""
    search: Optional[str] = None
    category: Optional[str] = None
    brands: Optional[str] = None
    priceFrom: Optional[str] = None
    priceTo: Optional[str] = None
    priceRanges: Optional[str] = None
    volumes: Optional[str] = None
    types: Optional[str] = None
    random: Optional[str] = None
    hasRating: Optional[str] = None
    page: Optional[str] = None
    limit: Optional[str] = None


class PriceRange(BaseModel):
    """One price bucket; ``max_price`` is None for open-ended buckets"""
    min_price: float
    max_price: Optional[float] = None


class ProductQuery(BaseModel):
    """Validated, normalized product filters"""
    search: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    brands: List[str] = Field(default_factory=list)
    price_from: Optional[float] = None
    price_to: Optional[float] = None
    price_ranges: List[PriceRange] = Field(default_factory=list)
    volumes: List[str] = Field(default_factory=list)
    types: List[str] = Field(default_factory=list)
    has_rating: bool = False
    random: bool = False
    page: int = 1
    limit: Union[int, str] = 24

    @property
    def is_search_mode(self) -> bool:
        return bool(self.search or self.categories)

    @property
    def is_paginated(self) -> bool:
        return self.limit != ALL_LIMIT

    @property
    def offset(self) -> int:
        if not self.is_paginated:
            return 0
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(cls, params: ProductFilterParams, default_limit: Union[int, str] = 24) -> "ProductQuery":
        """
        Validate raw parameters.

        Raises:
            ValidationError: on non-numeric bounds, a lone priceFrom/priceTo,
                malformed priceRanges or bad page/limit
        """
        search = params.search.strip() if params.search else None

        price_from = price_to = None
        price_ranges: List[PriceRange] = []
        has_from = bool(params.priceFrom)
        has_to = bool(params.priceTo)
        if has_from != has_to:
            raise ValidationError("priceFrom and priceTo must be supplied together")
        if has_from and has_to:
            price_from = _parse_number(params.priceFrom, "priceFrom")
            price_to = _parse_number(params.priceTo, "priceTo")
            if price_from > price_to:
                raise ValidationError("priceFrom must not exceed priceTo")
        elif params.priceRanges:
            price_ranges = [_parse_price_range(item) for item in params.priceRanges.split(",")]

        return cls(
            search=search or None,
            categories=_split_list(params.category),
            brands=_split_list(params.brands),
            price_from=price_from,
            price_to=price_to,
            price_ranges=price_ranges,
            volumes=_split_list(params.volumes),
            types=_split_list(params.types),
            has_rating=params.hasRating == TRUE_LITERAL,
            random=params.random == TRUE_LITERAL,
            page=_parse_page(params.page),
            limit=_parse_limit(params.limit, default_limit),
        )


def _split_list(raw: Optional[str]) -> List[str]:
    # Elements are kept verbatim: "A, B" yields "A" and " B"
    if not raw:
        return []
    return raw.split(",")


def _parse_number(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a number")
    return value


def _parse_price_range(raw: str) -> PriceRange:
    if _OPEN_RANGE.match(raw):
        return PriceRange(min_price=OPEN_ENDED_PRICE_FLOOR)

    match = _CLOSED_RANGE.match(raw)
    if not match:
        raise ValidationError(f"Invalid price range '{raw}'")

    low, high = float(match.group(1)), float(match.group(2))
    if low > high:
        raise ValidationError(f"Invalid price range '{raw}'")
    return PriceRange(min_price=low, max_price=high)


def _parse_page(raw: Optional[str]) -> int:
    if raw is None or raw == "":
        return 1
    try:
        page = int(raw)
    except ValueError:
        raise ValidationError("page must be a positive integer")
    if page < 1:
        raise ValidationError("page must be a positive integer")
    return page


def _parse_limit(raw: Optional[str], default_limit: Union[int, str]) -> Union[int, str]:
    if raw is None or raw == "":
        return default_limit
    if raw == ALL_LIMIT:
        return ALL_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError("limit must be a positive integer or 'all'")
    if limit < 1:
        raise ValidationError("limit must be a positive integer or 'all'")
    return limit


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ProductStub(BaseModel):
    id: int
    name: str
    specs: Dict[str, Any]


class CategoryGroup(BaseModel):
    """Products of one category within a search result"""
    category: Optional[str] = None
    products: List[ProductStub] = []
    count: int


class ProductListResponse(BaseModel):
    products: List[Dict[str, Any]]
    total: int
    groupedResults: List[CategoryGroup] = []
    page: int
    limit: int
