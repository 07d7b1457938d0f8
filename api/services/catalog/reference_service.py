"""
Reference Service - read-only lookups for brands, stores, categories,
cities, store locations and product filter options
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool

from core.exceptions import NotFoundError
from services.catalog.query_builder import QueryBuilder
from utils.constants import DEFAULT_MAX_PRICE, DEFAULT_MIN_PRICE

logger = logging.getLogger(__name__)

STORE_LOCATION_SELECT = """
    SELECT sl.id, sl.store_id, s.name AS store_name, sl.city_id, c.name_ua AS city_name,
           sl.address, sl.latitude, sl.longitude, sl.hours_mon_fri, sl.hours_sat, sl.hours_sun
    FROM store_locations sl
    JOIN stores s ON sl.store_id = s.id
    JOIN cities c ON sl.city_id = c.id
"""


class ReferenceService:
    """Lookups used by the storefront filters and store pages"""

    def __init__(self, db_connection):
        self.crud = db_connection

    def _get_one(self, query: str, params: Dict[str, Any], label: str) -> Dict[str, Any]:
        record = self.crud.fetch_one(query, params)
        if record is None:
            raise NotFoundError(f"{label} not found")
        return record

    def list_brands(self) -> List[Dict[str, Any]]:
        return self.crud.fetch_records("SELECT id, name FROM brands ORDER BY name ASC")

    def get_brand(self, brand_id: int) -> Dict[str, Any]:
        return self._get_one("SELECT id, name FROM brands WHERE id = :brand_id",
                             {"brand_id": brand_id}, "Brand")

    def list_stores(self) -> List[Dict[str, Any]]:
        return self.crud.fetch_records(
            "SELECT id, name, logo, years_with_us, link FROM stores ORDER BY name ASC"
        )

    def get_store(self, store_id: int) -> Dict[str, Any]:
        return self._get_one(
            "SELECT id, name, logo, years_with_us, link FROM stores WHERE id = :store_id",
            {"store_id": store_id}, "Store"
        )

    def list_categories(self) -> List[Dict[str, Any]]:
        return self.crud.fetch_records(
            "SELECT id, name_ua, name_en, parent_id FROM categories ORDER BY name_ua ASC"
        )

    def list_cities(self) -> List[Dict[str, Any]]:
        return self.crud.fetch_records(
            "SELECT id, name_ua, name_en, latitude, longitude FROM cities ORDER BY name_ua ASC"
        )

    def list_store_locations(self, product_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Store locations, optionally only those of stores that price a product.
        """
        query = STORE_LOCATION_SELECT
        params: Dict[str, Any] = {}
        if product_id is not None:
            query += """
    WHERE sl.store_id IN (
        SELECT DISTINCT store_id FROM store_prices WHERE product_id = :product_id
    )"""
            params["product_id"] = product_id
        query += "\n    ORDER BY s.name ASC, c.name_ua ASC"
        return self.crud.fetch_records(query, params)

    def get_store_location(self, location_id: int) -> Dict[str, Any]:
        return self._get_one(STORE_LOCATION_SELECT + "    WHERE sl.id = :location_id",
                             {"location_id": location_id}, "Store location")

    async def get_filter_options(self, categories: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Distinct brands, volumes, types and the price span, optionally
        restricted to a category set. The four reads run concurrently.
        """
        builder = QueryBuilder.create()
        builder.in_list("c.name_en", categories)
        where_clause = builder.build()
        params = builder.params()

        brands_query = f"""
            SELECT DISTINCT b.name
            FROM products p
            JOIN brands b ON p.brand_id = b.id
            JOIN categories c ON p.category_id = c.id
            {where_clause}
            ORDER BY b.name ASC
        """
        volumes_query = f"""
            SELECT DISTINCT p.volume
            FROM products p
            JOIN categories c ON p.category_id = c.id
            {where_clause}
            ORDER BY p.volume ASC
        """
        types_query = f"""
            SELECT DISTINCT p.type
            FROM products p
            JOIN categories c ON p.category_id = c.id
            {where_clause}
            ORDER BY p.type ASC
        """
        prices_query = f"""
            SELECT MIN(sp.price) AS min_price, MAX(sp.price) AS max_price
            FROM store_prices sp
            JOIN products p ON sp.product_id = p.id
            JOIN categories c ON p.category_id = c.id
            {where_clause}
        """

        brands, volumes, types, prices = await asyncio.gather(
            run_in_threadpool(self.crud.fetch_records, brands_query, params),
            run_in_threadpool(self.crud.fetch_records, volumes_query, params),
            run_in_threadpool(self.crud.fetch_records, types_query, params),
            run_in_threadpool(self.crud.fetch_records, prices_query, params),
        )

        price_row = prices[0] if prices else {}
        return {
            "brands": [r["name"] for r in brands if r.get("name")],
            "volumes": [r["volume"] for r in volumes if r.get("volume")],
            "types": [r["type"] for r in types if r.get("type")],
            "priceRange": {
                "min": price_row.get("min_price") or DEFAULT_MIN_PRICE,
                "max": price_row.get("max_price") or DEFAULT_MAX_PRICE,
            },
        }
