"""
Result Shaper - raw joined rows to the public product shape.
"""
from typing import Any, Dict, List, Optional

from utils.constants import FEATURE_COLUMN_MAP, MISSING_VOLUME, PLACEHOLDER_IMAGE_MARKER

PRODUCT_FIELDS = [
    "id", "name", "volume", "type", "rating", "views", "code",
    "category_id", "category_name", "brand_name",
    "description", "description_full", "composition", "usage",
]


class ResultShaper:

    def shape_product(self, row: Dict[str, Any]) -> Dict[str, Any]:
        product = {field: row.get(field) for field in PRODUCT_FIELDS}
        product["images"] = self._clean_images(row.get("images"))
        product["store_prices"] = list(row.get("store_prices") or [])

        features = {key: row.get(column) for key, column in FEATURE_COLUMN_MAP.items()}
        features["description"] = row.get("description")
        product["features"] = features
        return product

    def shape_products(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [self.shape_product(row) for row in rows]

    def group_by_category(self, products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Group products by category id, largest group first.

        Groups with equal counts keep the order in which their category was
        first seen; ``sorted`` is stable.
        """
        groups: Dict[Any, Dict[str, Any]] = {}
        for product in products:
            category = product.get("category_id")
            group = groups.get(category)
            if group is None:
                group = {"category": category, "products": [], "count": 0}
                groups[category] = group
            group["products"].append({
                "id": product.get("id"),
                "name": product.get("name"),
                "specs": {"volume": product.get("volume") or MISSING_VOLUME},
            })
            group["count"] += 1

        return sorted(groups.values(), key=lambda g: g["count"], reverse=True)

    def build_envelope(
        self,
        products: List[Dict[str, Any]],
        total: int,
        page: int,
        limit: Any,
        grouped: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        return {
            "products": products,
            "total": total,
            "groupedResults": grouped or [],
            "page": page,
            "limit": total if limit == "all" else limit,
        }

    @staticmethod
    def _clean_images(images: Optional[List[str]]) -> List[str]:
        if not images:
            return []
        return list(dict.fromkeys(
            url for url in images if url and PLACEHOLDER_IMAGE_MARKER not in url
        ))
