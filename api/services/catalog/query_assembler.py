"""
Query Assembler - data, count and detail queries for products.

The data and count queries share one compiled predicate. Pagination binds
are added to the data query only.
"""
from typing import Any, Dict, NamedTuple

from services.catalog.query_builder import QueryBuilder
from utils.constants import (
    DEFAULT_DELIVERY,
    PLACEHOLDER_IMAGE_MARKER,
    PRODUCT_JOINED_COLUMNS,
    PRODUCT_SCALAR_COLUMNS,
)
from utils.schema.catalog.product_schema import ProductQuery


class AssembledQuery(NamedTuple):
    sql: str
    params: Dict[str, Any]


def _sql_literal(value: str) -> str:
    """Quote a trusted constant for inline use."""
    return "'" + value.replace("'", "''") + "'"


BASE_JOINS = """
    FROM products p
    JOIN categories c ON p.category_id = c.id
    JOIN brands b ON p.brand_id = b.id
    LEFT JOIN product_details pd ON p.id = pd.product_id
    LEFT JOIN product_features pf ON p.id = pf.product_id"""

IMAGE_JOIN = "LEFT JOIN product_images pi ON p.id = pi.product_id"

IMAGES_AGGREGATE = f"""array_agg(DISTINCT pi.image_url) FILTER (
               WHERE pi.image_url IS NOT NULL
               AND strpos(pi.image_url, {_sql_literal(PLACEHOLDER_IMAGE_MARKER)}) = 0
           ) AS images"""

STORE_PRICES_SUBQUERY = f"""(SELECT json_agg(json_build_object(
               'store_id', spo.store_id,
               'name', s.name,
               'price', spo.price,
               'logo', s.logo,
               'yearsWithUs', s.years_with_us,
               'delivery', {_sql_literal(DEFAULT_DELIVERY)},
               'link', spo.link
           ))
            FROM store_prices spo
            JOIN stores s ON spo.store_id = s.id
            WHERE spo.product_id = p.id) AS store_prices"""

SELECT_COLUMNS = ",\n           ".join(
    PRODUCT_SCALAR_COLUMNS
    + [f"{column} AS {alias}" for column, alias in PRODUCT_JOINED_COLUMNS]
    + [IMAGES_AGGREGATE, STORE_PRICES_SUBQUERY]
)

# Every non-aggregated selected column
GROUP_BY_COLUMNS = ", ".join(PRODUCT_SCALAR_COLUMNS + [column for column, _ in PRODUCT_JOINED_COLUMNS])


class QueryAssembler:
    """Builds SQL text and bind parameters for product reads"""

    def _product_select(self, builder: QueryBuilder) -> str:
        extra_joins = builder.build_joins()
        return f"""
    SELECT {SELECT_COLUMNS}
    {BASE_JOINS}
    {IMAGE_JOIN}
    {extra_joins}
    {builder.build()}
    GROUP BY {GROUP_BY_COLUMNS}"""

    def data_query(self, query: ProductQuery, builder: QueryBuilder) -> AssembledQuery:
        """
        Data query for a product listing.

        Search/category mode returns every match ordered by id. Browse mode
        orders by id or randomly and applies LIMIT/OFFSET unless limit is "all".
        """
        sql = self._product_select(builder)
        params = builder.params()

        if query.is_search_mode:
            sql += "\n    ORDER BY p.id"
            return AssembledQuery(sql, params)

        sql += "\n    ORDER BY RANDOM()" if query.random else "\n    ORDER BY p.id"
        if query.is_paginated:
            sql += "\n    LIMIT :limit OFFSET :offset"
            params = {**params, "limit": query.limit, "offset": query.offset}
        return AssembledQuery(sql, params)

    def count_query(self, builder: QueryBuilder) -> AssembledQuery:
        """Distinct product count over the same joins and predicate, minus display-only joins."""
        sql = f"""
    SELECT COUNT(DISTINCT p.id) AS total
    {BASE_JOINS}
    {builder.build_joins()}
    {builder.build()}"""
        return AssembledQuery(sql, builder.params())

    def detail_query(self, product_id: int) -> AssembledQuery:
        builder = QueryBuilder.create()
        builder.add("p.id = {}", product_id)
        return AssembledQuery(self._product_select(builder), builder.params())

    def increment_views_query(self, product_id: int) -> AssembledQuery:
        return AssembledQuery(
            "UPDATE products SET views = COALESCE(views, 0) + 1 WHERE id = :product_id",
            {"product_id": product_id},
        )
