"""
Predicate Compiler - turns validated product filters into a QueryBuilder.
"""
import logging

from services.catalog.query_builder import QueryBuilder
from utils.schema.catalog.product_schema import ProductQuery

logger = logging.getLogger(__name__)

PRICE_JOIN = "LEFT JOIN store_prices sp ON p.id = sp.product_id"

PRICE_EXISTS = """EXISTS (
            SELECT 1
            FROM store_prices sp2
            WHERE sp2.product_id = p.id
            AND sp2.price BETWEEN {} AND {}
        )"""


class PredicateCompiler:
    """Compiles filters in a fixed order: search, category, brands, price,
    volumes, types, rating."""

    def compile(self, query: ProductQuery) -> QueryBuilder:
        builder = QueryBuilder.create()

        builder.like("p.name", query.search)
        builder.in_list("c.name_en", query.categories)
        builder.in_list("b.name", query.brands)

        if query.price_from is not None and query.price_to is not None:
            # Correlated check: never multiplies product rows
            builder.add(PRICE_EXISTS, query.price_from, query.price_to)
        elif query.price_ranges:
            alternatives = []
            for price_range in query.price_ranges:
                if price_range.max_price is None:
                    alternatives.append(("sp.price >= {}", [price_range.min_price]))
                else:
                    alternatives.append(
                        ("sp.price BETWEEN {} AND {}", [price_range.min_price, price_range.max_price])
                    )
            builder.require_join(PRICE_JOIN)
            builder.any_of(alternatives)

        builder.in_list("p.volume", query.volumes)
        builder.in_list("p.type", query.types)

        if query.has_rating:
            builder.custom_condition("p.rating IS NOT NULL AND p.rating > 0")

        logger.debug("Compiled %d product predicates with %d values",
                     len(builder.conditions), len(builder.values))
        return builder
