"""
Product Service - search, listing and detail reads for products
"""
import asyncio
import logging
from typing import Any, Dict

from fastapi.concurrency import run_in_threadpool

from core.exceptions import NotFoundError
from services.catalog.predicate_compiler import PredicateCompiler
from services.catalog.query_assembler import QueryAssembler
from services.catalog.result_shaper import ResultShaper
from utils.schema.catalog.product_schema import ProductQuery

logger = logging.getLogger(__name__)


class ProductService:
    """Service for product-related business logic"""

    def __init__(self, db_connection):
        """
        Args:
            db_connection: PostgresCRUD instance (or anything with fetch_records/execute_query)
        """
        self.crud = db_connection
        self.compiler = PredicateCompiler()
        self.assembler = QueryAssembler()
        self.shaper = ResultShaper()

    async def list_products(self, query: ProductQuery) -> Dict[str, Any]:
        """
        List products matching the filters.

        The data and count queries are independent reads over the same
        predicate snapshot, so they run concurrently on the thread pool.
        A failure in either propagates; no partial result is returned.
        """
        builder = self.compiler.compile(query)
        data_sql, data_params = self.assembler.data_query(query, builder)
        count_sql, count_params = self.assembler.count_query(builder)

        rows, count_rows = await asyncio.gather(
            run_in_threadpool(self.crud.fetch_records, data_sql, data_params),
            run_in_threadpool(self.crud.fetch_records, count_sql, count_params),
        )

        total = int(count_rows[0]["total"]) if count_rows else 0
        products = self.shaper.shape_products(rows)
        grouped = self.shaper.group_by_category(products) if query.is_search_mode else []

        logger.info("Products fetched: count=%d total=%d search_mode=%s",
                    len(products), total, query.is_search_mode)
        return self.shaper.build_envelope(products, total, query.page, query.limit, grouped)

    def get_product(self, product_id: int) -> Dict[str, Any]:
        """
        Get one product and bump its view counter.

        Raises:
            NotFoundError: when no product has this id; views stay untouched
        """
        sql, params = self.assembler.detail_query(product_id)
        rows = self.crud.fetch_records(sql, params)
        if not rows:
            raise NotFoundError("Product not found")

        # Non-atomic read-then-increment; concurrent bumps may be lost
        increment_sql, increment_params = self.assembler.increment_views_query(product_id)
        self.crud.execute_query(increment_sql, increment_params)

        logger.info("Product fetched: id=%s", product_id)
        return self.shaper.shape_product(rows[0])
