import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.config import Settings, get_settings
from core.exceptions import ConflictError, DataStoreError

logger = logging.getLogger(__name__)

FOREIGN_KEY_VIOLATION = "23503"


class PostgresCRUD:
    """
    Thin wrapper over a pooled SQLAlchemy engine.

    All statements are parameterized ``text()`` queries with named binds.
    Pool exhaustion waits up to ``pool_timeout`` seconds, then fails.
    """

    def __init__(self, db_uri: str, pool_size: int = 5, max_overflow: int = 5,
                 pool_timeout: int = 30, application_name: str = "cosmetics_catalog"):
        self._engine = create_engine(
            db_uri,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=1800,    # Recycle connections after 30 minutes
            pool_pre_ping=True,   # Validate connections before use
            connect_args={
                "connect_timeout": 30,
                "application_name": application_name
            }
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresCRUD":
        return cls(
            settings.POSTGRES_URI,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            application_name=settings.APP_NAME,
        )

    @property
    def engine(self):
        return self._engine

    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None, return_data: bool = False):
        """Execute a parameterized SQL query.

        With ``return_data`` the rows come back as a DataFrame, otherwise the
        statement is committed and the affected row count is returned.
        """
        try:
            with self.engine.connect() as connection:
                if return_data:
                    cursor_result = connection.execute(text(query), params or {})
                    rows = cursor_result.fetchall()
                    columns = list(cursor_result.keys())
                    return pd.DataFrame(rows, columns=columns)
                with connection.begin():
                    cursor_result = connection.execute(text(query), params or {})
                return cursor_result.rowcount
        except SQLAlchemyError as e:
            logger.error("Error executing query: %s | params=%s | %s", query, params, e)
            raise DataStoreError(cause=e) from e

    def fetch_records(self, query: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Run a query and return JSON-safe row dicts."""
        df = self.execute_query(query, params, return_data=True)
        return self._df_to_list_of_dicts(df)

    def fetch_one(self, query: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        records = self.fetch_records(query, params)
        return records[0] if records else None

    def execute_in_transaction(self, statements: Iterable[Tuple[str, Optional[Dict[str, Any]]]]) -> List[Dict[str, Any]]:
        """Run several statements inside one BEGIN/COMMIT.

        Returns the rows of the last statement that produced any.
        Any failure rolls the whole block back.
        """
        records: List[Dict[str, Any]] = []
        try:
            with self.engine.connect() as connection:
                with connection.begin():
                    for query, params in statements:
                        cursor_result = connection.execute(text(query), params or {})
                        if cursor_result.returns_rows:
                            df = pd.DataFrame(cursor_result.fetchall(), columns=list(cursor_result.keys()))
                            records = self._df_to_list_of_dicts(df)
            return records
        except IntegrityError as e:
            logger.warning("Integrity violation, rolled back: %s", e.orig)
            if getattr(e.orig, "pgcode", None) == FOREIGN_KEY_VIOLATION:
                raise ConflictError("Related record does not exist") from e
            raise ConflictError("Record already exists") from e
        except SQLAlchemyError as e:
            logger.error("Transaction rolled back: %s", e)
            raise DataStoreError(cause=e) from e

    def execute_returning(self, query: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Run one committed write that has a RETURNING clause."""
        return self.execute_in_transaction([(query, params)])

    @staticmethod
    def _df_to_list_of_dicts(df: pd.DataFrame) -> List[Dict[str, Any]]:
        if df is None or df.empty:
            return []
        # Integer columns holding NULL arrive as float64; restore nullable ints
        typed = df.convert_dtypes(convert_string=False, convert_boolean=False)
        cleaned = typed.astype(object).where(pd.notna(typed), None)
        return cleaned.to_dict('records')


@lru_cache()
def get_db() -> PostgresCRUD:
    """Process-wide database handle built from settings."""
    return PostgresCRUD.from_settings(get_settings())
