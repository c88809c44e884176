"""
Tienda API: Schema Catalog Reader
=================================

What:  Read-only introspection of the store's tables and columns.
Why:   Backs GET /api/check-tables and GET /api/check-columns/{table}, which
       operators use to confirm the deployed schema.
How:   SQLAlchemy's Inspector, run on the request's connection through
       AsyncConnection.run_sync. On PostgreSQL the inspector reads pg_catalog
       for the default (public) schema with the table name as a bound
       parameter.

Table name safety, in order:
    1. Identifier syntax check: ^[A-Za-z_][A-Za-z0-9_]*$ → 400 otherwise,
       and no catalog query is issued
    2. Optional allow-list (CATALOG_TABLES) → 404 for names outside it,
       still without a query
    3. Catalog lookup; zero columns (including "no such table") → 404
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import CompileError, NoSuchTableError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.config import settings
from tienda.exceptions import DatabaseError, InvalidIdentifierError, NotFoundError
from tienda.schemas.catalog import ColumnInfo, TableInfo
from tienda.services.repository import driver_message

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def validate_identifier(name: str) -> str:
    """Raise InvalidIdentifierError unless `name` is a plain SQL identifier."""
    if not IDENTIFIER_PATTERN.fullmatch(name):
        raise InvalidIdentifierError(name)
    return name


# ── Synchronous inspector calls (executed via run_sync) ──────────────────


def _table_names(sync_conn: Connection, base_only: bool) -> List[str]:
    inspector = inspect(sync_conn)
    names = list(inspector.get_table_names())
    if not base_only:
        names.extend(inspector.get_view_names())
    return sorted(set(names))


def _column_rows(sync_conn: Connection, table: str) -> List[Dict[str, Any]]:
    inspector = inspect(sync_conn)
    try:
        columns = inspector.get_columns(table)
    except NoSuchTableError:
        return []

    rows = []
    for column in columns:
        try:
            data_type = column["type"].compile(dialect=sync_conn.dialect)
        except CompileError:
            data_type = type(column["type"]).__name__
        default = column.get("default")
        rows.append(
            {
                "column_name": column["name"],
                "data_type": data_type,
                "is_nullable": "YES" if column.get("nullable", True) else "NO",
                "column_default": None if default is None else str(default),
            }
        )
    return rows


class CatalogService:
    """
    Lists tables and describes columns of the connected store.

    Args:
        allowed_tables: When non-empty, the only names list_columns will
                        describe. Empty/None means any valid identifier.
    """

    def __init__(self, allowed_tables: Optional[Sequence[str]] = None):
        self.allowed_tables = frozenset(allowed_tables or ())

    async def list_tables(self, db: AsyncSession, base_only: bool = False) -> List[TableInfo]:
        """
        Table names in the default schema, sorted by name.

        Views are included unless `base_only` is set.
        """
        try:
            conn = await db.connection()
            names = await conn.run_sync(_table_names, base_only)
        except SQLAlchemyError as e:
            logger.error("Catalog error listing tables: %s", driver_message(e))
            raise DatabaseError(
                message=driver_message(e),
                context={"operation": "list_tables", "original_error": type(e).__name__},
            )
        return [TableInfo(table_name=name) for name in names]

    async def list_columns(self, db: AsyncSession, table: str) -> List[ColumnInfo]:
        """
        Column descriptors for `table`, in declaration order.

        Raises:
            InvalidIdentifierError: name fails the identifier syntax check
            NotFoundError:          name outside the allow-list, or the
                                    store reports zero columns for it
            DatabaseError:          the catalog query itself failed
        """
        validate_identifier(table)
        if self.allowed_tables and table not in self.allowed_tables:
            raise NotFoundError(resource="table", resource_id=table)

        try:
            conn = await db.connection()
            rows = await conn.run_sync(_column_rows, table)
        except SQLAlchemyError as e:
            logger.error("Catalog error describing %s: %s", table, driver_message(e))
            raise DatabaseError(
                message=driver_message(e),
                context={"operation": "list_columns", "original_error": type(e).__name__},
            )

        if not rows:
            raise NotFoundError(resource="table", resource_id=table)
        return [ColumnInfo(**row) for row in rows]


# Module-level singleton used by the route handlers
catalog_service = CatalogService(settings.catalog_tables_list)
