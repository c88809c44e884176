"""
Tienda API: Schema Introspection Route Handlers
===============================================

What:  GET /api/check-tables and GET /api/check-columns/{table}.
Why:   Lets operators confirm what schema the deployed service is talking to.

The table path segment never reaches a statement unchecked: CatalogService
rejects anything that is not a plain identifier before querying.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.database import get_db_session
from tienda.schemas.catalog import ColumnInfo, TableInfo
from tienda.schemas.common import ErrorResponse
from tienda.services.catalog import catalog_service

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get(
    "/check-tables",
    response_model=List[TableInfo],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List tables in the default schema",
)
async def check_tables(
    base_only: bool = Query(
        default=False,
        description="Only base tables (exclude views)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[TableInfo]:
    return await catalog_service.list_tables(db, base_only=base_only)


@router.get(
    "/check-columns/{table}",
    response_model=List[ColumnInfo],
    responses={
        400: {"description": "Invalid table name", "model": ErrorResponse},
        404: {"description": "Table has no columns or does not exist", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Describe the columns of one table",
)
async def check_columns(
    table: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[ColumnInfo]:
    """
    Column name, declared type, nullability and default for `table`,
    ordered by declaration position.
    """
    return await catalog_service.list_columns(db, table)
