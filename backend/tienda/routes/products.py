"""
Tienda API: Product Route Handlers
==================================

What:  GET /api/productos (list) and POST /api/productos (create).
How:   Thin handlers; validation and insert live in StoreService.

Request body (POST):
    {"nombre": str, "descripcion"?: str, "precio": number|str,
     "stock": int, "id_categoria"?: int}
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.database import get_db_session
from tienda.schemas.common import ErrorResponse
from tienda.schemas.entities import ProductRow
from tienda.services.store_service import store_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Productos"])


@router.get(
    "/productos",
    response_model=List[ProductRow],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List every product ordered by id",
)
async def list_products(db: AsyncSession = Depends(get_db_session)) -> List[ProductRow]:
    return await store_service.list_products(db)


@router.post(
    "/productos",
    status_code=201,
    response_model=ProductRow,
    responses={
        201: {"description": "Product created", "model": ProductRow},
        400: {"description": "Missing or invalid field", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a product",
)
async def create_product(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ProductRow:
    """
    Validate and insert a product.

    Error responses (handled by global exception handlers):
        HTTP 400: nombre/precio/stock missing, precio not numeric, stock not
                  a non-negative integer
        HTTP 500: the insert failed in the store (e.g. unknown id_categoria)
    """
    product = await store_service.create_product(db, payload or {})
    logger.info("Product %s created", product.id_producto)
    return product
