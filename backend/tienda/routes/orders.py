"""
Tienda API: Order Route Handlers
================================

What:  GET /api/ordenes (list) and POST /api/ordenes (create).

POST checks that id_cliente, when given, names an existing client before
inserting; an unknown client is a 400 with details.constraint == "exists".
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.database import get_db_session
from tienda.schemas.common import ErrorResponse
from tienda.schemas.entities import OrderRow
from tienda.services.store_service import store_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Ordenes"])


@router.get(
    "/ordenes",
    response_model=List[OrderRow],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List every order ordered by id",
)
async def list_orders(db: AsyncSession = Depends(get_db_session)) -> List[OrderRow]:
    return await store_service.list_orders(db)


@router.post(
    "/ordenes",
    status_code=201,
    response_model=OrderRow,
    responses={
        400: {"description": "Missing field, bad id_cliente or unknown client", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create an order",
)
async def create_order(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> OrderRow:
    order = await store_service.create_order(db, payload or {})
    logger.info("Order %s created (id_cliente=%s)", order.id_orden, order.id_cliente)
    return order
