"""
Tienda API: Client Route Handlers
=================================

What:  GET /api/clientes (list) and POST /api/clientes (create).

A duplicate email is not pre-checked: the store's unique constraint rejects
it and the client gets a 500 carrying the constraint message.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.database import get_db_session
from tienda.schemas.common import ErrorResponse
from tienda.schemas.entities import ClientRow
from tienda.services.store_service import store_service

router = APIRouter(prefix="/api", tags=["Clientes"])


@router.get(
    "/clientes",
    response_model=List[ClientRow],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List every client ordered by id",
)
async def list_clients(db: AsyncSession = Depends(get_db_session)) -> List[ClientRow]:
    return await store_service.list_clients(db)


@router.post(
    "/clientes",
    status_code=201,
    response_model=ClientRow,
    responses={
        400: {"description": "Missing field", "model": ErrorResponse},
        500: {"description": "Store error (including duplicate email)", "model": ErrorResponse},
    },
    summary="Create a client",
)
async def create_client(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ClientRow:
    return await store_service.create_client(db, payload or {})
