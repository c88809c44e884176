"""
Tienda API: Category Route Handlers
===================================

What:  GET /api/categorias. Read-only; categories are maintained directly
       in the store.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.database import get_db_session
from tienda.schemas.common import ErrorResponse
from tienda.schemas.entities import CategoryRow
from tienda.services.store_service import store_service

router = APIRouter(prefix="/api", tags=["Categorias"])


@router.get(
    "/categorias",
    response_model=List[CategoryRow],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List every category ordered by id",
)
async def list_categories(db: AsyncSession = Depends(get_db_session)) -> List[CategoryRow]:
    return await store_service.list_categories(db)
