"""
Tienda API: Store Service (Write/Read Orchestrator)
===================================================

What:  Threads each write payload through its validator and then the
       repository; read operations go straight to the repository.
Why:   Route handlers stay HTTP-only, and the validate-then-insert flow
       exists in exactly one place.
How:   Stateless; receives the request's AsyncSession on every call.

Write Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐
    │ payload  │───▶│  Validator  │───▶│  Repository  │───▶ inserted row
    └──────────┘    └─────────────┘    │  INSERT ...  │
                          │            │  RETURNING   │
                          ▼            └──────────────┘
                   ValidationError (400), store untouched

Order creation is the one two-step write: the validator reads clientes to
check id_cliente, then the repository inserts. The steps are not wrapped in
one transaction; the store's foreign key covers the gap.
"""

import logging
from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from tienda.models.category import Category
from tienda.models.client import Client
from tienda.models.order import Order
from tienda.models.product import Product
from tienda.services.repository import EntityRepository
from tienda.services.validators import validate_client, validate_order, validate_product

logger = logging.getLogger(__name__)


class StoreService:
    """Reads and validated writes for products, clients, orders and categories."""

    def __init__(self):
        self.products = EntityRepository(Product)
        self.clients = EntityRepository(Client)
        self.orders = EntityRepository(Order)
        self.categories = EntityRepository(Category)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_products(self, db: AsyncSession) -> List[Product]:
        return await self.products.list_all(db)

    async def list_clients(self, db: AsyncSession) -> List[Client]:
        return await self.clients.list_all(db)

    async def list_orders(self, db: AsyncSession) -> List[Order]:
        return await self.orders.list_all(db)

    async def list_categories(self, db: AsyncSession) -> List[Category]:
        return await self.categories.list_all(db)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_product(self, db: AsyncSession, payload: Any) -> Product:
        record = validate_product(payload)
        return await self.products.insert(db, record)

    async def create_client(self, db: AsyncSession, payload: Any) -> Client:
        record = validate_client(payload)
        return await self.clients.insert(db, record)

    async def create_order(self, db: AsyncSession, payload: Any) -> Order:
        """
        Validate (including the client existence check) and insert an order.

        The lookup is bound to this request's session so both statements use
        the same connection.
        """

        async def client_exists(id_cliente: int) -> bool:
            return await self.clients.exists(db, id_cliente)

        record = await validate_order(payload, client_exists)
        logger.debug("Order payload validated: %s", record)
        return await self.orders.insert(db, record)


# Module-level singleton used by the route handlers
store_service = StoreService()
