"""
Tienda API: Entity Repository
=============================

What:  Parameterized SELECT / INSERT statements for one mapped table.
Why:   Keeps statement construction in one place; handlers and the store
       service never build SQL.
How:   SQLAlchemy Core/ORM constructs only. Every value reaches the driver as
       a bound parameter, never as statement text.

Statements issued:
    list_all: SELECT <all columns> FROM <table> ORDER BY <pk>
    exists:   SELECT <pk> FROM <table> WHERE <pk> = :pk LIMIT 1
    insert:   INSERT INTO <table> (...) VALUES (...) RETURNING <all columns>

Error Handling:
    Any SQLAlchemyError is rolled back, logged, and re-raised as an opaque
    DatabaseError carrying the driver message. Unique violations, lost
    connections and timeouts are deliberately not told apart.
"""

import logging
from typing import Generic, List, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import insert, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.database import Base
from tienda.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def driver_message(exc: SQLAlchemyError) -> str:
    """
    Extract the underlying driver message from a SQLAlchemy exception.

    DBAPIError wraps the driver exception in `.orig`; its text is what the
    store said (e.g. 'duplicate key value violates unique constraint ...').
    """
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class EntityRepository(Generic[ModelT]):
    """
    Repository for a single ORM model with a single-column primary key.

    Stateless apart from the model it was built for; safe to share between
    concurrent requests.
    """

    def __init__(self, model: Type[ModelT]):
        self.model = model
        self.table_name = model.__tablename__
        self.primary_key = model.__mapper__.primary_key[0]

    async def list_all(self, db: AsyncSession) -> List[ModelT]:
        """Every row, every column, ordered by primary key. No pagination."""
        stmt = select(self.model).order_by(self.primary_key)
        try:
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise await self._store_error(db, "list", e)

    async def exists(self, db: AsyncSession, pk: int) -> bool:
        """Point lookup by primary key."""
        stmt = select(self.primary_key).where(self.primary_key == pk).limit(1)
        try:
            result = await db.execute(stmt)
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise await self._store_error(db, "lookup", e)

    async def insert(self, db: AsyncSession, record: BaseModel) -> ModelT:
        """
        Insert one normalized record and return the stored row.

        What:    Single INSERT ... RETURNING, committed immediately.
        Returns: The ORM instance built from the RETURNING row, including the
                 store-assigned primary key.
        Raises:  DatabaseError on any store failure (nothing is committed).
        """
        stmt = insert(self.model).values(**record.model_dump()).returning(self.model)
        try:
            result = await db.execute(stmt)
            row = result.scalar_one()
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._store_error(db, "insert", e)

        logger.info(
            "Inserted into %s: %s=%s",
            self.table_name,
            self.primary_key.key,
            getattr(row, self.primary_key.key),
        )
        return row

    async def _store_error(
        self, db: AsyncSession, operation: str, exc: SQLAlchemyError
    ) -> DatabaseError:
        message = driver_message(exc)
        try:
            await db.rollback()
        except SQLAlchemyError as rollback_exc:
            # Connection already gone; the pool discards it on close
            logger.warning("Rollback after failed %s also failed: %s", operation, rollback_exc)
        logger.error(
            "Store error during %s on %s: %s",
            operation,
            self.table_name,
            message,
        )
        return DatabaseError(
            message=message,
            context={
                "table": self.table_name,
                "operation": operation,
                "original_error": type(exc).__name__,
            },
        )
