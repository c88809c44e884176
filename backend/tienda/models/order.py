"""
Tienda API: Order SQLAlchemy Model
==================================

What:  ORM model for the `ordenes` table.

Referential integrity:
    id_cliente carries a store-level foreign key to clientes, which is the
    source of truth. The order validator also looks the client up before the
    insert so that an unknown client is reported as a 400 naming the field
    instead of a constraint violation. The two steps are separate statements;
    a client removed in between would be caught by the foreign key.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tienda.database import Base


class Order(Base):
    __tablename__ = "ordenes"

    id_orden: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tipo_orden: Mapped[str] = mapped_column(String(100), nullable=False)
    id_cliente: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("clientes.id_cliente"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Order(id_orden={self.id_orden}, tipo_orden='{self.tipo_orden}', "
            f"id_cliente={self.id_cliente})>"
        )
