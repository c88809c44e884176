"""
Tienda API: Product SQLAlchemy Model
====================================

What:  ORM model representing the `productos` table.
Why:   Gives the repository typed columns to bind parameters against; the
       table itself is created and migrated outside this service.

Column Notes:
    - id_producto: SERIAL primary key, assigned by the store
    - precio: NUMERIC(10, 2) so fractional prices are stored exactly
    - stock: non-negative integer (the validator rejects negatives; the
      CHECK constraint is declared here for the test schema)
    - id_categoria: nullable FK to categorias
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tienda.database import Base


class Product(Base):
    """A product row. Created only through POST /api/productos."""

    __tablename__ = "productos"

    id_producto: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    nombre: Mapped[str] = mapped_column(String(255), nullable=False)

    descripcion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    precio: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    id_categoria: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("categorias.id_categoria"),
        nullable=True,
    )

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_productos_stock_non_negative"),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Product(id_producto={self.id_producto}, nombre='{self.nombre}', "
            f"precio={self.precio}, stock={self.stock})>"
        )
