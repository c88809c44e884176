"""
Tienda API: Category SQLAlchemy Model
=====================================

What:  ORM model for the `categorias` table.
Why:   Target of the optional product → category foreign key; also listed by
       GET /api/categorias.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tienda.database import Base


class Category(Base):
    __tablename__ = "categorias"

    id_categoria: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    descripcion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id_categoria={self.id_categoria}, nombre='{self.nombre}')>"
