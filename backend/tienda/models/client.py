"""
Tienda API: Client SQLAlchemy Model
===================================

What:  ORM model for the `clientes` table.

Email uniqueness is a store constraint. The application never checks it
ahead of time; a duplicate surfaces as a DatabaseError (500) carrying the
driver's message. NULL emails do not collide with each other.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tienda.database import Base


class Client(Base):
    __tablename__ = "clientes"

    id_cliente: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    direccion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    telefono: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<Client(id_cliente={self.id_cliente}, nombre='{self.nombre}')>"
