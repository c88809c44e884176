"""
Tienda API: Entity Request/Response Schemas
===========================================

What:  Pydantic models for the rows the API returns and the normalized
       records the validators produce.
Why:   Response models pin the JSON shape of each table projection; record
       models are what the repository binds as statement parameters.

Two families per entity:
    <Entity>Record: output of the entity validator. Trimmed, defaulted and
                    coerced; never contains the primary key.
    <Entity>Row:    one table row as returned by the read endpoints and by
                    the write endpoints after insert.

Numeric note:
    precio is a Decimal. Pydantic serializes Decimal to a JSON string,
    which keeps the exact NUMERIC value the store returned.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Normalized Records: validator output, insert input
# ══════════════════════════════════════════════════════════════════════════


class ProductRecord(BaseModel):
    nombre: str
    descripcion: Optional[str] = None
    precio: Decimal
    stock: int = Field(ge=0)
    id_categoria: Optional[int] = None


class ClientRecord(BaseModel):
    nombre: str
    email: Optional[str] = None
    direccion: Optional[str] = None
    telefono: Optional[str] = None


class OrderRecord(BaseModel):
    tipo_orden: str
    id_cliente: Optional[int] = None


# ══════════════════════════════════════════════════════════════════════════
# Row Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class ProductRow(BaseModel):
    """One row of `productos`."""

    id_producto: int = Field(description="Store-assigned identifier")
    nombre: str
    descripcion: Optional[str] = None
    precio: Decimal = Field(description="Unit price, serialized as a decimal string")
    stock: int
    id_categoria: Optional[int] = None

    model_config = {"from_attributes": True}


class ClientRow(BaseModel):
    """One row of `clientes`."""

    id_cliente: int
    nombre: str
    email: Optional[str] = None
    direccion: Optional[str] = None
    telefono: Optional[str] = None

    model_config = {"from_attributes": True}


class OrderRow(BaseModel):
    """One row of `ordenes`."""

    id_orden: int
    tipo_orden: str
    id_cliente: Optional[int] = Field(
        default=None,
        description="Referenced client, null when the order has none",
    )

    model_config = {"from_attributes": True}


class CategoryRow(BaseModel):
    id_categoria: int
    nombre: str
    descripcion: Optional[str] = None

    model_config = {"from_attributes": True}
