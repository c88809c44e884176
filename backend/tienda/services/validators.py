"""
Tienda API: Entity Validators
=============================

What:  Turns an untyped JSON payload into a normalized record, or raises a
       ValidationError naming the field and the violated constraint.
Why:   One validation contract shared by every write endpoint, callable
       without an HTTP request (the test suite calls these directly).
How:   Plain functions per entity. Fields are checked in declaration order
       and the first failure is raised.

Rules:
    Product: nombre required text; precio required decimal with at most 8
             integer digits and 2 decimal places; stock required
             non-negative integer; descripcion optional text; id_categoria
             optional integer. Integers must fit a 32-bit INTEGER column.
    Client:  nombre required text; email, direccion, telefono optional text.
    Order:   tipo_orden required text; id_cliente optional integer that must
             name an existing client (the only rule that reads the store).

Normalization:
    - text is trimmed; an optional field that is blank after trimming
      becomes None
    - "absent", null and blank are treated the same for every field
    - booleans are never accepted as numbers even though bool is an int
      subclass in Python
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Mapping, Optional

from tienda.exceptions import (
    InvalidTypeError,
    MissingFieldError,
    ReferenceNotFoundError,
    ValidationError,
)
from tienda.schemas.entities import ClientRecord, OrderRecord, ProductRecord

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

# Column limits: INTEGER is 32-bit signed, precio is NUMERIC(10, 2)
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1
PRICE_SCALE = Decimal("0.01")
PRICE_LIMIT = Decimal(10) ** 8

# Async point lookup: client id → does a row exist?
ClientLookup = Callable[[int], Awaitable[bool]]


# ══════════════════════════════════════════════════════════════════════════
# Field Helpers
# ══════════════════════════════════════════════════════════════════════════


def _ensure_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError(
            message="Request body must be a JSON object",
            field="body",
            constraint="object",
        )
    return payload


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required_text(payload: Mapping[str, Any], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        raise MissingFieldError(field)
    return value.strip()


def optional_text(payload: Mapping[str, Any], field: str) -> Optional[str]:
    value = payload.get(field)
    if _is_blank(value):
        return None
    if not isinstance(value, str):
        raise InvalidTypeError(field, "text")
    return value.strip()


def parse_decimal(value: Any, field: str) -> Decimal:
    """
    Coerce a JSON number or numeric string to Decimal.

    Floats go through str() so 19.99 becomes Decimal("19.99") rather than
    its binary expansion. NaN and infinities are rejected.
    """
    if isinstance(value, bool):
        raise InvalidTypeError(field, "numeric")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        candidate = str(value)
    elif isinstance(value, str):
        candidate = value.strip()
    else:
        raise InvalidTypeError(field, "numeric")

    try:
        result = Decimal(candidate)
    except InvalidOperation:
        raise InvalidTypeError(field, "numeric")
    if not result.is_finite():
        raise InvalidTypeError(field, "numeric")
    return result


def parse_integer(value: Any, field: str) -> int:
    """Coerce an int, an integral float or a digit string to int."""
    if isinstance(value, bool):
        raise InvalidTypeError(field, "integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        return int(value.strip())
    raise InvalidTypeError(field, "integer")


def fits_int4(value: int) -> bool:
    return INT4_MIN <= value <= INT4_MAX


def parse_price(value: Any, field: str) -> Decimal:
    """parse_decimal plus the NUMERIC(10, 2) limits: at most 8 integer
    digits and 2 decimal places. Values are rejected, never rounded."""
    result = parse_decimal(value, field)
    if abs(result) >= PRICE_LIMIT or result != result.quantize(PRICE_SCALE):
        raise InvalidTypeError(field, "numeric")
    return result


def _required_value(payload: Mapping[str, Any], field: str) -> Any:
    value = payload.get(field)
    if _is_blank(value):
        raise MissingFieldError(field)
    return value


def _optional_integer(payload: Mapping[str, Any], field: str) -> Optional[int]:
    value = payload.get(field)
    if _is_blank(value):
        return None
    return parse_integer(value, field)


# ══════════════════════════════════════════════════════════════════════════
# Entity Validators
# ══════════════════════════════════════════════════════════════════════════


def validate_product(payload: Any) -> ProductRecord:
    """
    Validate a POST /api/productos body.

    Raises:
        MissingFieldError: nombre, precio or stock absent/blank
        InvalidTypeError:  precio not numeric, stock not a non-negative
                           integer, descripcion not text, id_categoria not
                           an integer
    """
    payload = _ensure_mapping(payload)

    nombre = required_text(payload, "nombre")
    precio = parse_price(_required_value(payload, "precio"), "precio")
    stock = parse_integer(_required_value(payload, "stock"), "stock")
    if stock < 0:
        raise InvalidTypeError("stock", "non-negative integer")
    if not fits_int4(stock):
        raise InvalidTypeError("stock", "integer")

    descripcion = optional_text(payload, "descripcion")
    id_categoria = _optional_integer(payload, "id_categoria")
    if id_categoria is not None and not fits_int4(id_categoria):
        raise InvalidTypeError("id_categoria", "integer")

    return ProductRecord(
        nombre=nombre,
        descripcion=descripcion,
        precio=precio,
        stock=stock,
        id_categoria=id_categoria,
    )


def validate_client(payload: Any) -> ClientRecord:
    """Validate a POST /api/clientes body. Email format is not checked."""
    payload = _ensure_mapping(payload)

    return ClientRecord(
        nombre=required_text(payload, "nombre"),
        email=optional_text(payload, "email"),
        direccion=optional_text(payload, "direccion"),
        telefono=optional_text(payload, "telefono"),
    )


async def validate_order(payload: Any, client_exists: ClientLookup) -> OrderRecord:
    """
    Validate a POST /api/ordenes body.

    When id_cliente is supplied it is parsed and then looked up with
    `client_exists`. The lookup runs before, and separately from, the
    insert.

    Raises:
        MissingFieldError:      tipo_orden absent/blank
        InvalidTypeError:       id_cliente is not an integer
        ReferenceNotFoundError: id_cliente names no existing client
    """
    payload = _ensure_mapping(payload)

    tipo_orden = required_text(payload, "tipo_orden")
    id_cliente = _optional_integer(payload, "id_cliente")

    # An id outside the INTEGER range cannot name a row; skip the lookup
    if id_cliente is not None and (not fits_int4(id_cliente) or not await client_exists(id_cliente)):
        raise ReferenceNotFoundError(resource="client", field="id_cliente", resource_id=id_cliente)

    return OrderRecord(tipo_orden=tipo_orden, id_cliente=id_cliente)
