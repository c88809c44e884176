"""
Tienda API: Entity Validator Unit Tests
=======================================

What:  Tests for validate_product, validate_client and validate_order.
Why:   The validators are the only decision logic in front of the store;
       a rejected payload must never reach an INSERT.
How:   Plain function calls. Order tests pass an async stub for the
       client lookup, so no database is involved.

What we test:
    ✅ Required fields (absent, null, blank after trimming)
    ✅ Type coercion of precio, stock, id_categoria, id_cliente
    ✅ Trimming and blank → None for optional text
    ✅ Client existence check for orders (found, missing, not performed)
"""

from decimal import Decimal

import pytest

from tienda.exceptions import (
    InvalidTypeError,
    MissingFieldError,
    ReferenceNotFoundError,
    ValidationError,
)
from tienda.services.validators import (
    parse_decimal,
    parse_integer,
    validate_client,
    validate_order,
    validate_product,
)


def _client_lookup(*existing_ids):
    calls = []

    async def client_exists(id_cliente):
        calls.append(id_cliente)
        return id_cliente in existing_ids

    client_exists.calls = calls
    return client_exists


class TestValidateProduct:
    """Tests for the product payload contract."""

    def test_valid_payload_is_normalized(self, sample_product_payload):
        record = validate_product(sample_product_payload)

        assert record.nombre == "Martillo de carpintero"
        assert record.descripcion == "Mango de fibra"
        assert record.precio == Decimal("12.50")
        assert record.stock == 30
        assert record.id_categoria is None

    def test_optional_fields_default_to_none(self):
        record = validate_product({"nombre": "Clavo", "precio": 1, "stock": 0})
        assert record.descripcion is None
        assert record.id_categoria is None

    @pytest.mark.parametrize("nombre", [None, "", "   ", 42])
    def test_missing_or_blank_nombre(self, nombre):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_product({"nombre": nombre, "precio": 1, "stock": 1})
        assert exc_info.value.field == "nombre"
        assert exc_info.value.constraint == "required"

    def test_absent_nombre(self):
        with pytest.raises(MissingFieldError, match="nombre"):
            validate_product({"precio": 1, "stock": 1})

    def test_absent_precio(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_product({"nombre": "Clavo", "stock": 1})
        assert exc_info.value.field == "precio"

    @pytest.mark.parametrize("precio", ["abc", "12,50", True, [1], {"v": 1}, "NaN", "Infinity"])
    def test_non_numeric_precio(self, precio):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_product({"nombre": "Clavo", "precio": precio, "stock": 1})
        assert exc_info.value.field == "precio"
        assert exc_info.value.constraint == "numeric"

    @pytest.mark.parametrize(
        "precio, expected",
        [(10, Decimal("10")), (19.99, Decimal("19.99")), (" 7.25 ", Decimal("7.25")), ("-3", Decimal("-3"))],
    )
    def test_numeric_precio_forms(self, precio, expected):
        record = validate_product({"nombre": "Clavo", "precio": precio, "stock": 1})
        assert record.precio == expected

    def test_absent_stock(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_product({"nombre": "Clavo", "precio": 1})
        assert exc_info.value.field == "stock"

    @pytest.mark.parametrize("stock", [1.5, "dos", "1.0", False])
    def test_non_integer_stock(self, stock):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_product({"nombre": "Clavo", "precio": 1, "stock": stock})
        assert exc_info.value.field == "stock"
        assert exc_info.value.constraint == "integer"

    def test_negative_stock(self):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_product({"nombre": "Clavo", "precio": 1, "stock": -1})
        assert exc_info.value.constraint == "non-negative integer"

    def test_integral_float_and_digit_string_stock(self):
        assert validate_product({"nombre": "a", "precio": 1, "stock": 4.0}).stock == 4
        assert validate_product({"nombre": "a", "precio": 1, "stock": " 12 "}).stock == 12

    def test_blank_descripcion_becomes_none(self):
        record = validate_product({"nombre": "a", "precio": 1, "stock": 1, "descripcion": "  "})
        assert record.descripcion is None

    def test_non_text_descripcion(self):
        with pytest.raises(InvalidTypeError, match="descripcion"):
            validate_product({"nombre": "a", "precio": 1, "stock": 1, "descripcion": 5})

    def test_id_categoria_coerced(self):
        record = validate_product({"nombre": "a", "precio": 1, "stock": 1, "id_categoria": "3"})
        assert record.id_categoria == 3

    def test_invalid_id_categoria(self):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_product({"nombre": "a", "precio": 1, "stock": 1, "id_categoria": "tres"})
        assert exc_info.value.field == "id_categoria"

    def test_first_failure_wins(self):
        """nombre is checked before precio, precio before stock."""
        with pytest.raises(MissingFieldError, match="nombre"):
            validate_product({"precio": "x", "stock": "y"})

    @pytest.mark.parametrize("payload", [[], "text", 3, None])
    def test_non_object_payload(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            validate_product(payload)
        assert exc_info.value.constraint == "object"


class TestValidateClient:
    """Tests for the client payload contract."""

    def test_valid_payload(self, sample_client_payload):
        record = validate_client(sample_client_payload)
        assert record.nombre == "Ana Torres"
        assert record.email == "ana@example.com"

    def test_only_nombre(self):
        record = validate_client({"nombre": " Luis "})
        assert record.nombre == "Luis"
        assert record.email is None
        assert record.direccion is None
        assert record.telefono is None

    def test_missing_nombre(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_client({"email": "x@example.com"})
        assert exc_info.value.field == "nombre"

    def test_email_is_not_format_checked(self):
        assert validate_client({"nombre": "a", "email": "not-an-email"}).email == "not-an-email"

    def test_blank_email_becomes_none(self):
        assert validate_client({"nombre": "a", "email": ""}).email is None

    def test_non_text_telefono(self):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_client({"nombre": "a", "telefono": 5550101})
        assert exc_info.value.field == "telefono"
        assert exc_info.value.constraint == "text"


class TestValidateOrder:
    """Tests for the order payload contract, including the client lookup."""

    @pytest.mark.asyncio
    async def test_without_client(self):
        lookup = _client_lookup()
        record = await validate_order({"tipo_orden": "venta"}, lookup)

        assert record.tipo_orden == "venta"
        assert record.id_cliente is None
        assert lookup.calls == []

    @pytest.mark.asyncio
    async def test_blank_client_is_treated_as_absent(self):
        lookup = _client_lookup()
        record = await validate_order({"tipo_orden": "venta", "id_cliente": ""}, lookup)
        assert record.id_cliente is None
        assert lookup.calls == []

    @pytest.mark.asyncio
    async def test_existing_client(self):
        lookup = _client_lookup(7)
        record = await validate_order({"tipo_orden": " compra ", "id_cliente": "7"}, lookup)

        assert record.tipo_orden == "compra"
        assert record.id_cliente == 7
        assert lookup.calls == [7]

    @pytest.mark.asyncio
    async def test_unknown_client(self):
        lookup = _client_lookup(1)
        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await validate_order({"tipo_orden": "venta", "id_cliente": 99}, lookup)

        assert exc_info.value.resource == "client"
        assert exc_info.value.field == "id_cliente"
        assert exc_info.value.context["resource_id"] == "99"

    @pytest.mark.asyncio
    async def test_non_integer_client(self):
        lookup = _client_lookup()
        with pytest.raises(InvalidTypeError) as exc_info:
            await validate_order({"tipo_orden": "venta", "id_cliente": "abc"}, lookup)
        assert exc_info.value.field == "id_cliente"
        assert exc_info.value.constraint == "integer"
        assert lookup.calls == []

    @pytest.mark.asyncio
    async def test_missing_tipo_orden_skips_lookup(self):
        lookup = _client_lookup(1)
        with pytest.raises(MissingFieldError, match="tipo_orden"):
            await validate_order({"id_cliente": 1}, lookup)
        assert lookup.calls == []


class TestCoercionHelpers:
    def test_parse_decimal_keeps_float_text(self):
        assert parse_decimal(0.1, "precio") == Decimal("0.1")

    def test_parse_integer_signed_string(self):
        assert parse_integer("-4", "stock") == -4

    def test_parse_integer_rejects_none(self):
        with pytest.raises(InvalidTypeError):
            parse_integer(None, "stock")


class TestColumnLimits:
    """Values that parse but do not fit the store's columns."""

    @pytest.mark.parametrize("stock", [2**31, 2**64, str(2**40)])
    def test_stock_beyond_integer_column(self, stock):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_product({"nombre": "a", "precio": 1, "stock": stock})
        assert exc_info.value.field == "stock"
        assert exc_info.value.constraint == "integer"

    def test_stock_at_integer_limit(self):
        assert validate_product({"nombre": "a", "precio": 1, "stock": 2**31 - 1}).stock == 2**31 - 1

    @pytest.mark.parametrize("id_categoria", [2**31, -(2**31) - 1, 2**64])
    def test_id_categoria_beyond_integer_column(self, id_categoria):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_product({"nombre": "a", "precio": 1, "stock": 1, "id_categoria": id_categoria})
        assert exc_info.value.field == "id_categoria"
        assert exc_info.value.constraint == "integer"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("id_cliente", [2**31, 2**64, -(2**31) - 1])
    async def test_id_cliente_beyond_integer_column_is_unknown_client(self, id_cliente):
        lookup = _client_lookup(1)
        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await validate_order({"tipo_orden": "venta", "id_cliente": id_cliente}, lookup)

        assert exc_info.value.field == "id_cliente"
        assert lookup.calls == []

    @pytest.mark.parametrize("precio", ["19.999", "0.001", 1e12, "100000000", "-100000000.00"])
    def test_precio_beyond_numeric_10_2(self, precio):
        with pytest.raises(InvalidTypeError) as exc_info:
            validate_product({"nombre": "a", "precio": precio, "stock": 1})
        assert exc_info.value.field == "precio"
        assert exc_info.value.constraint == "numeric"

    @pytest.mark.parametrize(
        "precio, expected",
        [("99999999.99", Decimal("99999999.99")), ("19.990", Decimal("19.99")), (0.5, Decimal("0.5"))],
    )
    def test_precio_within_numeric_10_2(self, precio, expected):
        assert validate_product({"nombre": "a", "precio": precio, "stock": 1}).precio == expected
