"""Tests unitarios para el agregado Cart."""

from collections import Counter
from decimal import Decimal

import pytest

from app.domain.models import Cart, CartLine, Product
from app.domain.value_objects import Money
from app.utils.error_handler import ErrorCode, InvalidQuantityException


class TestAddItem:
    """Tests para Cart.add_item."""

    def test_can_add_new_lines(self, cart, p1, p2):
        """Debe crear una línea por producto en orden de inserción."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 1)

        results = cart.lines

        assert len(results) == 2
        assert results[0].product == p1
        assert results[1].product == p2

    def test_can_add_quantity_for_existing_lines(self, cart, p1, p2):
        """Debe sumar la cantidad a la línea existente sin crear otra."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 1)
        cart.add_item(p1, 10)

        results = cart.lines

        assert len(results) == 2
        assert results[0].product == p1
        assert results[0].quantity == 11
        assert results[1].product == p2
        assert results[1].quantity == 1

    @pytest.mark.parametrize(
        "additions",
        [
            [(1, 1)],
            [(1, 2), (2, 3), (1, 4)],
            [(3, 1), (1, 1), (2, 1), (3, 5), (2, 2)],
            [(2, 7), (2, 7), (2, 7)],
            [(1, 1), (2, 1), (3, 1), (1, 100), (3, 1000)],
        ],
    )
    def test_lines_match_distinct_products_and_summed_quantities(self, cart, p1, p2, p3, additions):
        """Debe haber una línea por producto distinto con la suma de cantidades."""
        catalog = {1: p1, 2: p2, 3: p3}
        expected = Counter()
        first_seen = []

        for product_id, quantity in additions:
            cart.add_item(catalog[product_id], quantity)
            expected[product_id] += quantity
            if product_id not in first_seen:
                first_seen.append(product_id)

        assert len(cart.lines) == len(expected)
        assert [line.product.product_id for line in cart.lines] == first_seen
        assert {line.product.product_id: line.quantity for line in cart.lines} == dict(expected)

    def test_merges_by_product_identity(self, cart):
        """Debe fusionar productos con el mismo id aunque sean instancias distintas."""
        cart.add_item(Product(product_id=5, name="Ball"), 1)
        cart.add_item(Product(product_id=5, name="Ball"), 2)

        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 3

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_rejects_non_positive_quantity(self, cart, p1, quantity):
        """Debe rechazar cantidades cero o negativas sin modificar el carrito."""
        cart.add_item(p1, 2)

        with pytest.raises(InvalidQuantityException) as exc_info:
            cart.add_item(p1, quantity)

        assert exc_info.value.error_code == ErrorCode.INVALID_QUANTITY
        assert exc_info.value.field == "quantity"
        assert cart.lines[0].quantity == 2

    @pytest.mark.parametrize("quantity", [1.5, "3", True, None])
    def test_rejects_non_integer_quantity(self, cart, p1, quantity):
        """Debe rechazar cantidades que no son enteros."""
        with pytest.raises(InvalidQuantityException):
            cart.add_item(p1, quantity)

        assert cart.is_empty

    def test_no_upper_bound_on_quantity(self, cart, p1):
        """No debe imponer un máximo de cantidad."""
        cart.add_item(p1, 1_000_000)

        assert cart.lines[0].quantity == 1_000_000


class TestRemoveLine:
    """Tests para Cart.remove_line."""

    def test_can_remove_line(self, cart, p1, p2, p3):
        """Debe eliminar la línea del producto y conservar las demás."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 3)
        cart.add_item(p3, 5)
        cart.add_item(p2, 1)

        cart.remove_line(p2)

        assert sum(1 for line in cart.lines if line.product == p2) == 0
        assert len(cart.lines) == 2

    def test_remove_keeps_order_of_remaining_lines(self, cart, p1, p2, p3):
        """Debe conservar el orden de las líneas restantes."""
        for product in (p1, p2, p3):
            cart.add_item(product, 1)

        cart.remove_line(p2)

        assert [line.product for line in cart.lines] == [p1, p3]

    def test_remove_absent_product_is_noop(self, cart, p1, p2):
        """No debe fallar ni cambiar nada si el producto no está en el carrito."""
        cart.add_item(p1, 1)

        cart.remove_line(p2)

        assert len(cart.lines) == 1

    def test_readding_removed_product_appends_at_end(self, cart, p1, p2):
        """Un producto eliminado y vuelto a agregar debe ir al final."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 1)
        cart.remove_line(p1)
        cart.add_item(p1, 4)

        assert [line.product for line in cart.lines] == [p2, p1]
        assert cart.get_line(1).quantity == 4


class TestTotals:
    """Tests para el cálculo de totales."""

    def test_calculate_cart_total(self, cart, p1, p2):
        """Debe calcular 100*4 + 50*1 = 450 exactamente."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 1)
        cart.add_item(p1, 3)

        result = cart.compute_total_value()

        assert result == Decimal("450")
        assert isinstance(result, Decimal)

    def test_empty_cart_total_is_zero(self, cart):
        """El carrito vacío debe totalizar cero."""
        assert cart.compute_total_value() == Decimal("0")

    def test_total_is_exact_for_decimal_prices(self, cart):
        """No debe haber errores de redondeo de punto flotante."""
        cart.add_item(Product(product_id=1, name="A", price=Decimal("0.10")), 3)
        cart.add_item(Product(product_id=2, name="B", price=Decimal("0.20")), 1)

        assert cart.compute_total_value() == Decimal("0.50")

    def test_total_as_money(self, cart, p1):
        """Debe exponer el total como Money en la moneda pedida."""
        cart.add_item(p1, 2)

        assert cart.total("EUR") == Money(amount=Decimal("200"), currency="EUR")

    def test_money_total_matches_decimal_total(self, cart, p1, p2, p3):
        """El total en Money debe coincidir exactamente con el total Decimal."""
        cart.add_item(p1, 1)
        cart.add_item(p3, 3)
        cart.add_item(p2, 2)

        assert cart.total().amount == cart.compute_total_value() == Decimal("258.50")
        assert str(cart.total()) == "USD 258.50"

    def test_empty_cart_money_total(self, cart):
        assert str(cart.total()) == "USD 0.00"

    def test_line_subtotal_as_money(self, p3):
        """El subtotal de línea debe ser Money del precio por la cantidad."""
        assert CartLine(product=p3, quantity=3).subtotal("EUR") == Money(amount=Decimal("58.50"), currency="EUR")

    def test_counts(self, cart, p1, p2):
        """Debe contar líneas distintas y unidades totales."""
        cart.add_item(p1, 2)
        cart.add_item(p2, 3)

        assert cart.items_count == 2
        assert len(cart) == 2
        assert cart.total_quantity == 5

    def test_line_total(self, p3):
        """El total de línea debe ser precio por cantidad."""
        assert CartLine(product=p3, quantity=3).line_total == Decimal("58.50")


class TestClearAndViews:
    """Tests para Cart.clear y la vista de líneas."""

    def test_can_clear_cart_contents(self, cart, p1, p2):
        """Debe vaciar el carrito."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 1)

        cart.clear()

        assert len(cart.lines) == 0
        assert cart.is_empty

    def test_lines_is_a_snapshot(self, cart, p1, p2):
        """La vista de líneas no debe cambiar con mutaciones posteriores."""
        cart.add_item(p1, 1)
        snapshot = cart.lines

        cart.add_item(p2, 1)
        cart.add_item(p1, 5)

        assert len(snapshot) == 1
        assert snapshot[0].quantity == 1

    def test_lines_are_read_only(self, cart, p1):
        """Las líneas expuestas no deben poder modificarse."""
        cart.add_item(p1, 1)

        with pytest.raises(AttributeError):
            cart.lines[0].quantity = 99

    def test_iteration_preserves_order(self, cart, p1, p2, p3):
        """Iterar el carrito debe seguir el orden de inserción."""
        for product in (p3, p1, p2):
            cart.add_item(product, 1)

        assert [line.product for line in cart] == [p3, p1, p2]

    def test_to_dict(self, cart, p1):
        """Debe serializar líneas y totales."""
        cart.add_item(p1, 2)

        data = cart.to_dict("USD")

        assert data["items_count"] == 1
        assert data["total"] == Decimal("200")
        assert data["total_display"] == "USD 200.00"
        assert data["lines"][0]["product"]["product_id"] == 1
        assert data["lines"][0]["line_total"] == Decimal("200")


def test_new_cart_is_empty():
    """Un carrito nuevo no debe tener líneas."""
    assert Cart().lines == ()
