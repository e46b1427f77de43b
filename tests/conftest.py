"""
Fixtures compartidas para los tests del carrito.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from app.db.product_repository import InMemoryProductRepository
from app.domain.models import Cart, Product, ShippingDetails


@pytest.fixture
def p1():
    return Product(product_id=1, name="P1", price=Decimal("100"), category="Apples")


@pytest.fixture
def p2():
    return Product(product_id=2, name="P2", price=Decimal("50"), category="Apples")


@pytest.fixture
def p3():
    return Product(product_id=3, name="P3", price=Decimal("19.50"), category="Oranges")


@pytest.fixture
def cart():
    return Cart()


@pytest.fixture
def product_repository(p1, p2, p3):
    return InMemoryProductRepository([p1, p2, p3])


@pytest.fixture
def order_processor():
    """Procesador de pedidos simulado (IOrderProcessor)."""
    return MagicMock()


@pytest.fixture
def valid_shipping_details():
    return ShippingDetails(
        name="Joe Smith",
        line1="123 Main St",
        city="Springfield",
        state="IL",
        zip="62701",
        country="USA",
    )
