"""
Cart domain model (Aggregate Root).

A cart holds at most one line per product. Lines keep the order in which
each product was first added; adding an already present product only
increases that line's quantity.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Iterator

from app.domain.value_objects.money import Money
from app.utils.error_handler import InvalidQuantityException

from .product import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    """
    A (product, quantity) pairing within a cart.

    Attributes:
        product: Product reference
        quantity: Units of the product, always positive
    """

    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        """Calculate line total (price * quantity)."""
        return self.product.price * self.quantity

    def subtotal(self, currency: str = "USD") -> Money:
        """Line total as Money."""
        return Money(amount=self.product.price, currency=currency) * self.quantity

    def to_dict(self) -> dict[str, Any]:
        """Convert cart line to dictionary for API responses."""
        return {
            "product": self.product.to_dict(),
            "quantity": self.quantity,
            "line_total": self.line_total,
        }


class Cart:
    """
    Domain model representing a shopping cart (Aggregate Root).

    Lines are stored in an insertion-ordered mapping keyed by product id,
    which gives constant-time merging and first-seen iteration order.
    """

    def __init__(self) -> None:
        self._lines: dict[int, CartLine] = {}

    def add_item(self, product: Product, quantity: int) -> None:
        """
        Add a quantity of a product to the cart.

        Args:
            product: Product to add
            quantity: Units to add

        Raises:
            InvalidQuantityException: If quantity is not a positive integer
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityException(quantity)

        line = self._lines.get(product.product_id)
        if line is None:
            self._lines[product.product_id] = CartLine(product=product, quantity=quantity)
        else:
            self._lines[product.product_id] = replace(line, quantity=line.quantity + quantity)

        logger.debug(f"Added {quantity} x product {product.product_id} to cart")

    def remove_line(self, product: Product) -> None:
        """Remove the line for a product; does nothing if it is not in the cart."""
        if self._lines.pop(product.product_id, None) is not None:
            logger.debug(f"Removed product {product.product_id} from cart")

    def compute_total_value(self) -> Decimal:
        """Sum of price * quantity over all lines, as an exact Decimal."""
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    def clear(self) -> None:
        """Remove all lines."""
        self._lines.clear()

    @property
    def lines(self) -> tuple[CartLine, ...]:
        """Snapshot of the cart lines in first-added order."""
        return tuple(self._lines.values())

    def get_line(self, product_id: int) -> CartLine | None:
        """Get the line for a product id, if present."""
        return self._lines.get(product_id)

    @property
    def is_empty(self) -> bool:
        """Check if the cart has no lines."""
        return not self._lines

    @property
    def items_count(self) -> int:
        """Number of distinct products in the cart."""
        return len(self._lines)

    @property
    def total_quantity(self) -> int:
        """Total units across all lines."""
        return sum(line.quantity for line in self._lines.values())

    def total(self, currency: str = "USD") -> Money:
        """Cart total as Money, for display."""
        return sum((line.subtotal(currency) for line in self._lines.values()), Money.zero(currency))

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __repr__(self) -> str:
        return f"Cart(lines={len(self._lines)}, total={self.compute_total_value()})"

    def to_dict(self, currency: str = "USD") -> dict[str, Any]:
        """Convert cart to dictionary for API responses."""
        return {
            "lines": [line.to_dict() for line in self._lines.values()],
            "items_count": self.items_count,
            "total_quantity": self.total_quantity,
            "total": self.compute_total_value(),
            "total_display": str(self.total(currency)),
            "currency": currency,
        }
