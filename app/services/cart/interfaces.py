"""
Interfaces/Protocols for cart services (Dependency Inversion Principle).

These protocols define the collaborators the cart controller depends on,
allowing the catalog and the order processor to be swapped for test doubles.
"""

from typing import Protocol, Sequence

from app.domain.models import Cart, Product, ShippingDetails


class IProductRepository(Protocol):
    """Protocol for catalog lookup."""

    @property
    def products(self) -> Sequence[Product]:
        """Current catalog."""
        ...


class IOrderProcessor(Protocol):
    """Protocol for finalizing a validated order."""

    def process_order(self, cart: Cart, shipping_details: ShippingDetails) -> None:
        """Submit the order for a non-empty cart."""
        ...
