"""
Domain models for business entities.

These models represent core business concepts and contain
business logic and invariants.
"""

from .cart import Cart, CartLine
from .product import Product
from .shipping_details import ShippingDetails

__all__ = ["Cart", "CartLine", "Product", "ShippingDetails"]
