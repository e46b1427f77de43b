"""
Order services package.

Contains the order processors that finalize a checked-out cart.
"""

from .email_order_processor import EmailOrderProcessor

__all__ = ["EmailOrderProcessor"]
