"""
Validator services for checkout data.
"""

from .shipping_validator import ShippingDetailsValidator

__all__ = ["ShippingDetailsValidator"]
