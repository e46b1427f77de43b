"""
Shipping details domain model.

The model itself accepts empty values so a blank checkout form can be
represented; required-field rules are applied by ShippingDetailsValidator.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class ShippingDetails:
    """
    Address and contact data collected at checkout.

    Attributes:
        name: Recipient name
        line1: First address line
        line2: Second address line (optional)
        line3: Third address line (optional)
        city: City name
        state: State or province
        zip: Postal code (optional)
        country: Country name
        gift_wrap: Whether the order should be gift wrapped
    """

    name: str = ""
    line1: str = ""
    line2: str = ""
    line3: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    gift_wrap: bool = False

    @property
    def address_lines(self) -> list[str]:
        """Non-empty address lines, in order."""
        return [line for line in (self.line1, self.line2, self.line3) if line]

    def to_dict(self) -> dict[str, Any]:
        """Convert shipping details to dictionary."""
        return asdict(self)
