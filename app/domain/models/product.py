"""
Product domain model.

Represents a catalog product as seen by the cart. Products are immutable
for cart purposes; cart lines are merged by ``product_id``.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class Product:
    """
    Domain model representing a catalog product.

    Attributes:
        product_id: Unique product identifier
        name: Display name
        price: Unit price as exact Decimal
        category: Catalog category (e.g. "Soccer", "Chess")
        description: Free-form description
    """

    product_id: int
    name: str
    price: Decimal = Decimal("0")
    category: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        """Validate product data after initialization."""
        if not isinstance(self.price, Decimal):
            object.__setattr__(self, "price", Decimal(str(self.price)))

        if self.price < 0:
            raise ValueError(f"Product price cannot be negative: {self.price}")

    def to_dict(self) -> dict[str, Any]:
        """Convert product to dictionary for API responses."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Create product from dictionary."""
        return cls(
            product_id=int(data["product_id"]),
            name=data["name"],
            price=Decimal(str(data.get("price", "0"))),
            category=data.get("category", ""),
            description=data.get("description", ""),
        )
