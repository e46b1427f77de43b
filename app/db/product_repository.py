"""
InMemoryProductRepository: catalog lookup for the store.

Holds the catalog in memory, seeded from config/catalog.json at startup.
Implements IProductRepository plus the lookups the product listing needs.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.domain.models import Product
from app.utils.error_handler import ProductNotFoundException, ValidationException

logger = logging.getLogger(__name__)


class InMemoryProductRepository:
    """Repository for product catalog queries."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: Dict[int, Product] = {}
        for product in products:
            self.add(product)

    @property
    def products(self) -> Sequence[Product]:
        """All products in catalog order."""
        return tuple(self._products.values())

    def add(self, product: Product) -> None:
        """Add or replace a product in the catalog."""
        self._products[product.product_id] = product

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def require_by_id(self, product_id: int) -> Product:
        """
        Get a product or fail.

        Raises:
            ProductNotFoundException: If the id is not in the catalog
        """
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    def get_by_category(self, category: str) -> List[Product]:
        return [product for product in self._products.values() if product.category == category]

    def categories(self) -> List[str]:
        """Distinct categories, sorted alphabetically."""
        return sorted({product.category for product in self._products.values() if product.category})

    def list_products(self, category: Optional[str] = None, page: int = 1, page_size: int = 4) -> Dict[str, Any]:
        """
        Paged product listing, optionally filtered by category.

        Args:
            category: Only include products of this category
            page: 1-based page number
            page_size: Products per page

        Returns:
            Dict with products and paging info
        """
        if page < 1:
            raise ValidationException(message="Page must be 1 or greater", field="page", invalid_value=page)

        filtered = self.get_by_category(category) if category else list(self._products.values())
        filtered.sort(key=lambda product: product.product_id)

        start = (page - 1) * page_size
        total_items = len(filtered)

        logger.debug(f"Listing products: category={category}, page={page}, total={total_items}")

        return {
            "products": filtered[start : start + page_size],
            "current_category": category,
            "paging": {
                "current_page": page,
                "items_per_page": page_size,
                "total_items": total_items,
                "total_pages": math.ceil(total_items / page_size) if total_items else 0,
            },
        }

    def __len__(self) -> int:
        return len(self._products)
