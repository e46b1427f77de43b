"""
Product catalog endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_product_repository
from app.api.v1.schemas.cart_schemas import ProductListResponse, ProductResponse
from app.core.config import get_settings
from app.db.product_repository import InMemoryProductRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=ProductListResponse, summary="List products")
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    page: int = Query(1, description="1-based page number"),
    repository: InMemoryProductRepository = Depends(get_product_repository),
) -> ProductListResponse:
    """
    Paged product listing, optionally filtered by category.
    """
    listing = repository.list_products(category=category, page=page, page_size=get_settings().PRODUCTS_PAGE_SIZE)

    return ProductListResponse(
        products=[ProductResponse.model_validate(product.to_dict()) for product in listing["products"]],
        current_category=listing["current_category"],
        paging=listing["paging"],
    )


@router.get("/categories", response_model=List[str], summary="List categories")
async def list_categories(repository: InMemoryProductRepository = Depends(get_product_repository)) -> List[str]:
    """Distinct product categories, for navigation."""
    return repository.categories()


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product")
async def get_product(
    product_id: int,
    repository: InMemoryProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    """Single product; 404 if it is not in the catalog."""
    return ProductResponse.model_validate(repository.require_by_id(product_id).to_dict())
