"""
Modelos Pydantic para la API del carrito y del catálogo.

Los montos se exponen como Decimal (serializados como string en JSON)
para no perder precisión.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.domain.models import ShippingDetails


class ProductResponse(BaseModel):
    """Producto del catálogo."""

    product_id: int
    name: str
    description: str = ""
    price: Decimal
    category: str = ""


class PagingInfo(BaseModel):
    """Información de paginación."""

    current_page: int
    items_per_page: int
    total_items: int
    total_pages: int


class ProductListResponse(BaseModel):
    """Listado paginado de productos."""

    products: List[ProductResponse]
    current_category: Optional[str] = None
    paging: PagingInfo


class CartLineResponse(BaseModel):
    """Línea del carrito."""

    product: ProductResponse
    quantity: int
    line_total: Decimal


class CartResponse(BaseModel):
    """Contenido del carrito (vista Index)."""

    lines: List[CartLineResponse]
    items_count: int
    total_quantity: int
    total: Decimal
    total_display: str
    currency: str
    return_url: Optional[str] = None


class CartSummaryResponse(BaseModel):
    """Resumen del carrito (widget)."""

    items_count: int
    total_quantity: int
    total: Decimal
    total_display: str
    currency: str


class AddToCartRequest(BaseModel):
    """Request para agregar un producto al carrito."""

    product_id: int
    quantity: int = Field(default=1, gt=0)
    return_url: Optional[str] = None


class RedirectResponseModel(BaseModel):
    """Descriptor de redirección devuelto por las acciones del carrito."""

    action: str
    return_url: Optional[str] = None
    items_count: int


class ShippingDetailsSchema(BaseModel):
    """Datos de envío enviados en el checkout."""

    name: str = ""
    line1: str = ""
    line2: str = ""
    line3: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    gift_wrap: bool = False

    def to_domain(self) -> ShippingDetails:
        """Convierte el schema al modelo de dominio."""
        return ShippingDetails(**self.model_dump())


class CheckoutResponse(BaseModel):
    """Resultado del checkout."""

    view: str
    is_valid: bool
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    error_codes: List[str] = Field(default_factory=list)
