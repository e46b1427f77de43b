"""
Dependencias de FastAPI para los endpoints del carrito.

Los servicios se crean en el lifespan y se guardan en app.state; estas
funciones los exponen a los endpoints y permiten reemplazarlos en tests
mediante app.dependency_overrides.
"""

import logging

from fastapi import Depends, Request, Response

from app.core.config import get_settings
from app.db.product_repository import InMemoryProductRepository
from app.domain.models import Cart
from app.services.cart.controller import CartController
from app.services.cart.interfaces import IOrderProcessor
from app.services.cart.session_store import CartSessionStore
from app.services.cart.validators import ShippingDetailsValidator

logger = logging.getLogger(__name__)


def get_product_repository(request: Request) -> InMemoryProductRepository:
    return request.app.state.product_repository


def get_order_processor(request: Request) -> IOrderProcessor:
    return request.app.state.order_processor


def get_cart_sessions(request: Request) -> CartSessionStore:
    return request.app.state.cart_sessions


def get_shipping_validator() -> ShippingDetailsValidator:
    return ShippingDetailsValidator()


def get_cart_controller(
    product_repository: InMemoryProductRepository = Depends(get_product_repository),
    order_processor: IOrderProcessor = Depends(get_order_processor),
) -> CartController:
    return CartController(product_repository=product_repository, order_processor=order_processor)


def get_session_cart(
    request: Request,
    sessions: CartSessionStore = Depends(get_cart_sessions),
) -> Cart:
    """
    Cart of the current session, for actions that do not add products.

    Absent, unknown or expired session cookies get an empty cart that is
    not stored and no cookie is issued.
    """
    cart = sessions.get(request.cookies.get(get_settings().SESSION_COOKIE_NAME))
    return cart if cart is not None else Cart()


def get_or_create_session_cart(
    request: Request,
    response: Response,
    sessions: CartSessionStore = Depends(get_cart_sessions),
) -> Cart:
    """
    Cart of the current session, creating a session if needed.

    Cookie values the store never issued are ignored and replaced by a
    new session id.
    """
    settings = get_settings()
    cart = sessions.get(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if cart is not None:
        return cart

    session_id, cart = sessions.create_session()
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session_id,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax",
    )
    logger.debug("Issued new cart session cookie")
    return cart
