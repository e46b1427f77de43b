"""
Cart endpoints.

Thin HTTP wrappers around CartController: each endpoint resolves the
session cart, calls the matching controller action and serializes the
result.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.concurrency import run_in_threadpool

from app.api.dependencies import (
    get_cart_controller,
    get_or_create_session_cart,
    get_session_cart,
    get_shipping_validator,
)
from app.api.v1.schemas.cart_schemas import (
    AddToCartRequest,
    CartResponse,
    CartSummaryResponse,
    CheckoutResponse,
    RedirectResponseModel,
    ShippingDetailsSchema,
)
from app.core.config import get_settings
from app.domain.models import Cart
from app.services.cart.controller import CartController
from app.services.cart.validators import ShippingDetailsValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartResponse, summary="View cart contents")
async def view_cart(
    return_url: Optional[str] = Query(None, description="URL to continue shopping"),
    cart: Cart = Depends(get_session_cart),
    controller: CartController = Depends(get_cart_controller),
) -> CartResponse:
    """
    Cart contents with line totals and the cart total.
    """
    result = controller.index(cart, return_url)
    view_model = result.model
    currency = get_settings().CURRENCY

    return CartResponse.model_validate({**view_model.cart.to_dict(currency), "return_url": view_model.return_url})


@router.get("/summary", response_model=CartSummaryResponse, summary="Cart summary")
async def cart_summary(
    cart: Cart = Depends(get_session_cart),
    controller: CartController = Depends(get_cart_controller),
) -> CartSummaryResponse:
    """Item count and total for the cart widget."""
    summary_cart = controller.summary(cart).model
    currency = get_settings().CURRENCY

    return CartSummaryResponse(
        items_count=summary_cart.items_count,
        total_quantity=summary_cart.total_quantity,
        total=summary_cart.compute_total_value(),
        total_display=str(summary_cart.total(currency)),
        currency=currency,
    )


@router.post("/items", response_model=RedirectResponseModel, summary="Add product to cart")
async def add_to_cart(
    request: AddToCartRequest,
    cart: Cart = Depends(get_or_create_session_cart),
    controller: CartController = Depends(get_cart_controller),
) -> RedirectResponseModel:
    """
    Add a product to the cart.

    Unknown product ids leave the cart unchanged; the response always
    points back to the cart page.
    """
    result = controller.add_to_cart(cart, request.product_id, request.return_url, request.quantity)

    return RedirectResponseModel(
        action=result.action,
        return_url=result.route_values.get("return_url"),
        items_count=cart.items_count,
    )


@router.delete("/items/{product_id}", response_model=RedirectResponseModel, summary="Remove product from cart")
async def remove_from_cart(
    product_id: int,
    return_url: Optional[str] = Query(None),
    cart: Cart = Depends(get_session_cart),
    controller: CartController = Depends(get_cart_controller),
) -> RedirectResponseModel:
    """Remove a product line from the cart."""
    result = controller.remove_from_cart(cart, product_id, return_url)

    return RedirectResponseModel(
        action=result.action,
        return_url=result.route_values.get("return_url"),
        items_count=cart.items_count,
    )


@router.get("/checkout", response_model=ShippingDetailsSchema, summary="Blank checkout form")
async def checkout_form(controller: CartController = Depends(get_cart_controller)) -> ShippingDetailsSchema:
    """Empty shipping details form."""
    return ShippingDetailsSchema.model_validate(controller.checkout_form().model.to_dict())


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    summary="Checkout",
    responses={422: {"model": CheckoutResponse, "description": "Empty cart or invalid shipping details"}},
)
async def checkout(
    details: ShippingDetailsSchema,
    response: Response,
    cart: Cart = Depends(get_session_cart),
    controller: CartController = Depends(get_cart_controller),
    validator: ShippingDetailsValidator = Depends(get_shipping_validator),
) -> CheckoutResponse:
    """
    Validate shipping details and submit the order.

    Returns the "Completed" view on success. On an empty cart or invalid
    shipping details responds 422 with the validation errors; no order is
    submitted in that case.
    """
    shipping_details = details.to_domain()
    model_state = validator.validate(shipping_details)
    # Order processors do blocking I/O (SMTP, file writes)
    result = await run_in_threadpool(controller.checkout, cart, shipping_details, model_state)

    if not result.model_state.is_valid:
        response.status_code = 422

    state = result.model_state.to_dict()
    return CheckoutResponse(
        view=result.view_name or "Checkout",
        is_valid=state["is_valid"],
        errors=state["errors"],
        error_codes=state["error_codes"],
    )
