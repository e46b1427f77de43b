"""
CartController - cart actions and checkout flow.

The controller mediates between the session cart, the catalog and the
order processor. Both collaborators are injected (DIP) and may be None
when the actions being used do not need them.

Checkout has three outcomes:
1. Empty cart: processor not called, model-level error, default view
2. Shipping errors already in model state: processor not called, default view
3. Otherwise: processor called once, cart cleared, "Completed" view
"""

import logging

from app.core.logging_config import log_checkout_outcome
from app.domain.models import Cart, Product, ShippingDetails
from app.services.cart.interfaces import IOrderProcessor, IProductRepository
from app.services.cart.results import CartIndexViewModel, ModelState, RedirectResult, ViewResult
from app.utils.error_handler import ErrorCode

logger = logging.getLogger(__name__)

EMPTY_CART_MESSAGE = "Sorry, your cart is empty!"
COMPLETED_VIEW = "Completed"
SUMMARY_VIEW = "Summary"
INDEX_ACTION = "Index"


class CartController:
    """Cart actions: view, add, remove, summary and checkout."""

    def __init__(
        self,
        product_repository: IProductRepository | None,
        order_processor: IOrderProcessor | None,
    ):
        """
        Initialize controller with its collaborators.

        Args:
            product_repository: Catalog used to resolve product ids
            order_processor: Service that finalizes validated orders
        """
        self.product_repository = product_repository
        self.order_processor = order_processor

    def index(self, cart: Cart, return_url: str | None) -> ViewResult:
        """Show the cart contents."""
        return ViewResult(model=CartIndexViewModel(cart=cart, return_url=return_url))

    def add_to_cart(self, cart: Cart, product_id: int, return_url: str | None, quantity: int = 1) -> RedirectResult:
        """
        Add a catalog product to the cart and redirect to the cart page.

        Unknown product ids leave the cart untouched.
        """
        product = self._find_product(product_id)
        if product is not None:
            cart.add_item(product, quantity)
        else:
            logger.info(f"Product {product_id} not in catalog, cart unchanged")

        return RedirectResult.to_action(INDEX_ACTION, return_url=return_url)

    def remove_from_cart(self, cart: Cart, product_id: int, return_url: str | None) -> RedirectResult:
        """Remove a product line from the cart and redirect to the cart page."""
        product = self._find_product(product_id)
        if product is not None:
            cart.remove_line(product)

        return RedirectResult.to_action(INDEX_ACTION, return_url=return_url)

    def summary(self, cart: Cart) -> ViewResult:
        """Partial view with the cart summary widget."""
        return ViewResult(view_name=SUMMARY_VIEW, model=cart)

    def checkout_form(self) -> ViewResult:
        """Blank shipping details form."""
        return ViewResult(model=ShippingDetails())

    def checkout(
        self,
        cart: Cart,
        shipping_details: ShippingDetails,
        model_state: ModelState | None = None,
    ) -> ViewResult:
        """
        Validate the cart and submit the order.

        Args:
            cart: Session cart
            shipping_details: Details entered by the customer
            model_state: Validation state from the shipping details validator

        Returns:
            ViewResult: "Completed" view on success, default view with errors otherwise
        """
        model_state = model_state if model_state is not None else ModelState()

        if cart.is_empty:
            model_state.add_model_error("", EMPTY_CART_MESSAGE, ErrorCode.EMPTY_CART)

        if not model_state.is_valid:
            outcome = "empty_cart" if cart.is_empty else "invalid_shipping"
            log_checkout_outcome(outcome, errors=model_state.errors)
            return ViewResult(model=shipping_details, model_state=model_state)

        items_count = cart.items_count
        total = cart.compute_total_value()

        # Processor failures propagate; the cart is kept so the customer can retry
        self.order_processor.process_order(cart, shipping_details)
        cart.clear()

        log_checkout_outcome("completed", items_count=items_count, total=str(total))
        return ViewResult(view_name=COMPLETED_VIEW, model_state=model_state)

    def _find_product(self, product_id: int) -> Product | None:
        return next(
            (product for product in self.product_repository.products if product.product_id == product_id),
            None,
        )
