"""
Tests unitarios para CartController.

Cubren las acciones del carrito y los tres resultados del checkout:
carrito vacío, datos de envío inválidos y pedido completado.
"""

from unittest.mock import MagicMock

import pytest

from app.domain.models import Cart, Product, ShippingDetails
from app.services.cart.controller import COMPLETED_VIEW, EMPTY_CART_MESSAGE, CartController
from app.services.cart.results import CartIndexViewModel, ModelState, RedirectResult
from app.utils.error_handler import ErrorCode, OrderProcessingException


@pytest.fixture
def repository_mock(p1, p2, p3):
    """Repositorio simulado que expone la colección de productos."""
    repository = MagicMock()
    repository.products = [p1, p2, p3]
    return repository


@pytest.fixture
def controller(repository_mock, order_processor):
    return CartController(repository_mock, order_processor)


class TestCartActions:
    """Tests para index, add_to_cart, remove_from_cart y summary."""

    def test_can_add_to_cart(self, controller, cart):
        """Debe agregar el producto del catálogo al carrito."""
        controller.add_to_cart(cart, 1, None)

        assert len(cart.lines) == 1
        assert cart.lines[0].product.product_id == 1

    def test_adding_product_goes_to_cart_screen(self, controller, cart):
        """Debe redirigir a Index conservando la URL de retorno."""
        result = controller.add_to_cart(cart, 2, "myUrl")

        assert isinstance(result, RedirectResult)
        assert result.action == "Index"
        assert result.route_values["return_url"] == "myUrl"

    def test_add_unknown_product_leaves_cart_unchanged(self, controller, cart):
        """Un id desconocido no debe modificar el carrito pero sí redirigir."""
        result = controller.add_to_cart(cart, 99, "back")

        assert cart.is_empty
        assert result.action == "Index"

    def test_add_with_quantity(self, controller, cart):
        """Debe agregar la cantidad indicada."""
        controller.add_to_cart(cart, 3, None, quantity=4)
        controller.add_to_cart(cart, 3, None)

        assert cart.get_line(3).quantity == 5

    def test_can_view_cart_contents(self, controller, cart):
        """Index debe exponer el mismo carrito y la URL de retorno."""
        result = controller.index(cart, "myUrl")

        assert isinstance(result.model, CartIndexViewModel)
        assert result.model.cart is cart
        assert result.model.return_url == "myUrl"

    def test_remove_from_cart(self, controller, cart, p1, p2):
        """Debe quitar la línea del producto indicado."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 1)

        result = controller.remove_from_cart(cart, 1, "back")

        assert [line.product for line in cart.lines] == [p2]
        assert result.action == "Index"

    def test_summary(self, controller, cart):
        """Summary debe renderizar la vista parcial con el carrito."""
        result = controller.summary(cart)

        assert result.view_name == "Summary"
        assert result.model is cart

    def test_checkout_form_is_blank(self, controller):
        """El formulario de checkout debe iniciar vacío."""
        result = controller.checkout_form()

        assert result.view_name == ""
        assert result.model == ShippingDetails()


class TestCheckout:
    """Tests para CartController.checkout."""

    def test_cannot_checkout_empty_cart(self, controller, order_processor):
        """Carrito vacío: no procesa el pedido y devuelve la vista por defecto."""
        cart = Cart()
        shipping_details = ShippingDetails()

        result = controller.checkout(cart, shipping_details)

        order_processor.process_order.assert_not_called()
        assert result.view_name == ""
        assert result.model_state.is_valid is False
        assert result.model_state.errors[""] == [EMPTY_CART_MESSAGE]
        assert result.model_state.error_codes == [ErrorCode.EMPTY_CART]

    def test_cannot_checkout_invalid_shipping_details(self, controller, order_processor, cart, p1):
        """Errores previos en el model state: no procesa el pedido."""
        cart.add_item(p1, 1)
        model_state = ModelState()
        model_state.add_model_error("error", "error")

        result = controller.checkout(cart, ShippingDetails(), model_state)

        order_processor.process_order.assert_not_called()
        assert result.view_name == ""
        assert result.model_state.is_valid is False
        assert "" not in result.model_state
        assert len(cart.lines) == 1

    def test_empty_cart_and_invalid_shipping_report_both(self, controller, order_processor):
        """Debe acumular el error de carrito vacío junto a los de envío."""
        model_state = ModelState()
        model_state.add_model_error("name", "Please enter a name", ErrorCode.INVALID_SHIPPING_DETAILS)

        result = controller.checkout(Cart(), ShippingDetails(), model_state)

        order_processor.process_order.assert_not_called()
        assert result.model_state.error_codes == [ErrorCode.INVALID_SHIPPING_DETAILS, ErrorCode.EMPTY_CART]

    def test_can_checkout_and_submit_order(self, controller, order_processor, cart, p1, valid_shipping_details):
        """Carrito válido: procesa el pedido una vez y muestra Completed."""
        cart.add_item(p1, 1)

        result = controller.checkout(cart, valid_shipping_details)

        order_processor.process_order.assert_called_once_with(cart, valid_shipping_details)
        assert result.view_name == COMPLETED_VIEW
        assert result.model_state.is_valid is True

    def test_cart_cleared_after_successful_checkout(self, controller, cart, p1, p2, valid_shipping_details):
        """El carrito debe vaciarse después de procesar el pedido."""
        cart.add_item(p1, 1)
        cart.add_item(p2, 2)

        controller.checkout(cart, valid_shipping_details)

        assert cart.is_empty

    def test_processor_sees_cart_contents(self, repository_mock, cart, p1, valid_shipping_details):
        """El procesador debe recibir el carrito antes de vaciarse."""
        seen = []
        processor = MagicMock()
        processor.process_order.side_effect = lambda c, s: seen.append(c.total_quantity)
        cart.add_item(p1, 3)

        CartController(repository_mock, processor).checkout(cart, valid_shipping_details)

        assert seen == [3]

    def test_processor_failure_propagates_and_keeps_cart(
        self, controller, order_processor, cart, p1, valid_shipping_details
    ):
        """Si el procesador falla, la excepción se propaga y el carrito se conserva."""
        order_processor.process_order.side_effect = OrderProcessingException("SMTP down", processor="email_smtp")
        cart.add_item(p1, 2)

        with pytest.raises(OrderProcessingException):
            controller.checkout(cart, valid_shipping_details)

        assert cart.get_line(1).quantity == 2


def test_controller_without_processor_handles_rejections(p1):
    """Los rechazos no deben necesitar un procesador."""
    controller = CartController(MagicMock(products=[p1]), None)

    result = controller.checkout(Cart(), ShippingDetails())

    assert result.model_state.is_valid is False


def test_find_product_by_id_uses_catalog_products():
    """Debe resolver productos recorriendo la colección del catálogo."""
    product = Product(product_id=7, name="Bat")
    controller = CartController(MagicMock(products=[product]), MagicMock())
    cart = Cart()

    controller.add_to_cart(cart, 7, None)

    assert cart.lines[0].product is product
