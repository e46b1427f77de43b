"""
EmailOrderProcessor - submits orders by email.

The order summary is sent to the store's order mailbox over SMTP, or
written as an .eml file into a pickup directory when
ORDER_EMAIL_WRITE_AS_FILE is enabled (development default).
"""

import logging
import smtplib
import uuid
from datetime import datetime, timezone
from email.message import EmailMessage
from pathlib import Path

from app.core.config import Settings, get_settings
from app.core.logging_config import LogContext
from app.domain.models import Cart, ShippingDetails
from app.utils.error_handler import OrderProcessingException

logger = logging.getLogger(__name__)


class EmailOrderProcessor:
    """
    Order processor that emails the order summary.

    Implements IOrderProcessor.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize processor.

        Args:
            settings: Application settings; defaults to get_settings()
        """
        self.settings = settings or get_settings()

    def process_order(self, cart: Cart, shipping_details: ShippingDetails) -> None:
        """
        Send the order for a validated cart.

        Args:
            cart: Non-empty cart
            shipping_details: Validated shipping details

        Raises:
            OrderProcessingException: If the email cannot be sent or written
        """
        order_ref = uuid.uuid4().hex[:12].upper()

        with LogContext(order_ref=order_ref):
            message = self.build_message(cart, shipping_details, order_ref)

            if self.settings.ORDER_EMAIL_WRITE_AS_FILE:
                path = self._write_to_pickup_directory(message, order_ref)
                logger.info(f"Order {order_ref} written to {path}")
            else:
                self._send(message, order_ref)
                logger.info(f"Order {order_ref} emailed to {self.settings.ORDER_EMAIL_TO}")

    def build_message(self, cart: Cart, shipping_details: ShippingDetails, order_ref: str) -> EmailMessage:
        """Build the order email."""
        message = EmailMessage()
        message["Subject"] = f"New order submitted! ({order_ref})"
        message["From"] = self.settings.ORDER_EMAIL_FROM
        message["To"] = self.settings.ORDER_EMAIL_TO
        message["Date"] = datetime.now(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S +0000")
        message.set_content(format_order_body(cart, shipping_details, self.settings.CURRENCY))
        return message

    def _write_to_pickup_directory(self, message: EmailMessage, order_ref: str) -> Path:
        directory = Path(self.settings.ORDER_EMAIL_FILE_LOCATION)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / f"order_{order_ref}.eml"
            path.write_bytes(bytes(message))
            return path
        except OSError as e:
            raise OrderProcessingException(
                message=f"Could not write order {order_ref} to {directory}: {e}",
                processor="email_file",
                details={"order_ref": order_ref},
            ) from e

    def _send(self, message: EmailMessage, order_ref: str) -> None:
        settings = self.settings
        smtp_class = smtplib.SMTP_SSL if settings.SMTP_USE_SSL else smtplib.SMTP

        try:
            with smtp_class(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT) as smtp:
                if not settings.SMTP_USE_SSL:
                    smtp.starttls()
                if settings.SMTP_USERNAME:
                    smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to email order {order_ref}: {e}")
            raise OrderProcessingException(
                message=f"Could not email order {order_ref}: {e}",
                processor="email_smtp",
                details={"order_ref": order_ref, "smtp_host": settings.SMTP_HOST},
            ) from e


def format_order_body(cart: Cart, shipping_details: ShippingDetails, currency: str = "USD") -> str:
    """
    Plain-text order summary.

    Args:
        cart: Cart being ordered
        shipping_details: Where to ship
        currency: Currency code for amounts

    Returns:
        str: Email body
    """
    lines = ["A new order has been submitted", "---", "Items:"]

    for line in cart.lines:
        lines.append(f"{line.quantity} x {line.product.name} (subtotal: {line.subtotal(currency)})")

    lines.append(f"Total order value: {cart.total(currency)}")
    lines.extend(["---", "Ship to:", shipping_details.name])
    lines.extend(shipping_details.address_lines)
    lines.extend(
        value
        for value in (shipping_details.city, shipping_details.state, shipping_details.country, shipping_details.zip)
        if value
    )
    lines.extend(["---", f"Gift wrap: {'Yes' if shipping_details.gift_wrap else 'No'}"])

    return "\n".join(lines)
