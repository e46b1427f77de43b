"""
ShippingDetailsValidator service for validating checkout address data.

This service follows SRP by focusing only on field-level validation of
shipping details. It reports problems into a ModelState rather than
raising, so the checkout form can be redisplayed with every error at once.
"""

import logging

from app.domain.models import ShippingDetails
from app.services.cart.results import ModelState
from app.utils.error_handler import ErrorCode

logger = logging.getLogger(__name__)

# field -> message shown when the field is blank
REQUIRED_FIELDS: dict[str, str] = {
    "name": "Please enter a name",
    "line1": "Please enter the first address line",
    "city": "Please enter a city name",
    "state": "Please enter a state name",
    "country": "Please enter a country name",
}


class ShippingDetailsValidator:
    """
    Validates shipping details submitted at checkout.

    Responsibilities:
    - Required fields must be non-blank
    - Text fields must not exceed the configured maximum length
    """

    def __init__(self, required_fields: dict[str, str] | None = None, max_length: int = 100):
        """
        Initialize validator.

        Args:
            required_fields: Mapping of field name to error message.
                             Defaults to REQUIRED_FIELDS
            max_length: Maximum length accepted for any text field
        """
        self.required_fields = required_fields if required_fields is not None else REQUIRED_FIELDS
        self.max_length = max_length

    def validate(self, shipping_details: ShippingDetails, model_state: ModelState | None = None) -> ModelState:
        """
        Validates shipping details and records errors in the model state.

        Args:
            shipping_details: Details to validate
            model_state: Existing state to add errors to; a new one is created if omitted

        Returns:
            ModelState: The state with any validation errors added
        """
        model_state = model_state if model_state is not None else ModelState()

        for field_name, message in self.required_fields.items():
            value = getattr(shipping_details, field_name, "")
            if not value or not str(value).strip():
                model_state.add_model_error(field_name, message, ErrorCode.INVALID_SHIPPING_DETAILS)

        for field_name, value in shipping_details.to_dict().items():
            if isinstance(value, str) and len(value) > self.max_length:
                model_state.add_model_error(
                    field_name,
                    f"{field_name} must be at most {self.max_length} characters",
                    ErrorCode.INVALID_SHIPPING_DETAILS,
                )

        if not model_state.is_valid:
            logger.debug(f"Shipping details validation failed: {model_state.errors}")

        return model_state
