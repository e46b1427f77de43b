"""
Action results returned by the cart controller.

The controller is framework independent: it returns plain result objects
and the HTTP layer decides how to render them.
"""

from dataclasses import dataclass, field
from typing import Any

from app.domain.models import Cart
from app.utils.error_handler import ErrorCode


class ModelState:
    """
    Validation state accumulated for a request.

    Errors are grouped by field key; the empty key holds model-level errors
    that do not belong to a single field.
    """

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}
        self._codes: list[ErrorCode] = []

    def add_model_error(self, key: str, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR) -> None:
        """Record an error message for a field (or "" for the whole model)."""
        self._errors.setdefault(key, []).append(message)
        if code not in self._codes:
            self._codes.append(code)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> dict[str, list[str]]:
        """Copy of the error messages by key."""
        return {key: list(messages) for key, messages in self._errors.items()}

    @property
    def error_codes(self) -> list[ErrorCode]:
        """Distinct error codes in the order they were first recorded."""
        return list(self._codes)

    def __contains__(self, key: str) -> bool:
        return key in self._errors

    def __repr__(self) -> str:
        return f"ModelState(is_valid={self.is_valid}, errors={self._errors})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "error_codes": [code.value for code in self._codes],
        }


@dataclass
class ViewResult:
    """
    Result that renders a view.

    An empty view_name means the default view of the action.
    """

    view_name: str = ""
    model: Any = None
    model_state: ModelState = field(default_factory=ModelState)


@dataclass
class RedirectResult:
    """Result that redirects to another controller action."""

    route_values: dict[str, Any] = field(default_factory=dict)

    @property
    def action(self) -> str | None:
        return self.route_values.get("action")

    @classmethod
    def to_action(cls, action: str, **route_values: Any) -> "RedirectResult":
        return cls(route_values={"action": action, **route_values})


@dataclass
class CartIndexViewModel:
    """Model for the cart index view."""

    cart: Cart
    return_url: str | None = None
