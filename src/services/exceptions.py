"""Product domain exceptions.

Raised by the service layer and the storage gateways. The API layer
translates them into HTTP responses in ``src.api.errors``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """A single structural constraint broken by a product payload."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ProductServiceError(Exception):
    """Base class for every error surfaced by the product service."""

    default_message = "product service error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIdentifier(ProductServiceError):
    """The supplied identifier is not a valid document id."""

    default_message = "invalid product identifier"

    def __init__(self, identifier: str, message: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(message)


class ValidationFailed(ProductServiceError):
    """A product payload broke one or more structural constraints."""

    default_message = "product validation failed"

    def __init__(
        self, violations: Sequence[Violation], message: str | None = None
    ) -> None:
        self.violations = list(violations)
        super().__init__(message)


class MalformedPayload(ProductServiceError):
    """The request body could not be parsed into a product."""

    default_message = "malformed product payload"


class NotFound(ProductServiceError):
    """No product matches the supplied identifier."""

    default_message = "product not found"


class GatewayError(ProductServiceError):
    """The underlying document store call failed."""

    default_message = "product store unavailable"


class InvalidFilter(ProductServiceError):
    """A query parameter name cannot be used as a product field."""

    default_message = "invalid filter field"

    def __init__(self, field_name: str, message: str | None = None) -> None:
        self.field_name = field_name
        super().__init__(message)
