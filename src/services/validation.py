"""Structural validation of product payloads.

Each check is a plain function taking a ``Product`` and returning the
violations it found, so checks can be composed and tested on their own.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from src.models.product import Product
from src.services.exceptions import ValidationFailed, Violation

NAME_MAX_LENGTH = 10
PRICE_MAX = 2000
CURRENCY_LENGTH = 3

# Integers stored in MongoDB are signed 64-bit.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

FieldCheck = Callable[[Product], list[Violation]]


def check_name(product: Product) -> list[Violation]:
    if not product.name:
        return [Violation("product_name", "is required")]
    if len(product.name) > NAME_MAX_LENGTH:
        return [
            Violation(
                "product_name",
                f"must be at most {NAME_MAX_LENGTH} characters",
            )
        ]
    return []


def _out_of_int64_range(field_name: str, value: int) -> list[Violation]:
    if not INT64_MIN <= value <= INT64_MAX:
        return [Violation(field_name, "must fit in a signed 64-bit integer")]
    return []


def check_price(product: Product) -> list[Violation]:
    # A zero price counts as missing.
    if not product.price:
        return [Violation("price", "is required")]
    if product.price > PRICE_MAX:
        return [Violation("price", f"must be at most {PRICE_MAX}")]
    return _out_of_int64_range("price", product.price)


def check_discount(product: Product) -> list[Violation]:
    return _out_of_int64_range("discount", product.discount)


def check_currency(product: Product) -> list[Violation]:
    if not product.currency:
        return [Violation("currency", "is required")]
    if len(product.currency) != CURRENCY_LENGTH:
        return [
            Violation("currency", f"must be exactly {CURRENCY_LENGTH} characters")
        ]
    return []


def check_vendor(product: Product) -> list[Violation]:
    if not product.vendor:
        return [Violation("vendor", "is required")]
    return []


DEFAULT_CHECKS: tuple[FieldCheck, ...] = (
    check_name,
    check_price,
    check_discount,
    check_currency,
    check_vendor,
)


def collect_violations(
    product: Product, checks: Iterable[FieldCheck] = DEFAULT_CHECKS
) -> list[Violation]:
    violations: list[Violation] = []
    for check in checks:
        violations.extend(check(product))
    return violations


def validate_product(
    product: Product, checks: Iterable[FieldCheck] = DEFAULT_CHECKS
) -> Product:
    """Return ``product`` unchanged or raise ``ValidationFailed``."""

    violations = collect_violations(product, checks)
    if violations:
        raise ValidationFailed(violations)
    return product
