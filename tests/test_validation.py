"""Tests for structural product validation."""

import pytest

from src.models.product import Product
from src.services.exceptions import ValidationFailed, Violation
from src.services.validation import (
    check_currency,
    check_discount,
    check_name,
    check_price,
    check_vendor,
    collect_violations,
    validate_product,
)


def _product(**overrides):
    fields = {
        "product_name": "macbook",
        "price": 250,
        "currency": "USD",
        "vendor": "Apple",
    }
    fields.update(overrides)
    return Product.model_validate(fields)


def test_valid_product_has_no_violations():
    product = _product()

    assert collect_violations(product) == []
    assert validate_product(product) is product


def test_name_longer_than_ten_characters_is_rejected():
    assert check_name(_product(product_name="a" * 10)) == []
    assert check_name(_product(product_name="a" * 11)) == [
        Violation("product_name", "must be at most 10 characters")
    ]


def test_price_ceiling():
    assert check_price(_product(price=2000)) == []
    assert check_price(_product(price=2001))[0].field == "price"


def test_currency_must_have_three_characters():
    assert check_currency(_product(currency="SGD")) == []
    assert check_currency(_product(currency="US"))[0].field == "currency"
    assert check_currency(_product(currency="USDT"))[0].field == "currency"


def test_vendor_required():
    assert check_vendor(_product(vendor=""))[0].message == "is required"


def test_missing_fields_are_all_reported():
    product = Product.model_validate({})

    violations = collect_violations(product)

    assert [v.field for v in violations] == [
        "product_name",
        "price",
        "currency",
        "vendor",
    ]
    assert all(v.message == "is required" for v in violations)


def test_validate_product_raises_with_violations():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_product(_product(product_name="a" * 11, price=5000))

    assert [v.field for v in exc_info.value.violations] == ["product_name", "price"]


def test_custom_check_list():
    product = _product(product_name="a" * 11)

    assert collect_violations(product, checks=[check_vendor]) == []


def test_zero_price_counts_as_missing():
    assert check_price(_product(price=0)) == [Violation("price", "is required")]


def test_integers_must_fit_in_64_bits():
    assert check_discount(_product(discount=2**63 - 1)) == []
    assert check_discount(_product(discount=10**20)) == [
        Violation("discount", "must fit in a signed 64-bit integer")
    ]
    assert check_price(_product(price=-(2**63) - 1)) == [
        Violation("price", "must fit in a signed 64-bit integer")
    ]


def test_oversized_discount_fails_validation():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_product(_product(discount=10**20))

    assert [v.field for v in exc_info.value.violations] == ["discount"]
