"""
Tests for product field validation.
"""

from decimal import Decimal

import pytest

from backend.ingestion.validators import ProductValidator
from backend.models.product import PRICE_NAN, ProductCandidate


def _rules(candidate):
    return [(v.field, v.rule) for v in ProductValidator.validate(candidate)]


def test_valid_candidate_has_no_violations():
    candidate = ProductCandidate(name="Pen", description="Blue", price=Decimal("10.50"))

    assert ProductValidator.validate(candidate) == []
    assert ProductValidator.is_valid(candidate)


def test_empty_description_is_allowed():
    assert ProductValidator.is_valid(ProductCandidate("Pen", "", Decimal("1")))


def test_name_required():
    assert _rules(ProductCandidate("", "", Decimal("1"))) == [("name", "required")]


def test_whitespace_only_name_is_missing():
    assert _rules(ProductCandidate("   ", "", Decimal("1"))) == [("name", "required")]


def test_name_of_exactly_max_length_is_valid():
    assert ProductValidator.is_valid(ProductCandidate("x" * 100, "", Decimal("1")))


def test_name_over_max_length():
    violations = ProductValidator.validate(ProductCandidate("x" * 101, "", Decimal("1")))

    assert [(v.field, v.rule) for v in violations] == [("name", "maxLength")]
    assert violations[0].message == "Product name must be at most 100 characters"


def test_name_length_counts_characters_not_bytes():
    assert ProductValidator.is_valid(ProductCandidate("é" * 100, "", Decimal("1")))


@pytest.mark.parametrize("price", [Decimal("0"), Decimal("-0.01"), Decimal("-5")])
def test_price_must_be_positive(price):
    violations = ProductValidator.validate(ProductCandidate("Pen", "", price))

    assert [(v.field, v.rule) for v in violations] == [("price", "positive")]
    assert violations[0].message == "Price must be positive"


def test_smallest_positive_price_is_valid():
    assert ProductValidator.is_valid(ProductCandidate("Pen", "", Decimal("0.01")))


def test_non_numeric_price_reports_only_numeric():
    violations = ProductValidator.validate(ProductCandidate("Pen", "", PRICE_NAN))

    assert [(v.field, v.rule) for v in violations] == [("price", "numeric")]
    assert violations[0].message == "Price must be a number"


def test_non_decimal_price_is_not_numeric():
    assert _rules(ProductCandidate("Pen", "", "10")) == [("price", "numeric")]


def test_non_text_description():
    assert _rules(ProductCandidate("Pen", 42, Decimal("1"))) == [("description", "string")]


def test_all_violations_are_collected_in_field_order():
    violations = ProductValidator.validate(ProductCandidate("", "", PRICE_NAN))

    assert [(v.field, v.rule) for v in violations] == [("name", "required"), ("price", "numeric")]
    assert violations[0].message == "Product name is required"


def test_long_name_and_negative_price():
    assert _rules(ProductCandidate("x" * 150, "", Decimal("-1"))) == [
        ("name", "maxLength"),
        ("price", "positive"),
    ]


def test_validate_is_repeatable_and_leaves_candidate_unchanged():
    candidate = ProductCandidate("", "", PRICE_NAN)

    first = ProductValidator.validate(candidate)
    second = ProductValidator.validate(candidate)

    assert first == second
    assert candidate.name == ""
    assert candidate.description == ""
    assert candidate.price.is_nan()
