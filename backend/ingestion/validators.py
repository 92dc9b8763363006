"""
Field-level validation for product candidates.
"""

from decimal import Decimal
from typing import List

from ..models.product import PRODUCT_NAME_MAX_LENGTH, ProductCandidate, ValidationViolation


class ProductValidator:
    """
    Check a candidate against every field rule.

    All rules run; a record collects as many violations as it breaks.
    Outcomes are returned as values, never raised.
    """

    NAME_MAX_LENGTH = PRODUCT_NAME_MAX_LENGTH

    @classmethod
    def validate(cls, candidate: ProductCandidate) -> List[ValidationViolation]:
        """Return every violation of ``candidate`` (empty when valid)."""
        violations: List[ValidationViolation] = []
        violations.extend(cls.check_name(candidate.name))
        violations.extend(cls.check_description(candidate.description))
        violations.extend(cls.check_price(candidate.price))
        return violations

    @classmethod
    def is_valid(cls, candidate: ProductCandidate) -> bool:
        return not cls.validate(candidate)

    @classmethod
    def check_name(cls, name) -> List[ValidationViolation]:
        if not isinstance(name, str) or not name.strip():
            return [ValidationViolation("name", "required", "Product name is required")]

        if len(name) > cls.NAME_MAX_LENGTH:
            return [
                ValidationViolation(
                    "name",
                    "maxLength",
                    f"Product name must be at most {cls.NAME_MAX_LENGTH} characters",
                )
            ]

        return []

    @classmethod
    def check_description(cls, description) -> List[ValidationViolation]:
        if description is not None and not isinstance(description, str):
            return [ValidationViolation("description", "string", "Description must be text")]
        return []

    @classmethod
    def check_price(cls, price) -> List[ValidationViolation]:
        # A non-numeric price has no magnitude, so "positive" is not evaluated
        if not isinstance(price, Decimal) or not price.is_finite():
            return [ValidationViolation("price", "numeric", "Price must be a number")]

        if price <= 0:
            return [ValidationViolation("price", "positive", "Price must be positive")]

        return []
