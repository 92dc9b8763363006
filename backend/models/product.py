"""
Product records flowing through CSV ingestion.
Candidate records, validation violations and batch outcomes.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

# Sentinel for an absent or unparseable price
PRICE_NAN = Decimal("NaN")

PRODUCT_NAME_MAX_LENGTH = 100

# Decimal places kept for a price, matching products.price Numeric(10, 2)
PRICE_SCALE = Decimal("0.01")


@dataclass(frozen=True)
class ProductCandidate:
    """A parsed row that has not been validated yet."""

    name: str
    description: str
    price: Decimal

    @property
    def has_numeric_price(self) -> bool:
        return isinstance(self.price, Decimal) and self.price.is_finite()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; a non-numeric price becomes None."""
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price if self.has_numeric_price else None,
        }


@dataclass(frozen=True)
class ValidationViolation:
    """One failed field-level constraint."""

    field: str
    rule: str
    message: str


@dataclass
class BatchItemError:
    """Terminal failure of one row, from validation or from persistence."""

    item: ProductCandidate
    reason: str
    violations: Optional[List[ValidationViolation]] = None


@dataclass
class PersistResult:
    """Outcome of persisting a sequence of validated candidates."""

    success_count: int = 0
    errors: List[BatchItemError] = field(default_factory=list)


@dataclass
class BatchResult:
    """Merged outcome of one batch (one submitted file)."""

    success_count: int = 0
    errors: List[BatchItemError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def summary(self) -> Dict[str, int]:
        return {"success_count": self.success_count, "error_count": self.error_count}
