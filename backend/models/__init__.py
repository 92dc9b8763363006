"""
Data Models Package
Domain records used by the ingestion pipeline.
"""

from .product import (
    PRICE_NAN,
    PRICE_SCALE,
    BatchItemError,
    BatchResult,
    PersistResult,
    ProductCandidate,
    ValidationViolation,
)

__all__ = [
    "PRICE_NAN",
    "PRICE_SCALE",
    "BatchItemError",
    "BatchResult",
    "PersistResult",
    "ProductCandidate",
    "ValidationViolation",
]
