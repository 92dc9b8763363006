"""
API Schemas
Pydantic request/response models for the HTTP layer.
"""

from .products import (
    BatchItemErrorResponse,
    ProductBatchResponse,
    ProductItem,
    ProductResponse,
    QueuedImportResponse,
    ViolationResponse,
)

__all__ = [
    "BatchItemErrorResponse",
    "ProductBatchResponse",
    "ProductItem",
    "ProductResponse",
    "QueuedImportResponse",
    "ViolationResponse",
]
