"""
Pydantic schemas for product import endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...models.product import BatchItemError, BatchResult, ProductCandidate


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductItem(CamelModel):
    """A submitted row as it was understood by the importer."""

    name: str = Field(..., description="Trimmed product name")
    description: str = Field("", description="Trimmed description (may be empty)")
    price: Optional[Decimal] = Field(None, description="Parsed price, null when not a number")

    @classmethod
    def from_candidate(cls, candidate: ProductCandidate) -> "ProductItem":
        return cls(**candidate.to_dict())


class ViolationResponse(CamelModel):
    field: str
    rule: str
    message: str


class BatchItemErrorResponse(CamelModel):
    item: ProductItem
    error: str = Field(..., description="Why the row was not imported")
    violations: Optional[List[ViolationResponse]] = Field(
        None, description="Field violations when the row failed validation"
    )

    @classmethod
    def from_error(cls, error: BatchItemError) -> "BatchItemErrorResponse":
        violations = None
        if error.violations is not None:
            violations = [
                ViolationResponse(field=v.field, rule=v.rule, message=v.message)
                for v in error.violations
            ]
        return cls(
            item=ProductItem.from_candidate(error.item),
            error=error.reason,
            violations=violations,
        )


class ProductBatchResponse(CamelModel):
    """Per-row outcome of one imported file."""

    message: str = Field(default="Processing completed")
    success_count: int = Field(..., ge=0)
    error_count: int = Field(..., ge=0)
    errors: List[BatchItemErrorResponse] = Field(default_factory=list)

    @classmethod
    def from_result(
        cls, result: BatchResult, message: str = "Processing completed"
    ) -> "ProductBatchResponse":
        return cls(
            message=message,
            success_count=result.success_count,
            error_count=result.error_count,
            errors=[BatchItemErrorResponse.from_error(error) for error in result.errors],
        )


class QueuedImportResponse(CamelModel):
    task_id: str = Field(..., description="Celery task ID")
    filename: str = Field(..., description="Uploaded filename")
    status: str = Field(default="queued", description="Task status")
    message: str = Field(..., description="Result message")


class ProductResponse(CamelModel):
    """A stored product."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
    price: Decimal
    created_at: Optional[datetime] = None
