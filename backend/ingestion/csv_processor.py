"""
CSV Ingestion Pipeline
Parses a product CSV buffer, validates every row and persists the valid ones.
"""

import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from ..models.product import BatchItemError, BatchResult, PersistResult, ProductCandidate
from .csv_parser import REQUIRED_COLUMNS, RawRow, parse_csv_buffer, validate_columns
from .normalizer import to_candidate
from .validators import ProductValidator

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "validation failed"


class BatchPersister(Protocol):
    """Anything that can store a sequence of validated products."""

    def create_batch(self, candidates: Sequence[ProductCandidate]) -> PersistResult:
        ...


class ProductCSVProcessor:
    """
    Batch orchestrator.

    Validates every row first, then persists all valid rows, so input
    problems and storage conflicts are reported separately in one result.
    """

    def __init__(
        self,
        persister: BatchPersister,
        validator: type = ProductValidator,
        required_columns: Sequence[str] = REQUIRED_COLUMNS,
        log: Optional[logging.Logger] = None,
    ):
        """
        Initialize the processor.

        Args:
            persister: Storage capability receiving the valid records
            validator: Class exposing ``validate(candidate)``
            required_columns: Columns the header must contain
            log: Logger for progress and row diagnostics
        """
        self.persister = persister
        self.validator = validator
        self.required_columns = tuple(required_columns)
        self.log = log or logger

    def process_batch(self, buffer: bytes, separator: str = ",") -> BatchResult:
        """
        Process one CSV file.

        Args:
            buffer: Raw file contents
            separator: Field separator

        Returns:
            Merged result; validation errors come before persistence errors

        Raises:
            CSVProcessingError: Parse failure, empty table or missing columns
        """
        rows = parse_csv_buffer(buffer, separator or ",", self.log)
        validate_columns(rows, self.required_columns, self.log)

        self.log.info(f"Processing {len(rows)} CSV rows")

        valid_records, validation_errors = self.rows_to_candidates(rows)
        persist_result = self.persister.create_batch(valid_records)

        result = BatchResult(
            success_count=persist_result.success_count,
            errors=validation_errors + list(persist_result.errors),
        )

        self.log.info(
            f"CSV processing completed: {result.success_count} succeeded, "
            f"{result.error_count} failed "
            f"({len(validation_errors)} invalid, {len(persist_result.errors)} not persisted)"
        )
        return result

    def rows_to_candidates(
        self, rows: List[RawRow]
    ) -> Tuple[List[ProductCandidate], List[BatchItemError]]:
        """Normalize and validate rows, keeping original order in both outputs."""
        valid_records: List[ProductCandidate] = []
        errors: List[BatchItemError] = []

        for row_number, row in enumerate(rows, start=1):
            candidate = to_candidate(row)
            violations = self.validator.validate(candidate)

            if violations:
                self.log.warning(
                    f"Invalid CSV row {row_number}: "
                    + ", ".join(f"{v.field}:{v.rule}" for v in violations)
                )
                errors.append(
                    BatchItemError(item=candidate, reason=VALIDATION_FAILED, violations=violations)
                )
            else:
                valid_records.append(candidate)

        return valid_records, errors
