"""
Ingestion Errors
Structural (whole-batch) and row-level persistence failures.
"""

from typing import Sequence


class IngestionError(Exception):
    """Base exception for product ingestion errors."""


class CSVProcessingError(IngestionError):
    """
    Structural failure: the whole batch is rejected before any row is counted.
    """

    kind = "csv_processing"


class ParseFailureError(CSVProcessingError):
    """Raised when the buffer cannot be decoded or tokenized."""

    kind = "parse_failure"

    def __init__(self, detail: str):
        super().__init__(f"Failed to parse CSV: {detail}")
        self.detail = detail


class EmptyTableError(CSVProcessingError):
    """Raised when the file has no data rows."""

    kind = "empty_table"

    def __init__(self):
        super().__init__("CSV file is empty or has no data rows")


class MissingColumnsError(CSVProcessingError):
    """Raised when required columns are absent from the header."""

    kind = "missing_columns"

    def __init__(self, missing: Sequence[str], required: Sequence[str]):
        super().__init__(
            f"Missing required columns: {', '.join(missing)}. "
            f"Expected columns: {', '.join(required)}"
        )
        self.missing = list(missing)
        self.required = list(required)


class PersistenceError(IngestionError):
    """Row-scoped failure to store a validated product."""


class DuplicateNameError(PersistenceError):
    """Raised when a product with the same name is already stored."""

    def __init__(self, name: str):
        super().__init__(f"A product named '{name}' already exists")
        self.name = name


class StorageError(PersistenceError):
    """Raised when the storage layer rejects or fails a write."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail
