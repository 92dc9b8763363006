"""
Data Ingestion Package
Handles CSV parsing, validation and persistence of product batches.
"""

from .csv_parser import REQUIRED_COLUMNS, parse_csv_buffer, validate_columns
from .csv_processor import BatchPersister, ProductCSVProcessor
from .errors import (
    CSVProcessingError,
    DuplicateNameError,
    EmptyTableError,
    IngestionError,
    MissingColumnsError,
    ParseFailureError,
    PersistenceError,
    StorageError,
)
from .normalizer import to_candidate
from .validators import ProductValidator

__all__ = [
    "REQUIRED_COLUMNS",
    "BatchPersister",
    "ProductCSVProcessor",
    "ProductValidator",
    "parse_csv_buffer",
    "validate_columns",
    "to_candidate",
    "CSVProcessingError",
    "DuplicateNameError",
    "EmptyTableError",
    "IngestionError",
    "MissingColumnsError",
    "ParseFailureError",
    "PersistenceError",
    "StorageError",
]

# The persistence gateway and entry points depend on the database layer.
# Import them from their modules:
#   from backend.ingestion.persistence import ProductService
#   from backend.ingestion.entrypoints import import_csv_buffer, handle_csv_job
