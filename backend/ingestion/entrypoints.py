"""
Ingestion Entry Points
Synchronous import of an uploaded buffer and handling of queued CSV jobs.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..config.settings import get_settings
from ..db.repository import ProductRepository
from ..models.product import BatchResult
from .csv_processor import ProductCSVProcessor
from .errors import CSVProcessingError
from .persistence import ProductService

logger = logging.getLogger(__name__)


@dataclass
class CSVJob:
    """A queued import: the uploaded file's name and contents."""

    filename: str
    buffer: bytes
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def separator(self) -> Optional[str]:
        return (self.options or {}).get("separator")


def build_csv_processor(session: Session, log: Optional[logging.Logger] = None) -> ProductCSVProcessor:
    """Wire the orchestrator to a SQLAlchemy-backed persistence gateway."""
    log = log or logger
    service = ProductService(ProductRepository(session), log=log)
    return ProductCSVProcessor(persister=service, log=log)


def import_csv_buffer(
    buffer: bytes,
    session: Session,
    separator: Optional[str] = None,
    log: Optional[logging.Logger] = None,
) -> BatchResult:
    """
    Import a CSV buffer and return the result to the caller.

    Raises:
        CSVProcessingError: The file is structurally unusable
    """
    separator = separator or get_settings().csv_separator
    processor = build_csv_processor(session, log)
    return processor.process_batch(buffer, separator=separator)


def handle_csv_job(job: CSVJob, session: Session, log: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """
    Process a queued CSV job.

    Nobody is waiting for the result, so it is logged and summarised, and
    failures are logged against the job's filename instead of raised.

    Returns:
        Summary with ``status`` of ``success`` or ``error``
    """
    log = log or logger
    log.info(f"Processing queued CSV file: {job.filename}")

    try:
        result = import_csv_buffer(job.buffer, session, separator=job.separator, log=log)
    except CSVProcessingError as e:
        log.error(
            f"Rejected CSV file {job.filename} ({e.kind}): {e}",
            extra={"source_file": job.filename, "error_kind": e.kind},
        )
        return {"status": "error", "filename": job.filename, "error_kind": e.kind, "error": str(e)}
    except Exception as e:
        log.error(
            f"Error processing CSV file {job.filename}: {e}",
            exc_info=True,
            extra={"source_file": job.filename, "error_kind": "unexpected"},
        )
        return {"status": "error", "filename": job.filename, "error_kind": "unexpected", "error": str(e)}

    log.info(
        f"Completed CSV file {job.filename}: "
        f"{result.success_count} succeeded, {result.error_count} failed",
        extra={"source_file": job.filename, **result.summary()},
    )
    for item_error in result.errors:
        log.warning(f"{job.filename}: '{item_error.item.name}' rejected: {item_error.reason}")

    return {"status": "success", "filename": job.filename, **result.summary()}
