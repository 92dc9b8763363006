"""
Data Ingestion Tasks
Background processing of uploaded product CSV files
"""

import base64
import binascii
import logging
from typing import Any, Dict, Optional

from ..db.session import get_session_factory
from ..ingestion.entrypoints import CSVJob, handle_csv_job
from .celery_app import app

logger = logging.getLogger(__name__)


@app.task(bind=True, name="tasks.process_product_csv", max_retries=0)
def process_product_csv(
    self, filename: str, buffer_b64: str, options: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Import a product CSV file delivered through the queue.

    Args:
        filename: Original upload filename (used to attribute log entries)
        buffer_b64: File contents, base64-encoded for the JSON serializer
        options: Optional processing options (``separator``)

    Returns:
        Summary dictionary; failures are logged, never raised
    """
    try:
        buffer = base64.b64decode(buffer_b64, validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        logger.error(f"Dropping CSV job {filename}: payload is not valid base64 ({e})")
        return {"status": "error", "filename": filename, "error_kind": "bad_payload", "error": str(e)}

    job = CSVJob(filename=filename, buffer=buffer, options=options or {})

    try:
        session = get_session_factory()()
    except Exception as e:
        logger.error(f"Cannot open a database session for CSV file {filename}: {e}", exc_info=True)
        return {"status": "error", "filename": filename, "error_kind": "storage", "error": str(e)}

    try:
        return handle_csv_job(job, session, log=logger)
    finally:
        session.close()


def enqueue_product_csv(filename: str, buffer: bytes, separator: Optional[str] = None):
    """
    Publish a CSV file for background import.

    Returns:
        The Celery AsyncResult of the queued task
    """
    options = {"separator": separator} if separator else {}
    result = process_product_csv.delay(
        filename=filename,
        buffer_b64=base64.b64encode(buffer).decode("ascii"),
        options=options,
    )
    logger.info(f"Queued CSV file {filename}: task_id={result.id}")
    return result
