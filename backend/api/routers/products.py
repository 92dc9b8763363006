"""
Product Endpoints
POST /api/v1/products/upload - Import a product CSV and return per-row results
POST /api/v1/products/upload/async - Queue a product CSV for background import
GET /api/v1/products - List stored products
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ...config.settings import Settings, get_settings
from ...ingestion.entrypoints import import_csv_buffer
from ...ingestion.errors import StorageError
from ...ingestion.persistence import ProductService
from ..dependencies import get_db, get_product_service
from ..errors import APIError, EmptyFileError, FileTooLargeError, InvalidFileTypeError
from ..schemas.products import ProductBatchResponse, ProductResponse, QueuedImportResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/products", tags=["products"])

ALLOWED_EXTENSIONS = (".csv",)


async def read_csv_upload(file: Optional[UploadFile], settings: Settings) -> bytes:
    """
    Check an upload and return its contents.

    Raises:
        EmptyFileError: No file, or a zero-byte file
        InvalidFileTypeError: The filename does not end in .csv
        FileTooLargeError: The file exceeds UPLOAD_MAX_BYTES
    """
    if file is None or not file.filename:
        raise EmptyFileError()

    if not file.filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise InvalidFileTypeError(["CSV"], file.filename)

    buffer = await file.read(settings.upload_max_bytes + 1)
    if not buffer:
        raise EmptyFileError()
    if len(buffer) > settings.upload_max_bytes:
        raise FileTooLargeError(settings.upload_max_bytes)

    return buffer


@router.post("/upload", response_model=ProductBatchResponse, status_code=status.HTTP_200_OK)
async def upload_products(
    file: Optional[UploadFile] = File(None, description="CSV file with name, description, price"),
    separator: Optional[str] = Form(None, description="Field separator (default from settings)"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ProductBatchResponse:
    """
    Import a product CSV synchronously.

    Every row is validated independently; valid rows are stored unless the
    name already exists. The response lists each rejected row with its
    reason. A file that cannot be parsed or lacks required columns is
    rejected as a whole with 422.
    """
    buffer = await read_csv_upload(file, settings)

    try:
        result = await run_in_threadpool(
            import_csv_buffer, buffer, db, separator or settings.csv_separator
        )
    except Exception as e:
        logger.error(f"Error processing CSV file {file.filename}: {e}")
        raise

    logger.info(
        f"Imported {file.filename}: {result.success_count} succeeded, {result.error_count} failed"
    )
    return ProductBatchResponse.from_result(result)


@router.post(
    "/upload/async", response_model=QueuedImportResponse, status_code=status.HTTP_202_ACCEPTED
)
async def upload_products_async(
    file: Optional[UploadFile] = File(None, description="CSV file with name, description, price"),
    separator: Optional[str] = Form(None, description="Field separator (default from settings)"),
    settings: Settings = Depends(get_settings),
) -> QueuedImportResponse:
    """
    Queue a product CSV for background import.

    Returns immediately with the task ID. The import result is only logged
    by the worker.
    """
    buffer = await read_csv_upload(file, settings)

    try:
        from ...tasks.ingestion import enqueue_product_csv

        result = enqueue_product_csv(file.filename, buffer, separator)
    except Exception as e:
        logger.error(f"Failed to queue CSV file {file.filename}: {e}", exc_info=True)
        raise APIError(
            message=f"Failed to queue CSV file: {e}",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"filename": file.filename},
        )

    return QueuedImportResponse(
        task_id=result.id,
        filename=file.filename,
        status="queued",
        message=f"CSV file {file.filename} queued for import",
    )


@router.get("", response_model=List[ProductResponse], status_code=status.HTTP_200_OK)
def list_products(service: ProductService = Depends(get_product_service)) -> List[ProductResponse]:
    """List stored products ordered by name."""
    try:
        products = service.list_products()
    except StorageError as e:
        raise APIError(
            message=f"Failed to load products: {e}",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return [ProductResponse.model_validate(product) for product in products]
