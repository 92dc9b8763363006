"""
Product Persistence
Creates products one at a time and collects per-record failures.
"""

import logging
from typing import List, Optional, Sequence

from ..db.models import Product
from ..db.repository import ProductRepository
from ..models.product import BatchItemError, PersistResult, ProductCandidate
from .errors import DuplicateNameError, PersistenceError

logger = logging.getLogger(__name__)


class ProductService:
    """
    Persistence gateway for validated products.

    A batch is a sequence of independent single-record transactions; one
    failed record never rolls back or stops another.
    """

    def __init__(self, repository: ProductRepository, log: Optional[logging.Logger] = None):
        self.repository = repository
        self.log = log or logger

    def create(self, candidate: ProductCandidate) -> Product:
        """
        Store one product.

        Raises:
            DuplicateNameError: A product with the same name exists
            StorageError: The storage layer failed the write
        """
        if self.repository.exists(candidate.name):
            raise DuplicateNameError(candidate.name)
        return self.repository.create_if_absent(candidate)

    def create_batch(self, candidates: Sequence[ProductCandidate]) -> PersistResult:
        """
        Store each candidate in order.

        Returns:
            PersistResult where success_count + len(errors) == len(candidates)
        """
        result = PersistResult()

        for candidate in candidates:
            try:
                self.create(candidate)
                result.success_count += 1
            except PersistenceError as e:
                self.log.warning(f"Failed to persist product '{candidate.name}': {e}")
                result.errors.append(BatchItemError(item=candidate, reason=str(e)))

        self.log.info(
            f"Batch persistence finished: {result.success_count} created, "
            f"{len(result.errors)} failed"
        )
        return result

    def list_products(self) -> List[Product]:
        return self.repository.list_all()
