"""
Product Repository
Storage gateway for products: existence checks, guarded inserts, listing.
"""

import logging
from typing import List

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..ingestion.errors import DuplicateNameError, StorageError
from ..models.product import ProductCandidate
from .models import Product

logger = logging.getLogger(__name__)


def get_error_detail(error: BaseException) -> str:
    """
    Extract a readable reason from a database error.

    Prefers the driver's own message over SQLAlchemy's wrapper text.
    """
    if error is None:
        return "Unknown error"

    orig = getattr(error, "orig", None)
    if orig is not None:
        detail = getattr(getattr(orig, "diag", None), "message_detail", None)
        if detail:
            return str(detail)
        message = str(orig).strip()
        if message:
            return message.splitlines()[0]

    message = str(error).strip()
    return message.splitlines()[0] if message else "Database error"


class ProductRepository:
    """
    Storage gateway backed by a SQLAlchemy session.

    Every write is its own transaction: committed on success, rolled back
    on failure so the session stays usable for the next record.
    """

    def __init__(self, session: Session):
        self.session = session

    def exists(self, name: str) -> bool:
        """Whether a product with exactly this name is stored."""
        try:
            return bool(self.session.scalar(select(exists().where(Product.name == name))))
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(get_error_detail(e)) from e

    def create_if_absent(self, candidate: ProductCandidate) -> Product:
        """
        Insert a product unless the name is taken.

        The unique index on ``name`` decides; a constraint violation for a
        name that is now stored is reported as a duplicate.

        Raises:
            DuplicateNameError: The name is already stored
            StorageError: Any other storage failure
        """
        product = Product(
            name=candidate.name,
            description=candidate.description or None,
            price=candidate.price,
        )

        try:
            self.session.add(product)
            self.session.commit()
            self.session.refresh(product)
        except IntegrityError as e:
            self.session.rollback()
            if self.exists(candidate.name):
                raise DuplicateNameError(candidate.name) from e
            raise StorageError(get_error_detail(e)) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(get_error_detail(e)) from e

        return product

    def list_all(self) -> List[Product]:
        """All stored products ordered by name."""
        try:
            return list(self.session.scalars(select(Product).order_by(Product.name)))
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(get_error_detail(e)) from e
