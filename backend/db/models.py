"""
SQLAlchemy ORM Models
Database table definitions using SQLAlchemy ORM.
"""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, Numeric, String, Text, TIMESTAMP, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from ..models.product import PRODUCT_NAME_MAX_LENGTH

Base = declarative_base()


class Product(Base):
    """
    Product model.

    Stores one imported product. The unique index on ``name`` is the final
    authority on duplicates; the ingestion pre-check only avoids a round trip.
    """
    __tablename__ = 'products'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    name = Column(String(PRODUCT_NAME_MAX_LENGTH), nullable=False, unique=True,
                  comment='Product name (trimmed, case-sensitive unique key)')
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint('price > 0', name='ck_products_price_positive'),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name[:30]})>"
