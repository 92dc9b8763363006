"""
Row Normalizer
Turns one raw CSV row into a typed product candidate.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Mapping, Optional

from ..models.product import PRICE_NAN, PRICE_SCALE, ProductCandidate

# Plain decimal literal: optional sign, dot as decimal separator, optional exponent
_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def _lookup(row: Mapping[str, str], column: str) -> Optional[str]:
    """Find a column value, ignoring header case and surrounding whitespace."""
    if column in row:
        return row[column]
    for key, value in row.items():
        if str(key).strip().lower() == column:
            return value
    return None


def _clean_text(value) -> str:
    if value is None or not isinstance(value, str):
        return ""
    return value.strip()


def parse_price(raw) -> Decimal:
    """
    Parse a raw price string.

    Returns PRICE_NAN when the value is absent, empty or not a plain
    decimal number. Currency symbols and thousands separators are not
    accepted. The value is rounded half up to two decimal places, the
    precision prices are stored with.
    """
    if not isinstance(raw, str):
        return PRICE_NAN

    raw = raw.strip()
    if not raw or not _DECIMAL_PATTERN.match(raw):
        return PRICE_NAN

    try:
        price = Decimal(raw)
    except InvalidOperation:
        return PRICE_NAN

    try:
        return price.quantize(PRICE_SCALE, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits to round; left for storage to reject
        return price


def to_candidate(row: Mapping[str, str]) -> ProductCandidate:
    """Normalize a raw row. Never raises."""
    return ProductCandidate(
        name=_clean_text(_lookup(row, "name")),
        description=_clean_text(_lookup(row, "description")),
        price=parse_price(_lookup(row, "price")),
    )
