"""
CSV Parsing Helpers
Decodes an uploaded buffer, parses it into raw rows and checks the column contract.
"""

import io
import logging
import re
import warnings
from typing import Dict, Iterable, List, Optional

import chardet
import pandas as pd

from .errors import EmptyTableError, MissingColumnsError, ParseFailureError

logger = logging.getLogger(__name__)

RawRow = Dict[str, str]

REQUIRED_COLUMNS = ("name", "price")

ENCODING_SAMPLE_BYTES = 10000


def detect_csv_encoding(buffer: bytes, log: Optional[logging.Logger] = None) -> Optional[str]:
    """
    Detect the encoding of a CSV buffer using chardet.

    Args:
        buffer: Raw file contents
        log: Logger to report the detection to

    Returns:
        Detected encoding, or None when chardet cannot tell
    """
    log = log or logger
    result = chardet.detect(buffer[:ENCODING_SAMPLE_BYTES])
    encoding = result["encoding"]
    confidence = result["confidence"] or 0.0

    # ASCII is a subset of UTF-8
    if encoding and encoding.lower() == "ascii":
        log.debug("Detected ASCII, using UTF-8")
        return "utf-8"

    log.info(f"Detected encoding: {encoding} (confidence: {confidence:.2%})")
    return encoding


def decode_csv_buffer(buffer: bytes, log: Optional[logging.Logger] = None) -> str:
    """Decode as UTF-8 (BOM tolerated), falling back to the detected encoding."""
    try:
        return buffer.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    encoding = detect_csv_encoding(buffer, log)
    if not encoding:
        raise ParseFailureError("could not detect file encoding")

    try:
        return buffer.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise ParseFailureError(f"file is not valid {encoding}: {e}") from e


def parse_csv_buffer(
    buffer: bytes, separator: str = ",", log: Optional[logging.Logger] = None
) -> List[RawRow]:
    """
    Parse a delimited-text buffer into raw rows.

    Header names are trimmed; every value is kept as a string. Blank lines
    are skipped. A header without data rows yields an empty list. A row with
    more fields than the header fails the whole buffer.

    Args:
        buffer: Raw file contents
        separator: Field separator (multi-character separators are literal)
        log: Logger for parse diagnostics

    Returns:
        One mapping of column name to raw value per data line

    Raises:
        ParseFailureError: The buffer cannot be decoded or tokenized
    """
    log = log or logger

    if not separator:
        raise ParseFailureError("separator must not be empty")
    if isinstance(buffer, str):
        buffer = buffer.encode("utf-8")

    text = decode_csv_buffer(buffer, log)
    if not text.strip():
        return []

    single_char = len(separator) == 1

    try:
        # A too-long first data row only warns; fail it like any later row
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(text),
                sep=separator if single_char else re.escape(separator),
                engine="c" if single_char else "python",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                index_col=False,
            )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, pd.errors.ParserWarning, ValueError) as e:
        log.error(f"Failed to parse CSV buffer: {e}")
        raise ParseFailureError(str(e)) from e

    df.columns = [str(column).strip() for column in df.columns]
    df = df.fillna("")

    rows = [
        {key: value if isinstance(value, str) else str(value) for key, value in record.items()}
        for record in df.to_dict("records")
    ]

    log.debug(f"CSV parsed: {len(rows)} rows, columns={list(df.columns)}")
    return rows


def validate_columns(
    rows: List[RawRow],
    required: Iterable[str] = REQUIRED_COLUMNS,
    log: Optional[logging.Logger] = None,
) -> None:
    """
    Check that the table exposes every required column.

    Only the first row's keys are inspected, compared lower-cased and
    trimmed. Extra columns are ignored.

    Raises:
        EmptyTableError: There are no rows at all
        MissingColumnsError: At least one required column is absent
    """
    log = log or logger
    required = list(required)

    if not rows:
        raise EmptyTableError()

    available = {str(column).strip().lower() for column in rows[0].keys()}
    missing = [column for column in required if column.strip().lower() not in available]

    if missing:
        log.error(
            f"Required CSV columns not found: missing={missing}, "
            f"required={required}, available={sorted(available)}"
        )
        raise MissingColumnsError(missing, required)

    log.debug(f"CSV columns validated: {sorted(available)}")
