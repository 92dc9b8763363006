#!/usr/bin/env python3
"""
Product Ingestion Script
Imports a product CSV (name, description, price) into the database.

Usage:
    python -m backend.scripts.ingest_products data/products.csv
    python -m backend.scripts.ingest_products data/products.csv --separator ";"
    python -m backend.scripts.ingest_products data/products.csv --async
"""

import argparse
import logging
import sys
from pathlib import Path

from backend.config.settings import get_settings
from backend.db.session import get_session_factory, init_db
from backend.ingestion.entrypoints import import_csv_buffer
from backend.ingestion.errors import CSVProcessingError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import product data from a CSV file")
    parser.add_argument("csv_path", type=str, help="Path to CSV file containing product data")
    parser.add_argument(
        "--separator",
        type=str,
        default=None,
        help="Field separator (default: CSV_SEPARATOR setting, ',')",
    )
    parser.add_argument(
        "--async",
        dest="queue",
        action="store_true",
        help="Queue the file for a Celery worker instead of importing it here",
    )
    parser.add_argument(
        "--init-db", action="store_true", help="Create the products table before importing"
    )
    parser.add_argument(
        "--show-errors",
        type=int,
        default=10,
        help="Number of rejected rows to print (default: 10)",
    )
    return parser


def main(argv=None) -> int:
    """Main function to run CSV ingestion."""
    configure_logging()
    args = build_parser().parse_args(argv)

    csv_path = Path(args.csv_path)
    if not csv_path.is_file():
        logger.error(f"CSV file not found: {csv_path}")
        return 1

    buffer = csv_path.read_bytes()
    separator = args.separator or get_settings().csv_separator

    if args.queue:
        from backend.tasks.ingestion import enqueue_product_csv

        result = enqueue_product_csv(csv_path.name, buffer, separator)
        logger.info(f"Queued {csv_path.name} for import: task_id={result.id}")
        return 0

    if args.init_db:
        init_db()

    session = get_session_factory()()
    try:
        result = import_csv_buffer(buffer, session, separator=separator, log=logger)
    except CSVProcessingError as e:
        logger.error(f"CSV rejected ({e.kind}): {e}")
        return 1
    finally:
        session.close()

    logger.info("=" * 60)
    logger.info("INGESTION COMPLETE")
    logger.info("=" * 60)
    logger.info(f"Products created: {result.success_count}")
    logger.info(f"Rows rejected: {result.error_count}")

    for error in result.errors[: args.show_errors]:
        violations = ""
        if error.violations:
            violations = " (" + ", ".join(f"{v.field}: {v.message}" for v in error.violations) + ")"
        logger.warning(f"  - '{error.item.name}': {error.reason}{violations}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
