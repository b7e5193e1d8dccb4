#!/usr/bin/env python3
"""Provision the skill attributes table.

Creates the DynamoDB table used by the persistence adapter if it does not
already exist, and waits until it is active. Safe to run repeatedly.

Usage:
    python scripts/create_table.py --table-name SkillAttributes
    python scripts/create_table.py  # uses PERSISTENCE_TABLE_NAME

This script is meant for deploy pipelines and local setup against DynamoDB Local
(set DYNAMODB_ENDPOINT_URL).
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import the package from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from dynamodb_persistence.adapter import AdapterConfig, create_adapter_from_config
from dynamodb_persistence.config import Config
from dynamodb_persistence.constants import (
    DEFAULT_PARTITION_KEY_NAME,
    DEFAULT_READ_CAPACITY_UNITS,
    DEFAULT_WRITE_CAPACITY_UNITS,
)
from dynamodb_persistence.exceptions import PersistenceException
from dynamodb_persistence.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the skill attributes table if missing")
    parser.add_argument(
        "--table-name",
        default=Config.PERSISTENCE_TABLE_NAME,
        help="Table name (default: PERSISTENCE_TABLE_NAME)",
    )
    parser.add_argument(
        "--partition-key-name",
        default=DEFAULT_PARTITION_KEY_NAME,
        help=f"Partition key attribute (default: {DEFAULT_PARTITION_KEY_NAME})",
    )
    parser.add_argument("--read-capacity", type=int, default=DEFAULT_READ_CAPACITY_UNITS)
    parser.add_argument("--write-capacity", type=int, default=DEFAULT_WRITE_CAPACITY_UNITS)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Ensure the table exists.

    Returns:
        0 if the table exists (created or already present), 1 on failure
    """
    args = parse_args(argv)

    errors = Config.validate(require_table_name=not args.table_name)
    if errors:
        for error in errors:
            logger.error("Invalid configuration", extra={"error": error})
        return 1

    try:
        config = AdapterConfig(
            table_name=args.table_name,
            partition_key_name=args.partition_key_name,
            auto_create_table=True,
            read_capacity_units=args.read_capacity,
            write_capacity_units=args.write_capacity,
        )
        create_adapter_from_config(config)
    except PersistenceException as e:
        logger.error(
            "Table provisioning failed",
            extra={"table_name": args.table_name, "error": str(e)},
        )
        return 1

    logger.info("Table is ready", extra={"table_name": args.table_name})
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
