"""DynamoDB client construction and error classification.

The adapter never builds a client itself. Callers either inject one or let
create_persistence_adapter() build the default client here, from Config and
the ambient AWS credential chain (env vars, shared config, instance role).
"""

from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from dynamodb_persistence.config import Config
from dynamodb_persistence.constants import TABLE_IN_USE_ERROR_CODE, TABLE_NOT_FOUND_ERROR_CODE
from dynamodb_persistence.utils.logging import get_logger

logger = get_logger(__name__)


def build_dynamodb_client(
    region_name: str | None = None,
    endpoint_url: str | None = None,
) -> Any:
    """Build a low-level DynamoDB client.

    Retries and timeouts are configured on the client; the adapter itself
    never retries.

    Args:
        region_name: AWS region. Uses Config.AWS_REGION if not provided.
        endpoint_url: Custom endpoint (e.g. DynamoDB Local). Uses
            Config.DYNAMODB_ENDPOINT_URL if not provided.

    Returns:
        A boto3 DynamoDB client
    """
    region_name = region_name or Config.AWS_REGION
    if not endpoint_url:
        endpoint_url = Config.DYNAMODB_ENDPOINT_URL if Config.has_custom_endpoint() else None

    boto_config = BotoConfig(
        region_name=region_name,
        connect_timeout=Config.DYNAMODB_CONNECT_TIMEOUT,
        read_timeout=Config.DYNAMODB_READ_TIMEOUT,
        retries={"max_attempts": Config.DYNAMODB_MAX_ATTEMPTS, "mode": "standard"},
    )

    logger.debug(
        "Building DynamoDB client",
        extra={"region": region_name, "endpoint_url": endpoint_url},
    )
    return boto3.client("dynamodb", endpoint_url=endpoint_url, config=boto_config)


def error_code(error: ClientError) -> str:
    """Extract the DynamoDB error code from a ClientError."""
    return str(error.response.get("Error", {}).get("Code", ""))


def is_table_not_found(error: ClientError) -> bool:
    """Check if the error means the table is missing or still being created."""
    return error_code(error) == TABLE_NOT_FOUND_ERROR_CODE


def is_table_in_use(error: ClientError) -> bool:
    """Check if a CreateTable error means the table already exists."""
    return error_code(error) == TABLE_IN_USE_ERROR_CODE
