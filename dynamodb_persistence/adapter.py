"""DynamoDB persistence adapter for skill attributes.

Stores one item per partition key:

    {<partition_key_name>: {"S": "<key>"}, <attributes_key_name>: {"M": {...}}}

Saves overwrite the whole item, reads are strongly consistent, and deletes go
straight to DeleteItem by key (deleting a missing key is a no-op). Every
backend failure surfaces as PersistenceException; absence of data does not.

Usage:
    adapter = create_persistence_adapter("SkillAttributes", auto_create_table=True)

    attributes = adapter.get_attributes(envelope) or {}
    attributes["visits"] = attributes.get("visits", 0) + 1
    adapter.save_attributes(envelope, attributes)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from dynamodb_persistence.client import build_dynamodb_client, is_table_in_use, is_table_not_found
from dynamodb_persistence.codec import decode_attributes, encode_attributes
from dynamodb_persistence.config import Config
from dynamodb_persistence.constants import (
    DEFAULT_ATTRIBUTES_KEY_NAME,
    DEFAULT_AUTO_CREATE_TABLE,
    DEFAULT_PARTITION_KEY_NAME,
    DEFAULT_READ_CAPACITY_UNITS,
    DEFAULT_WRITE_CAPACITY_UNITS,
    PARTITION_KEY_ATTRIBUTE_TYPE,
    PARTITION_KEY_TYPE,
    TABLE_EXISTS_WAITER,
)
from dynamodb_persistence.exceptions import PersistenceException
from dynamodb_persistence.partition_keys import PartitionKeyGenerator, user_id
from dynamodb_persistence.utils.logging import get_logger

logger = get_logger(__name__)


class AbstractPersistenceAdapter(ABC):
    """Contract a host framework uses to load and store per-user attributes."""

    @abstractmethod
    def get_attributes(self, request_envelope: Any) -> dict[str, Any] | None:
        """Return the stored attributes, or None if there are none."""

    @abstractmethod
    def save_attributes(self, request_envelope: Any, attributes: Mapping[str, Any]) -> None:
        """Replace the stored attributes."""

    @abstractmethod
    def delete_attributes(self, request_envelope: Any) -> None:
        """Remove the stored attributes."""


@dataclass(frozen=True)
class AdapterConfig:
    """Immutable table descriptor and adapter options.

    Validated on construction; an invalid config never reaches the backend.
    """

    table_name: str
    partition_key_name: str = DEFAULT_PARTITION_KEY_NAME
    attributes_key_name: str = DEFAULT_ATTRIBUTES_KEY_NAME
    partition_key_generator: PartitionKeyGenerator = user_id
    auto_create_table: bool = DEFAULT_AUTO_CREATE_TABLE
    read_capacity_units: int = DEFAULT_READ_CAPACITY_UNITS
    write_capacity_units: int = DEFAULT_WRITE_CAPACITY_UNITS

    def __post_init__(self) -> None:
        if not isinstance(self.table_name, str) or not self.table_name.strip():
            raise PersistenceException("table name must be a non-empty string")
        if not isinstance(self.partition_key_name, str) or not self.partition_key_name.strip():
            raise PersistenceException("partition key name must be a non-empty string")
        if not isinstance(self.attributes_key_name, str) or not self.attributes_key_name.strip():
            raise PersistenceException("attributes key name must be a non-empty string")
        if self.partition_key_name == self.attributes_key_name:
            raise PersistenceException(
                f"partition key name and attributes key name must differ "
                f"(both are '{self.partition_key_name}')"
            )
        if not callable(self.partition_key_generator):
            raise PersistenceException("partition key generator must be callable")
        if self.read_capacity_units < 1 or self.write_capacity_units < 1:
            raise PersistenceException(
                f"capacity units must be at least 1, got read={self.read_capacity_units} "
                f"write={self.write_capacity_units}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> AdapterConfig:
        """Build a config from Config (PERSISTENCE_* env vars), with keyword overrides."""
        options: dict[str, Any] = {
            "table_name": Config.PERSISTENCE_TABLE_NAME,
            "auto_create_table": Config.PERSISTENCE_AUTO_CREATE_TABLE,
        }
        options.update(overrides)
        return cls(**options)


class DynamoDbPersistenceAdapter(AbstractPersistenceAdapter):
    """Persistence adapter storing skill attributes in a DynamoDB table.

    Construction has no side effects; call ensure_table() (or use
    create_persistence_adapter with auto_create_table=True) to provision the
    table. The client is the only shared state and boto3 clients are
    thread-safe, so one adapter can serve concurrent requests.
    """

    def __init__(self, config: AdapterConfig, dynamodb_client: Any) -> None:
        """Initialize the adapter.

        Args:
            config: Validated table descriptor and options
            dynamodb_client: Low-level boto3 DynamoDB client (or compatible)
        """
        self.config = config
        self._client = dynamodb_client

    @property
    def table_name(self) -> str:
        return self.config.table_name

    def _partition_key(self, request_envelope: Any) -> str:
        key = self.config.partition_key_generator(request_envelope)
        if not isinstance(key, str) or not key:
            raise PersistenceException(
                f"Partition key generator returned an invalid key: {key!r}"
            )
        return key

    def _key(self, partition_key: str) -> dict[str, Any]:
        return {self.config.partition_key_name: {PARTITION_KEY_ATTRIBUTE_TYPE: partition_key}}

    def _item(self, partition_key: str, attributes: Mapping[str, Any]) -> dict[str, Any]:
        item = self._key(partition_key)
        item[self.config.attributes_key_name] = encode_attributes(attributes)
        return item

    def _translate(
        self,
        error: ClientError | BotoCoreError,
        operation: str,
        missing_table_message: str,
        failure_message: str,
    ) -> PersistenceException:
        """Log a backend failure and wrap it as PersistenceException."""
        if isinstance(error, ClientError) and is_table_not_found(error):
            message = missing_table_message
        else:
            message = failure_message
        logger.error(
            message,
            extra={
                "operation": operation,
                "table_name": self.table_name,
                "error": str(error),
            },
        )
        return PersistenceException(message, error)

    def get_attributes(self, request_envelope: Any) -> dict[str, Any] | None:
        """Fetch attributes with a strongly consistent read.

        Args:
            request_envelope: Request used to derive the partition key

        Returns:
            The attribute map, or None if no item (or no attributes) is stored

        Raises:
            PersistenceException: If the table is missing or the read fails
        """
        partition_key = self._partition_key(request_envelope)
        logger.debug(
            "Fetching attributes",
            extra={"table_name": self.table_name, "partition_key": partition_key},
        )
        try:
            response = self._client.get_item(
                TableName=self.table_name,
                Key=self._key(partition_key),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._translate(
                e,
                "get_item",
                f"Table {self.table_name} does not exist or is in the process of being created",
                "Failed to retrieve attributes from DynamoDB",
            ) from e

        item = response.get("Item")
        if not item or self.config.attributes_key_name not in item:
            return None

        try:
            return decode_attributes(item[self.config.attributes_key_name])
        except TypeError as e:
            raise PersistenceException(
                f"Stored '{self.config.attributes_key_name}' attribute is not a map", e
            ) from e

    def save_attributes(self, request_envelope: Any, attributes: Mapping[str, Any]) -> None:
        """Save attributes, replacing any stored item for the partition key.

        Args:
            request_envelope: Request used to derive the partition key
            attributes: Attribute map to store (may be empty)

        Raises:
            PersistenceException: If attributes can't be serialized, the table
                is missing, or the write fails
        """
        if attributes is None:
            raise PersistenceException("attributes must not be None")

        partition_key = self._partition_key(request_envelope)
        try:
            item = self._item(partition_key, attributes)
        except (TypeError, ArithmeticError) as e:
            raise PersistenceException("Failed to serialize attributes for DynamoDB", e) from e

        logger.debug(
            "Saving attributes",
            extra={
                "table_name": self.table_name,
                "partition_key": partition_key,
                "attribute_count": len(attributes),
            },
        )
        try:
            self._client.put_item(TableName=self.table_name, Item=item)
        except (ClientError, BotoCoreError) as e:
            raise self._translate(
                e,
                "put_item",
                f"Table {self.table_name} does not exist or is in the process of being created",
                "Failed to save attributes to DynamoDB",
            ) from e

    def delete_attributes(self, request_envelope: Any) -> None:
        """Delete the stored item for the partition key.

        Deleting a key with nothing stored succeeds.

        Args:
            request_envelope: Request used to derive the partition key

        Raises:
            PersistenceException: If the table is missing or the delete fails
        """
        partition_key = self._partition_key(request_envelope)
        logger.debug(
            "Deleting attributes",
            extra={"table_name": self.table_name, "partition_key": partition_key},
        )
        try:
            self._client.delete_item(TableName=self.table_name, Key=self._key(partition_key))
        except (ClientError, BotoCoreError) as e:
            raise self._translate(
                e,
                "delete_item",
                f"Table {self.table_name} does not exist",
                "Failed to delete attributes from DynamoDB",
            ) from e

    def ensure_table(self) -> bool:
        """Create the table if it doesn't exist, and wait until it is active.

        The table gets a single string HASH key named after the configured
        partition key, with fixed provisioned throughput.

        Returns:
            True if the table was created, False if it already existed

        Raises:
            PersistenceException: If creation fails for any other reason
        """
        partition_key_name = self.config.partition_key_name
        logger.debug("Ensuring table exists", extra={"table_name": self.table_name})
        try:
            self._client.create_table(
                TableName=self.table_name,
                AttributeDefinitions=[
                    {
                        "AttributeName": partition_key_name,
                        "AttributeType": PARTITION_KEY_ATTRIBUTE_TYPE,
                    }
                ],
                KeySchema=[{"AttributeName": partition_key_name, "KeyType": PARTITION_KEY_TYPE}],
                ProvisionedThroughput={
                    "ReadCapacityUnits": self.config.read_capacity_units,
                    "WriteCapacityUnits": self.config.write_capacity_units,
                },
            )
            created = True
        except ClientError as e:
            if not is_table_in_use(e):
                logger.error(
                    "Create table request failed",
                    extra={"table_name": self.table_name, "error": str(e)},
                )
                raise PersistenceException("Create table request failed", e) from e
            # The table may still be CREATING from another caller
            logger.debug("Table already exists", extra={"table_name": self.table_name})
            created = False
        except BotoCoreError as e:
            logger.error(
                "Create table request failed",
                extra={"table_name": self.table_name, "error": str(e)},
            )
            raise PersistenceException("Create table request failed", e) from e

        try:
            self._client.get_waiter(TABLE_EXISTS_WAITER).wait(TableName=self.table_name)
        except BotoCoreError as e:
            # WaiterError is a BotoCoreError
            logger.error(
                "Table did not become active",
                extra={"table_name": self.table_name, "error": str(e)},
            )
            raise PersistenceException(
                f"Table {self.table_name} did not become active", e
            ) from e

        if created:
            logger.info(
                "Created table",
                extra={"table_name": self.table_name, "partition_key_name": partition_key_name},
            )
        return created


def create_persistence_adapter(
    table_name: str | None = None,
    *,
    partition_key_name: str = DEFAULT_PARTITION_KEY_NAME,
    attributes_key_name: str = DEFAULT_ATTRIBUTES_KEY_NAME,
    partition_key_generator: PartitionKeyGenerator = user_id,
    auto_create_table: bool = DEFAULT_AUTO_CREATE_TABLE,
    read_capacity_units: int = DEFAULT_READ_CAPACITY_UNITS,
    write_capacity_units: int = DEFAULT_WRITE_CAPACITY_UNITS,
    dynamodb_client: Any = None,
) -> DynamoDbPersistenceAdapter:
    """Validate options, resolve the client, and build an adapter.

    Validation runs before any client is built or called. When
    auto_create_table is set, the table is ensured before returning.

    Args:
        table_name: DynamoDB table name (required)
        partition_key_name: Attribute holding the partition key
        attributes_key_name: Attribute holding the attribute map
        partition_key_generator: Maps a request envelope to a partition key
        auto_create_table: Create the table if it doesn't exist
        read_capacity_units: Provisioned reads for an auto-created table
        write_capacity_units: Provisioned writes for an auto-created table
        dynamodb_client: Client to use; a default one is built from Config if omitted

    Returns:
        A ready-to-use DynamoDbPersistenceAdapter

    Raises:
        PersistenceException: If options are invalid or table creation fails
    """
    config = AdapterConfig(
        table_name=table_name,  # type: ignore[arg-type]
        partition_key_name=partition_key_name,
        attributes_key_name=attributes_key_name,
        partition_key_generator=partition_key_generator,
        auto_create_table=auto_create_table,
        read_capacity_units=read_capacity_units,
        write_capacity_units=write_capacity_units,
    )
    return create_adapter_from_config(config, dynamodb_client)


def create_adapter_from_config(
    config: AdapterConfig, dynamodb_client: Any = None
) -> DynamoDbPersistenceAdapter:
    """Build an adapter from an existing config (see create_persistence_adapter)."""
    if dynamodb_client is None:
        dynamodb_client = build_dynamodb_client()

    adapter = DynamoDbPersistenceAdapter(config, dynamodb_client)
    if config.auto_create_table:
        adapter.ensure_table()
    return adapter
