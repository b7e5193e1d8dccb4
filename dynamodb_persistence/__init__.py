"""DynamoDB persistence adapter for skill attributes.

Usage:
    from dynamodb_persistence import create_persistence_adapter, PartitionKeyGenerators

    adapter = create_persistence_adapter(
        "SkillAttributes",
        partition_key_generator=PartitionKeyGenerators.device_id,
        auto_create_table=True,
    )
    adapter.save_attributes(envelope, {"count": 3})
    adapter.get_attributes(envelope)  # {"count": 3}
"""

from dynamodb_persistence.adapter import (
    AbstractPersistenceAdapter,
    AdapterConfig,
    DynamoDbPersistenceAdapter,
    create_adapter_from_config,
    create_persistence_adapter,
)
from dynamodb_persistence.codec import (
    decode_attributes,
    decode_value,
    encode_attributes,
    encode_value,
)
from dynamodb_persistence.envelope import RequestEnvelope
from dynamodb_persistence.exceptions import PersistenceException
from dynamodb_persistence.partition_keys import (
    PartitionKeyGenerator,
    PartitionKeyGenerators,
    device_id,
    person_id,
    user_id,
)

__version__ = "1.0.0"

__all__ = [
    "AbstractPersistenceAdapter",
    "AdapterConfig",
    "DynamoDbPersistenceAdapter",
    "PartitionKeyGenerator",
    "PartitionKeyGenerators",
    "PersistenceException",
    "RequestEnvelope",
    "create_adapter_from_config",
    "create_persistence_adapter",
    "decode_attributes",
    "decode_value",
    "device_id",
    "encode_attributes",
    "encode_value",
    "person_id",
    "user_id",
]
