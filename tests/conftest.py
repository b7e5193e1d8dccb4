"""Shared pytest fixtures for persistence adapter tests."""

import os

import pytest

# Set test environment variables before importing package modules
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["PERSISTENCE_TABLE_NAME"] = "SkillAttributes"
os.environ.pop("DYNAMODB_ENDPOINT_URL", None)

from dynamodb_persistence.adapter import AdapterConfig, DynamoDbPersistenceAdapter  # noqa: E402
from dynamodb_persistence.envelope import RequestEnvelope  # noqa: E402
from tests.fixtures.envelopes import TABLE_NAME, create_envelope  # noqa: E402
from tests.mocks.dynamodb import FakeDynamoDbClient  # noqa: E402

# -----------------------------------------------------------------------------
# Backend fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def fake_client() -> FakeDynamoDbClient:
    """Fake DynamoDB client with the attributes table already provisioned."""
    return FakeDynamoDbClient(tables={TABLE_NAME: "id"})


@pytest.fixture
def empty_client() -> FakeDynamoDbClient:
    """Fake DynamoDB client with no tables."""
    return FakeDynamoDbClient()


@pytest.fixture
def adapter(fake_client: FakeDynamoDbClient) -> DynamoDbPersistenceAdapter:
    """Adapter with default key names against the fake client."""
    return DynamoDbPersistenceAdapter(AdapterConfig(table_name=TABLE_NAME), fake_client)


# -----------------------------------------------------------------------------
# Envelope fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def envelope() -> RequestEnvelope:
    """Envelope for user amzn1.ask.account.ABC on device amzn1.ask.device.XYZ."""
    return create_envelope()
