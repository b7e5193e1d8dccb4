"""Unit tests for structured JSON logging."""

import json
import logging
import sys
from unittest.mock import patch

import pytest

from dynamodb_persistence.utils.logging import (
    JSONFormatter,
    get_logger,
    get_request_id,
    set_request_id,
    setup_logging,
)


def _make_record(msg: str = "Saving attributes", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="dynamodb_persistence.adapter",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def clear_request_id():
    set_request_id(None)
    yield
    set_request_id(None)


@pytest.fixture
def restore_root_logger():
    """Keep setup_logging() from leaking handlers into other tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    def test_basic_fields(self) -> None:
        data = json.loads(JSONFormatter().format(_make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "dynamodb_persistence.adapter"
        assert data["message"] == "Saving attributes"
        assert "timestamp" in data
        assert "request_id" not in data

    def test_extra_fields_included(self) -> None:
        record = _make_record(table_name="SkillAttributes", partition_key="amzn1.ask.account.ABC")

        data = json.loads(JSONFormatter().format(record))

        assert data["table_name"] == "SkillAttributes"
        assert data["partition_key"] == "amzn1.ask.account.ABC"

    def test_request_id_included_when_set(self) -> None:
        set_request_id("amzn1.echo-api.request.1")

        data = json.loads(JSONFormatter().format(_make_record()))

        assert data["request_id"] == "amzn1.echo-api.request.1"
        assert get_request_id() == "amzn1.echo-api.request.1"

    def test_exception_info(self) -> None:
        try:
            raise ValueError("bad value")
        except ValueError:
            record = _make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad value"

    def test_non_serializable_extra_uses_str(self) -> None:
        record = _make_record(cause=RuntimeError("boom"))

        data = json.loads(JSONFormatter().format(record))

        assert data["cause"] == "boom"


class TestSetupLogging:
    def test_installs_json_handler(self, restore_root_logger: logging.Logger) -> None:
        with patch("dynamodb_persistence.config.Config.LOG_LEVEL", "DEBUG"):
            setup_logging()

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("botocore").level == logging.WARNING

    def test_get_logger(self) -> None:
        assert get_logger("dynamodb_persistence.codec").name == "dynamodb_persistence.codec"
