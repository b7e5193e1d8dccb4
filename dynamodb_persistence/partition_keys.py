"""Partition key generators.

A generator maps a request envelope to the partition key string under which
that caller's attributes are stored. Generators must be pure: the same
envelope always yields the same key.

Any callable taking an envelope and returning a string can be passed to the
adapter. The envelope is read by attribute access only, so SDK envelope
objects with the same shape work as well as RequestEnvelope.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from dynamodb_persistence.exceptions import PersistenceException

PartitionKeyGenerator = Callable[[Any], str]


def _system(request_envelope: Any) -> Any:
    context = getattr(request_envelope, "context", None)
    return getattr(context, "system", None)


def _missing(field: str) -> PersistenceException:
    return PersistenceException(
        f"Couldn't retrieve {field} from request envelope, for partition key generation"
    )


def user_id(request_envelope: Any) -> str:
    """Use context.system.user.user_id as the partition key."""
    user = getattr(_system(request_envelope), "user", None)
    value = getattr(user, "user_id", None)
    if not value:
        raise _missing("user id")
    return value


def device_id(request_envelope: Any) -> str:
    """Use context.system.device.device_id as the partition key."""
    device = getattr(_system(request_envelope), "device", None)
    value = getattr(device, "device_id", None)
    if not value:
        raise _missing("device id")
    return value


def person_id(request_envelope: Any) -> str:
    """Use the recognized person's id, falling back to the user id.

    Lets individual household members keep separate attributes on a shared
    account when voice profiles are enabled.
    """
    person = getattr(_system(request_envelope), "person", None)
    value = getattr(person, "person_id", None)
    if value:
        return value
    return user_id(request_envelope)


class PartitionKeyGenerators:
    """Built-in generators, grouped for discoverability."""

    user_id = staticmethod(user_id)
    device_id = staticmethod(device_id)
    person_id = staticmethod(person_id)
