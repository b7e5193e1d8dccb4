"""Pydantic models for the parts of a skill request envelope the adapter reads.

Only the identity fields used for partition key generation are modelled.
Models accept the raw request JSON (camelCase, "System") as well as the
snake_case field names, and ignore everything else in the payload:

    envelope = RequestEnvelope.from_dict(json.loads(body))
    envelope.context.system.user.user_id
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _EnvelopeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class User(_EnvelopeModel):
    """The account that enabled the skill."""

    user_id: str | None = Field(default=None, alias="userId")


class Device(_EnvelopeModel):
    """The device the request came from."""

    device_id: str | None = Field(default=None, alias="deviceId")


class Person(_EnvelopeModel):
    """A recognized speaker, when voice profiles are in use."""

    person_id: str | None = Field(default=None, alias="personId")


class SystemState(_EnvelopeModel):
    user: User | None = None
    device: Device | None = None
    person: Person | None = None


class Context(_EnvelopeModel):
    system: SystemState | None = Field(default=None, alias="System")


class RequestEnvelope(_EnvelopeModel):
    """Minimal request envelope: version plus the context identity tree."""

    version: str | None = None
    context: Context | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> RequestEnvelope:
        """Validate a raw request payload into an envelope."""
        return cls.model_validate(payload)
