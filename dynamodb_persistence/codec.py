"""Conversion between attribute maps and DynamoDB AttributeValues.

Wraps boto3's TypeSerializer/TypeDeserializer with the two adjustments skill
attributes need:

- Python floats are accepted on the way in and stored as the Decimal of their
  shortest repr (DynamoDB has no binary float type).
- Numbers written without a fractional part come back as int; all other
  numbers come back as Decimal. Binary values come back as bytes.

Numeric widening: a float attribute is read back as Decimal (or int when it is
integral). Everything else (str, int, Decimal, bool, None, dict, list, bytes,
sets) round-trips unchanged. Set member order is not preserved by DynamoDB.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_storable(value: Any) -> Any:
    """Replace floats with Decimals, recursing into containers.

    DynamoDB has no empty set type, so empty sets are rejected here rather
    than by the backend.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: _to_storable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_storable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        if not value:
            raise TypeError("Empty sets can't be stored in DynamoDB")
        return {_to_storable(v) for v in value}
    return value


def _from_stored(value: Any) -> Any:
    """Narrow integral Decimals to int and unwrap Binary, recursing into containers."""
    if isinstance(value, Decimal):
        if value.is_finite() and value.as_tuple().exponent >= 0:
            return int(value)
        return value
    if isinstance(value, Binary):
        return value.value
    if isinstance(value, dict):
        return {k: _from_stored(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_stored(v) for v in value]
    if isinstance(value, set):
        return {_from_stored(v) for v in value}
    return value


def encode_value(value: Any) -> dict[str, Any]:
    """Serialize a single Python value to an AttributeValue.

    Raises:
        TypeError: If the value (or a nested value) has no DynamoDB type
    """
    return _serializer.serialize(_to_storable(value))


def decode_value(attribute_value: dict[str, Any]) -> Any:
    """Deserialize a single AttributeValue to a Python value."""
    return _from_stored(_deserializer.deserialize(attribute_value))


def encode_attributes(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Serialize an attribute map to a map AttributeValue ({"M": {...}}).

    Raises:
        TypeError: If attributes is not a mapping or holds an unsupported value
    """
    if not isinstance(attributes, Mapping):
        raise TypeError(f"Attributes must be a mapping, got {type(attributes).__name__}")
    return encode_value(dict(attributes))


def decode_attributes(attribute_value: dict[str, Any]) -> dict[str, Any]:
    """Deserialize a map AttributeValue ({"M": {...}}) to an attribute map.

    Raises:
        TypeError: If the AttributeValue is not a map
    """
    if "M" not in attribute_value:
        raise TypeError(
            f"Expected a map AttributeValue, got type(s) {', '.join(attribute_value) or 'none'}"
        )
    return decode_value(attribute_value)
