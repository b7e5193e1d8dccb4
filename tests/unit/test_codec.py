"""Unit tests for attribute map <-> AttributeValue conversion."""

from decimal import Decimal

import pytest

from dynamodb_persistence.codec import (
    decode_attributes,
    decode_value,
    encode_attributes,
    encode_value,
)


class TestEncode:
    """Tests for encoding attribute maps."""

    def test_encode_simple_map(self) -> None:
        assert encode_attributes({"count": 3, "name": "x"}) == {
            "M": {"count": {"N": "3"}, "name": {"S": "x"}}
        }

    def test_encode_scalars(self) -> None:
        assert encode_value(True) == {"BOOL": True}
        assert encode_value(None) == {"NULL": True}
        assert encode_value(Decimal("1.50")) == {"N": "1.50"}
        assert encode_value(b"\x00\x01") == {"B": b"\x00\x01"}

    def test_encode_nested(self) -> None:
        assert encode_attributes({"tags": ["a", 1], "profile": {"age": 30}}) == {
            "M": {
                "tags": {"L": [{"S": "a"}, {"N": "1"}]},
                "profile": {"M": {"age": {"N": "30"}}},
            }
        }

    def test_encode_float_as_decimal(self) -> None:
        """Floats are stored via their shortest repr."""
        assert encode_value(0.1) == {"N": "0.1"}
        assert encode_attributes({"nested": [{"pi": 3.14}]}) == {
            "M": {"nested": {"L": [{"M": {"pi": {"N": "3.14"}}}]}}
        }

    def test_encode_bool_not_treated_as_number(self) -> None:
        assert encode_attributes({"flag": False}) == {"M": {"flag": {"BOOL": False}}}

    def test_encode_empty_map(self) -> None:
        assert encode_attributes({}) == {"M": {}}

    def test_encode_nan_rejected(self) -> None:
        with pytest.raises(TypeError):
            encode_attributes({"x": float("nan")})

    def test_encode_unsupported_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            encode_attributes({"x": object()})

    @pytest.mark.parametrize("empty", [set(), frozenset()])
    def test_encode_empty_set_rejected(self, empty: object) -> None:
        with pytest.raises(TypeError, match="Empty sets"):
            encode_attributes({"tags": empty})

    def test_encode_nested_empty_set_rejected(self) -> None:
        with pytest.raises(TypeError, match="Empty sets"):
            encode_attributes({"profile": {"tags": set()}})

    def test_encode_non_mapping_rejected(self) -> None:
        with pytest.raises(TypeError, match="mapping"):
            encode_attributes(["not", "a", "map"])  # type: ignore[arg-type]


class TestDecode:
    """Tests for decoding map AttributeValues."""

    def test_decode_integral_numbers_as_int(self) -> None:
        result = decode_attributes({"M": {"count": {"N": "3"}, "big": {"N": "1E+2"}}})

        assert result == {"count": 3, "big": 100}
        assert type(result["count"]) is int
        assert type(result["big"]) is int

    def test_decode_fractional_numbers_as_decimal(self) -> None:
        result = decode_attributes({"M": {"ratio": {"N": "0.25"}, "whole": {"N": "2.0"}}})

        assert result["ratio"] == Decimal("0.25")
        assert isinstance(result["whole"], Decimal)

    def test_decode_binary_as_bytes(self) -> None:
        assert decode_value({"B": b"\x00\x01"}) == b"\x00\x01"
        assert decode_value({"BS": [b"a", b"b"]}) == {b"a", b"b"}

    def test_decode_bool_stays_bool(self) -> None:
        assert decode_value({"BOOL": True}) is True

    def test_decode_number_set(self) -> None:
        assert decode_value({"NS": ["1", "2.5"]}) == {1, Decimal("2.5")}

    def test_decode_non_map_rejected(self) -> None:
        with pytest.raises(TypeError, match="map"):
            decode_attributes({"S": "oops"})


class TestRoundTrip:
    """Round-trip laws between attribute maps and AttributeValues."""

    def test_decode_encode_map(self) -> None:
        attributes = {
            "name": "x",
            "count": 3,
            "negative": -42,
            "large": 12345678901234567890,
            "ratio": Decimal("1.25"),
            "enabled": True,
            "disabled": False,
            "nothing": None,
            "profile": {"age": 30, "tags": ["a", "b"], "empty": {}},
            "history": [1, [2, 3], {"k": None}, "s"],
            "blob": b"\x00\xff",
            "colors": {"red", "green"},
            "scores": {1, 2},
        }

        assert decode_attributes(encode_attributes(attributes)) == attributes

    def test_encode_decode_native(self) -> None:
        native = {
            "M": {
                "count": {"N": "3"},
                "ratio": {"N": "0.50"},
                "name": {"S": "x"},
                "flag": {"BOOL": True},
                "nothing": {"NULL": True},
                "tags": {"L": [{"S": "a"}, {"N": "1"}]},
                "nested": {"M": {"inner": {"M": {}}}},
                "blob": {"B": b"\x01"},
            }
        }

        assert encode_attributes(decode_attributes(native)) == native

    def test_float_widens_to_decimal(self) -> None:
        """Floats come back as Decimal of their repr."""
        result = decode_attributes(encode_attributes({"f": 0.1, "g": 1.5}))

        assert result == {"f": Decimal("0.1"), "g": Decimal("1.5")}
