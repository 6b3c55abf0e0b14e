"""Tests for formality.converters — built-in converter/serializer pairs."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from formality.converters import (
    convert_bool,
    convert_date,
    convert_int,
    convert_str,
    converter_for,
)
from formality.errors import ConfigurationError
from formality.result import ABSENT, Failed, Present


class TestText:
    def test_text_is_taken_verbatim(self) -> None:
        assert convert_str("  spaced  ") == Present("  spaced  ")

    def test_empty_text_is_present(self) -> None:
        assert convert_str("") == Present("")


class TestInt:
    def test_valid(self) -> None:
        assert convert_int(" 42 ") == Present(42)

    def test_invalid_carries_cause(self) -> None:
        result = convert_int("forty-two")
        assert isinstance(result, Failed)
        assert "'forty-two' is not a whole number." == result.message
        assert isinstance(result.cause, ValueError)

    def test_empty_declines(self) -> None:
        assert convert_int("") is ABSENT


class TestBool:
    @pytest.mark.parametrize("text", ["on", "true", "YES", "1"])
    def test_truthy_words(self, text: str) -> None:
        assert convert_bool(text) == Present(True)

    def test_unchecked_checkbox_is_false(self) -> None:
        assert convert_bool("") == Present(False)

    def test_garbage_fails(self) -> None:
        assert isinstance(convert_bool("maybe"), Failed)


class TestDate:
    def test_iso_date(self) -> None:
        assert convert_date("2024-02-29") == Present(date(2024, 2, 29))

    def test_bad_date(self) -> None:
        result = convert_date("29/02/2024")
        assert isinstance(result, Failed)
        assert "YYYY-MM-DD" in result.message


class TestRoundTrip:
    @pytest.mark.parametrize(
        "value",
        [
            "Dat value",
            7,
            2.5,
            Decimal("19.99"),
            True,
            False,
            date(2020, 1, 31),
            datetime(2020, 1, 31, 8, 30),
        ],
    )
    def test_deserialize_serialize_is_identity(self, value: object) -> None:
        convert, serialize = converter_for(type(value))
        assert convert(serialize(value)) == Present(value)


class TestConverterFor:
    def test_unknown_type_raises(self) -> None:
        class Point:
            pass

        with pytest.raises(ConfigurationError, match="No value converter for Point"):
            converter_for(Point)
