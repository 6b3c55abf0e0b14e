"""Value converters and serializers.

A converter turns submitted text into a ``Result``::

    def convert(text: str) -> Result[T]: ...

A serializer turns a value back into the text shown in the field::

    def serialize(value: T) -> str: ...

``field()`` looks both up from ``CONVERTERS`` by value type unless they are
passed explicitly. Converters never raise: bad input becomes ``Failed`` and
empty input for a non-text type becomes ``ABSENT``.
"""

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from formality.errors import ConfigurationError
from formality.result import ABSENT, Failed, Present, Result

type ValueConverter[T] = Callable[[str], Result[T]]
type ValueSerializer[T] = Callable[[T], str]


def convert_str(text: str) -> Result[str]:
    return Present(text)


def convert_int(text: str) -> Result[int]:
    text = text.strip()
    if not text:
        return ABSENT
    try:
        return Present(int(text))
    except ValueError as exc:
        return Failed(f"{text!r} is not a whole number.", exc)


def convert_float(text: str) -> Result[float]:
    text = text.strip()
    if not text:
        return ABSENT
    try:
        return Present(float(text))
    except ValueError as exc:
        return Failed(f"{text!r} is not a number.", exc)


def convert_decimal(text: str) -> Result[Decimal]:
    text = text.strip()
    if not text:
        return ABSENT
    try:
        return Present(Decimal(text))
    except InvalidOperation as exc:
        return Failed(f"{text!r} is not a number.", exc)


_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def convert_bool(text: str) -> Result[bool]:
    """Checkbox-friendly boolean: ``on``/``yes``/``1``/``true`` and their opposites."""
    lowered = text.strip().lower()
    if lowered in _TRUE:
        return Present(True)
    if lowered in _FALSE or not lowered:
        return Present(False)
    return Failed(f"{text!r} is not a yes/no value.")


def convert_date(text: str) -> Result[date]:
    """ISO 8601 date, the format of ``<input type="date">``."""
    text = text.strip()
    if not text:
        return ABSENT
    try:
        return Present(date.fromisoformat(text))
    except ValueError as exc:
        return Failed(f"{text!r} is not a date (expected YYYY-MM-DD).", exc)


def convert_datetime(text: str) -> Result[datetime]:
    """ISO 8601 datetime, the format of ``<input type="datetime-local">``."""
    text = text.strip()
    if not text:
        return ABSENT
    try:
        return Present(datetime.fromisoformat(text))
    except ValueError as exc:
        return Failed(f"{text!r} is not a date and time.", exc)


def serialize_bool(value: bool) -> str:
    return "true" if value else "false"


def serialize_iso(value: date) -> str:
    return value.isoformat()


CONVERTERS: dict[type, tuple[ValueConverter[Any], ValueSerializer[Any]]] = {
    str: (convert_str, str),
    int: (convert_int, str),
    float: (convert_float, str),
    Decimal: (convert_decimal, str),
    bool: (convert_bool, serialize_bool),
    datetime: (convert_datetime, serialize_iso),
    date: (convert_date, serialize_iso),
}


def converter_for[T](value_type: type[T]) -> tuple[ValueConverter[T], ValueSerializer[T]]:
    """Return the built-in ``(converter, serializer)`` pair for *value_type*.

    Raises ``ConfigurationError`` for types with no built-in pair; pass
    ``converter=`` and ``serializer=`` to ``field()`` for those.
    """
    try:
        return CONVERTERS[value_type]
    except KeyError:
        msg = (
            f"No value converter for {value_type.__name__}. "
            "Pass converter= and serializer= to field()."
        )
        raise ConfigurationError(msg) from None
