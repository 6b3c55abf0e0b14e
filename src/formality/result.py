"""Tri-state results for field values and conversions.

A submitted field is in exactly one of three states:

- ``Absent`` — nothing was submitted for it in this interaction, or a
  converter declined to produce a value.
- ``Failed`` — conversion or validation failed. ``message`` is always set;
  ``errors`` holds every validation message when validations rejected the
  value.
- ``Present`` — the converted, validated value.

Match on the concrete classes::

    match holder.value():
        case Present(value):
            save(value)
        case Failed(message, errors=errors):
            log(message, errors)
        case Absent():
            pass
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Absent:
    """No value. Use the ``ABSENT`` singleton."""

    @property
    def is_present(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Absent:
        return self

    def or_else[D](self, default: D) -> D:
        return default

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()


@dataclass(frozen=True, slots=True)
class Failed:
    """A failed conversion or validation.

    ``cause`` is the exception behind a conversion failure, if any.
    ``errors`` carries validation messages in the order they were produced.
    """

    message: str
    cause: BaseException | None = None
    errors: tuple[str, ...] = ()

    @property
    def is_present(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Failed:
        return self

    def or_else[D](self, default: D) -> D:
        return default

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Present[T]:
    """A successfully converted value."""

    value: T

    @property
    def is_present(self) -> bool:
        return True

    def map[U](self, fn: Callable[[T], U]) -> Present[U]:
        return Present(fn(self.value))

    def or_else(self, default: object) -> T:
        return self.value

    def __bool__(self) -> bool:
        return True


type Result[T] = Present[T] | Failed | Absent


@dataclass(frozen=True, slots=True)
class InvalidValue:
    """A value an event handler could not convert.

    Handed to ``EventHandler.invalid_value_handler``. ``raw`` is the value
    exactly as the client sent it.
    """

    message: str
    cause: BaseException | None
    errors: tuple[str, ...]
    raw: Any


def as_result[T](value: T | Result[T]) -> Result[T]:
    """Wrap a plain value in ``Present``; pass results through untouched.

    ``None`` becomes ``ABSENT``.
    """
    if isinstance(value, (Present, Failed, Absent)):
        return value
    if value is None:
        return ABSENT
    return Present(value)
