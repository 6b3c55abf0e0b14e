"""Validations — the protocol field holders run converted values through.

A validation is any object with::

    def __call__(self, value: T) -> list[str]: ...      # error messages
    def binder(self, selector: str) -> Transform: ...   # its own markup

Concrete rules are up to the application. ``check()`` adapts a plain
function, optionally adding client-side hint attributes::

    not_blank = check(
        lambda v: None if v.strip() else "This field is required",
        required="required",
    )
    under_100 = check(lambda n: [] if n < 100 else ["Must be under 100"], max="99")

The function may return ``None``, a single message, or an iterable of
messages.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from formality.transform import EMPTY, Transform, compose, set_attribute

type CheckResult = str | Iterable[str] | None


class Validation[T](Protocol):
    """Protocol for field validations."""

    def __call__(self, value: T) -> list[str]: ...

    def binder(self, selector: str) -> Transform: ...


@dataclass(frozen=True, slots=True)
class Check[T]:
    """A validation built from a function and static hint attributes."""

    fn: Callable[[T], CheckResult]
    attributes: tuple[tuple[str, str], ...] = ()

    def __call__(self, value: T) -> list[str]:
        outcome = self.fn(value)
        if outcome is None:
            return []
        if isinstance(outcome, str):
            return [outcome]
        return list(outcome)

    def binder(self, selector: str) -> Transform:
        if not self.attributes:
            return EMPTY
        return compose(set_attribute(selector, name, value) for name, value in self.attributes)


def check[T](fn: Callable[[T], CheckResult], /, **attributes: str) -> Check[T]:
    """Wrap *fn* as a validation; keyword arguments become hint attributes.

    Underscores in attribute names become dashes (``data_min`` → ``data-min``).
    """
    return Check(fn, tuple((name.replace("_", "-"), value) for name, value in attributes.items()))
