"""Interaction-scoped state via ContextVar.

Provides:
- ``interaction(session)``: the scope of one render, submission or event.
- the current ``FormSession`` whose registry mints and resolves tokens.
- the field value store: one ``Result`` cell per field holder, fresh
  (every field ``Absent``) at the start of each interaction.
- the notice list: messages reported against field tokens while the
  interaction runs.

Accessing any of them outside ``interaction()`` raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. A session is assumed to run one interaction at a time, so
    nothing here takes a lock.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from formality.result import ABSENT, Result

if TYPE_CHECKING:
    from formality.dispatch import FormSession


@dataclass(frozen=True, slots=True)
class Notice:
    """A message reported against a field token."""

    token: str
    message: str
    level: str = "error"


@dataclass(slots=True)
class _InteractionState:
    session: FormSession
    values: dict[object, Result[Any]]
    notices: list[Notice]


_state_var: ContextVar[_InteractionState | None] = ContextVar(
    "formality_interaction", default=None
)


def _state() -> _InteractionState:
    state = _state_var.get()
    if state is None:
        msg = (
            "No active interaction. Wrap rendering and submission "
            "handling in formality.interaction(session)."
        )
        raise LookupError(msg)
    return state


@contextmanager
def interaction(session: FormSession) -> Iterator[FormSession]:
    """Run the enclosed block as one interaction against *session*.

    Field values and notices start empty and are discarded on exit.
    Nested interactions shadow the outer one until they exit.

    Usage::

        with interaction(session):
            html = email_field.binder().apply(template)

        with interaction(session):
            process_form(form)
            email = email_field.value()
    """
    token = _state_var.set(_InteractionState(session=session, values={}, notices=[]))
    try:
        yield session
    finally:
        _state_var.reset(token)


def in_interaction() -> bool:
    """True inside ``interaction()``."""
    return _state_var.get() is not None


def current_session() -> FormSession:
    """Return the session of the current interaction."""
    return _state().session


# -- Field value store --


def field_value(holder: object) -> Result[Any]:
    """The value stored for *holder* in this interaction, ``ABSENT`` if none."""
    return _state().values.get(holder, ABSENT)


def set_field_value(holder: object, value: Result[Any]) -> None:
    """Store *value* as *holder*'s value for the rest of this interaction."""
    _state().values[holder] = value


# -- Request feedback --


def report(token: str, message: str, level: str = "error") -> None:
    """Report *message* against the field bound to *token*."""
    _state().notices.append(Notice(token=token, message=message, level=level))


def notices(token: str | None = None) -> list[Notice]:
    """Notices reported so far, optionally only those for *token*."""
    reported = _state().notices
    if token is None:
        return list(reported)
    return [n for n in reported if n.token == token]
