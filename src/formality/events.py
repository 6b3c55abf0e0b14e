"""Field event handlers — server callbacks for client-side events.

An ``EventHandler`` binds a named DOM event on a field (``change``,
``blur``, ``input``...) to a server function that receives the field's
converted value and returns a ``ClientCommand``::

    def check_username(name: str) -> ClientCommand:
        if users.exists(name):
            return set_html("username-hint", "Taken")
        return set_html("username-hint", "")

    username = field("#username").handling_event(on("change", check_username))

If the field text cannot be converted, ``invalid`` (when given) receives
an ``InvalidValue`` describing the failure and the raw text; otherwise
the client gets ``NOOP``. Event handlers never touch the field's own
value: the form submission handler stays independent.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from formality.commands import NOOP, ClientCommand
from formality.context import current_session
from formality.converters import ValueConverter
from formality.dispatch import register
from formality.result import Absent, Failed, InvalidValue, Present
from formality.transform import Transform, set_attribute

type InvalidValueHandler = Callable[[InvalidValue], ClientCommand]


@dataclass(frozen=True, slots=True)
class EventHandler[T]:
    """Binds *event_name* on a field to *handler*."""

    event_name: str
    handler: Callable[[T], ClientCommand | None]
    invalid_value_handler: InvalidValueHandler | None = None

    def binder(self, selector: str, value_converter: ValueConverter[T]) -> Transform:
        """Register the callback and return the ``on<event>`` binding."""
        config = current_session().config
        unconvertible = config.unconvertible_message

        def on_event(raw: str) -> ClientCommand:
            match value_converter(raw):
                case Present(value):
                    return self.handler(value) or NOOP
                case Failed(message, cause, errors):
                    return self._invalid(InvalidValue(message, cause, errors, raw))
                case Absent():
                    return self._invalid(InvalidValue(unconvertible, None, (), raw))

        token = register(on_event)
        call = f"{config.event_function}('{token}', this.value)"
        return set_attribute(selector, config.event_attribute_prefix + self.event_name, call)

    def _invalid(self, failure: InvalidValue) -> ClientCommand:
        if self.invalid_value_handler is None:
            return NOOP
        return self.invalid_value_handler(failure) or NOOP


def on(
    event_name: str,
    handler: Callable[[Any], ClientCommand | None],
    invalid: InvalidValueHandler | None = None,
) -> EventHandler[Any]:
    """Build an ``EventHandler``; reads well with ``handling_event``."""
    return EventHandler(event_name, handler, invalid)
