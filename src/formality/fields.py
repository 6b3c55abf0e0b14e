"""Field holders — a template location bound to a typed, validated value.

A ``FieldHolder`` is declared once, independent of any template or
request::

    age = (
        field(".age", value_type=int)
        .validating_with(check(lambda n: None if n >= 18 else "Must be an adult", min="18"))
        .handling_event(on("change", preview_age))
    )

At render time ``age.binder()`` registers a submission handler with the
current session and returns the ``Transform`` that routes the element's
submitted value back to it. When the form comes back, the handler runs
the conversion/validation pipeline and stores the outcome, readable for
the rest of that interaction through ``age.value()``.

Holders are immutable: ``validating_with`` and ``handling_event`` return
new holders and keep declaration order. The submitted value is not part
of the holder; it lives in the interaction store keyed by the holder
object, so holders compare and hash by identity.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any

from formality.context import current_session, field_value, report, set_field_value
from formality.converters import ValueConverter, ValueSerializer, converter_for
from formality.dispatch import register_bound
from formality.events import EventHandler
from formality.forms import UploadFile
from formality.result import ABSENT, Failed, Present, Result, as_result
from formality.transform import Transform, set_attribute
from formality.validation import Validation

logger = logging.getLogger("formality.fields")


def _settle(
    holder: object,
    token: str,
    converted: Result[Any],
    validations: Iterable[Validation[Any]],
) -> Result[Any]:
    """Run validations on a converted value, report problems, store the outcome."""
    match converted:
        case Present(value):
            errors = [message for validation in validations for message in validation(value)]
            if errors:
                logger.debug("%s: %d validation error(s)", token, len(errors))
                for message in errors:
                    report(token, message)
                outcome: Result[Any] = Failed(f"{value} failed validations.", None, tuple(errors))
            else:
                outcome = converted
        case Failed(message, cause, _):
            logger.debug("%s: conversion failed: %s", token, message)
            report(token, message)
            outcome = Failed(message, cause)
        case _:
            message = current_session().config.unrecognized_message
            logger.debug("%s: conversion declined", token)
            report(token, message)
            outcome = Failed(message)

    set_field_value(holder, outcome)
    return outcome


def _fold_validations(
    base: Transform, selector: str, validations: Iterable[Validation[Any]]
) -> Transform:
    return reduce(lambda acc, validation: acc & validation.binder(selector), validations, base)


@dataclass(frozen=True, slots=True, eq=False)
class FieldHolder[T]:
    """A form field processing a value of type ``T``.

    Only the routing and display attributes are touched on the element;
    its ``type`` and everything else stay as the template wrote them.
    """

    selector: str
    initial_value: Result[T]
    value_converter: ValueConverter[T]
    value_serializer: ValueSerializer[T]
    validations: tuple[Validation[T], ...] = ()
    event_handlers: tuple[EventHandler[T], ...] = ()

    def validating_with(self, validation: Validation[T]) -> FieldHolder[T]:
        """A copy that also runs *validation* on submitted values."""
        return replace(self, validations=(*self.validations, validation))

    def handling_event(self, event_handler: EventHandler[T]) -> FieldHolder[T]:
        """A copy that also binds *event_handler* on the client."""
        return replace(self, event_handlers=(*self.event_handlers, event_handler))

    def value(self) -> Result[T]:
        """This field's value in the current interaction.

        ``ABSENT`` until the field's submission has been processed.
        """
        return field_value(self)

    def binder(self) -> Transform:
        """Register this field's handlers and return its transform.

        Every call mints new tokens, so bind once per render.
        """
        config = current_session().config
        token = register_bound(self._handle_submission)

        display = self.initial_value.map(self.value_serializer).or_else("")
        base = set_attribute(self.selector, config.routing_attribute, token) & set_attribute(
            self.selector, config.display_attribute, display
        )

        with_validations = _fold_validations(base, self.selector, self.validations)
        return reduce(
            lambda acc, handler: acc & handler.binder(self.selector, self.value_converter),
            self.event_handlers,
            with_validations,
        )

    def _handle_submission(self, token: str, raw: Any) -> None:
        converted = self.value_converter(raw) if isinstance(raw, str) else ABSENT
        _settle(self, token, converted, self.validations)


@dataclass(frozen=True, slots=True, eq=False)
class FileFieldHolder[T]:
    """A file upload field whose value is derived from an ``UploadFile``.

    Binds the routing attribute and ``type="file"``. File inputs carry no
    display value and no event handlers.
    """

    selector: str
    value_converter: Callable[[UploadFile], Result[T]]
    validations: tuple[Validation[T], ...] = ()

    def validating_with(self, validation: Validation[T]) -> FileFieldHolder[T]:
        return replace(self, validations=(*self.validations, validation))

    def value(self) -> Result[T]:
        return field_value(self)

    def binder(self) -> Transform:
        config = current_session().config
        token = register_bound(self._handle_submission)
        base = set_attribute(self.selector, config.routing_attribute, token) & set_attribute(
            self.selector, "type", "file"
        )
        return _fold_validations(base, self.selector, self.validations)

    def _handle_submission(self, token: str, upload: Any) -> None:
        converted = self.value_converter(upload) if isinstance(upload, UploadFile) else ABSENT
        _settle(self, token, converted, self.validations)


# -- Builders --


def field[T](
    selector: str,
    initial: T | Result[T] = ABSENT,
    *,
    value_type: type[T] | None = None,
    converter: ValueConverter[T] | None = None,
    serializer: ValueSerializer[T] | None = None,
) -> FieldHolder[T]:
    """Declare a field bound to *selector*.

    *initial* may be a plain value or a ``Result``. The value type defaults
    to the type of a present initial value, else ``str``; its built-in
    converter and serializer are used unless overridden.
    """
    initial_value = as_result(initial)
    if value_type is None:
        value_type = type(initial_value.value) if isinstance(initial_value, Present) else str

    if converter is None or serializer is None:
        default_converter, default_serializer = converter_for(value_type)
        converter = converter or default_converter
        serializer = serializer or default_serializer

    return FieldHolder(
        selector=selector,
        initial_value=initial_value,
        value_converter=converter,
        value_serializer=serializer,
    )


def _present_upload(upload: UploadFile) -> Result[UploadFile]:
    # Browsers submit an empty, nameless part for an untouched file input.
    if not upload.filename and not upload.size:
        return ABSENT
    return Present(upload)


def file_upload_field(selector: str) -> FileFieldHolder[UploadFile]:
    """A file field whose value is the uploaded file itself."""
    return FileFieldHolder(selector=selector, value_converter=_present_upload)


def typed_file_upload_field[T](
    selector: str, converter: Callable[[UploadFile], Result[T]]
) -> FileFieldHolder[T]:
    """A file field whose value is ``converter(upload)``.

    Empty uploads never reach *converter*.
    """

    def convert(upload: UploadFile) -> Result[T]:
        present = _present_upload(upload)
        if not present:
            return ABSENT
        return converter(upload)

    return FileFieldHolder(selector=selector, value_converter=convert)
