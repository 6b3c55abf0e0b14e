"""Tests for formality.events — event handler binding and dispatch."""

import re

from formality.commands import NOOP, ClientCommand, run
from formality.config import FormalityConfig
from formality.context import interaction
from formality.converters import convert_int, convert_str
from formality.dispatch import FormSession, process_event
from formality.events import EventHandler, on
from formality.result import ABSENT, InvalidValue


def _token_from(call: str) -> str:
    match = re.fullmatch(r"formality\.sendEvent\('([^']+)', this\.value\)", call)
    assert match, f"unexpected event call: {call!r}"
    return match.group(1)


class TestBinder:
    def test_sets_on_event_attribute(self, active: FormSession) -> None:
        handler = on("change", lambda v: NOOP)
        attributes = handler.binder(".age", convert_int).attributes(".age")
        assert list(attributes) == ["onchange"]
        _token_from(attributes["onchange"])

    def test_each_binder_call_registers_a_new_token(self, active: FormSession) -> None:
        handler = on("blur", lambda v: NOOP)
        first = _token_from(handler.binder(".f", convert_str).attributes()["onblur"])
        second = _token_from(handler.binder(".f", convert_str).attributes()["onblur"])
        assert first != second

    def test_config_controls_call_and_prefix(self) -> None:
        config = FormalityConfig(event_function="app.fieldEvent", event_attribute_prefix="data-on-")
        with interaction(FormSession(config)):
            binding = on("input", lambda v: NOOP).binder("#q", convert_str)
        (attribute, call), = binding.attributes().items()
        assert attribute == "data-on-input"
        assert re.fullmatch(r"app\.fieldEvent\('F[\w-]+', this\.value\)", call)


class TestDispatch:
    def test_converted_value_reaches_handler(self, active: FormSession) -> None:
        seen: list[int] = []

        def remember(age: int) -> ClientCommand:
            seen.append(age)
            return run("ok()")

        token = _token_from(on("change", remember).binder(".age", convert_int).attributes()["onchange"])
        assert process_event(token, "41").to_js() == "ok();"
        assert seen == [41]

    def test_handler_returning_none_gives_noop(self, active: FormSession) -> None:
        token = _token_from(on("change", lambda v: None).binder(".f", convert_str).attributes()["onchange"])
        assert process_event(token, "x") is NOOP

    def test_failed_conversion_without_fallback_is_noop(self, active: FormSession) -> None:
        called: list[int] = []
        token = _token_from(on("change", called.append).binder(".age", convert_int).attributes()["onchange"])
        assert process_event(token, "not a number") is NOOP
        assert called == []

    def test_failed_conversion_goes_to_invalid_value_handler(self, active: FormSession) -> None:
        failures: list[InvalidValue] = []

        def invalid(failure: InvalidValue) -> ClientCommand:
            failures.append(failure)
            return run("showError()")

        handler = EventHandler("change", lambda v: NOOP, invalid)
        token = _token_from(handler.binder(".age", convert_int).attributes()["onchange"])

        assert process_event(token, "abc").to_js() == "showError();"
        (failure,) = failures
        assert failure.message == "'abc' is not a whole number."
        assert isinstance(failure.cause, ValueError)
        assert failure.errors == ()
        assert failure.raw == "abc"

    def test_absent_conversion_uses_generic_message(self, active: FormSession) -> None:
        failures: list[InvalidValue] = []
        handler = on("change", lambda v: NOOP, invalid=lambda f: failures.append(f))
        token = _token_from(handler.binder(".f", lambda text: ABSENT).attributes()["onchange"])

        assert process_event(token, "") is NOOP
        assert failures == [InvalidValue("Failed to convert value.", None, (), "")]
