"""Formality — declarative form-field binding for server-rendered HTML.

Declare a field once, bind it at render time, read its converted and
validated value when the form comes back::

    from formality import FormSession, check, field, interaction, process_form

    email = field(".email").validating_with(
        check(lambda v: None if "@" in v else "Must be an email address", required="required")
    )

    session = FormSession()

    with interaction(session):
        html = email.binder().apply(template)

    with interaction(session):
        process_form(form)
        email.value()  # Present("me@example.com") or Failed(...)
"""

__version__ = "0.1.0"
__all__ = [
    "ABSENT",
    "NOOP",
    "Absent",
    "ClientCommand",
    "ConfigurationError",
    "EventHandler",
    "Failed",
    "FieldHolder",
    "FileFieldHolder",
    "FormData",
    "FormSession",
    "FormalityConfig",
    "FormalityError",
    "InvalidValue",
    "Present",
    "Transform",
    "UnknownTokenError",
    "UploadFile",
    "Validation",
    "check",
    "field",
    "file_upload_field",
    "interaction",
    "on",
    "parse_form_data",
    "process_event",
    "process_form",
    "typed_file_upload_field",
]


# Public name → defining module. Every entry must also be in __all__.
_LAZY_IMPORTS: dict[str, str] = {
    "ABSENT": "formality.result",
    "Absent": "formality.result",
    "Failed": "formality.result",
    "InvalidValue": "formality.result",
    "Present": "formality.result",
    "ClientCommand": "formality.commands",
    "NOOP": "formality.commands",
    "ConfigurationError": "formality.errors",
    "FormalityError": "formality.errors",
    "UnknownTokenError": "formality.errors",
    "FieldHolder": "formality.fields",
    "FileFieldHolder": "formality.fields",
    "field": "formality.fields",
    "file_upload_field": "formality.fields",
    "typed_file_upload_field": "formality.fields",
    "EventHandler": "formality.events",
    "on": "formality.events",
    "Validation": "formality.validation",
    "check": "formality.validation",
    "FormSession": "formality.dispatch",
    "process_event": "formality.dispatch",
    "process_form": "formality.dispatch",
    "interaction": "formality.context",
    "FormData": "formality.forms",
    "UploadFile": "formality.forms",
    "parse_form_data": "formality.forms",
    "FormalityConfig": "formality.config",
    "Transform": "formality.transform",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formality`` fast and free of lxml/kida until used.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
