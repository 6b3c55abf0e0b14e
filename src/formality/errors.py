"""Formality exception hierarchy.

Conversion and validation problems never raise: they end up as ``Failed``
results and notices. These exceptions are for misuse of the binding
machinery itself.
"""


class FormalityError(Exception):
    """Base for all formality-specific errors."""


class ConfigurationError(FormalityError):
    """Raised when configuration or a field declaration is invalid.

    Typically surfaces when a ``FormSession`` is created or when ``field()``
    is asked for a value type it has no converter for.
    """


class UnknownTokenError(FormalityError, LookupError):
    """A submission or event named a token the session never issued.

    Also raised for tokens that were evicted from the registry.
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"No handler registered for token {token!r}")


class UnboundHandlerError(FormalityError):
    """A two-phase handler was invoked before its token was bound."""


class AlreadyBoundError(FormalityError):
    """A two-phase handler was bound a second time."""
