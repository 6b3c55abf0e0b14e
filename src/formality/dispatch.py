"""Token registration and dispatch.

Mirrors the compiled-table pattern of a router: a ``FunctionRegistry``
maps opaque tokens to handlers. Each ``FormSession`` owns one registry;
``register()`` and the ``process_*`` functions always act on the
session of the current ``interaction()``.

Tokens are minted fresh on every registration, so every render of a
page gets its own set. The registry is bounded: once ``max_handlers``
is reached, the oldest registrations are evicted and their tokens stop
resolving.
"""

import logging
import secrets
from collections import OrderedDict
from collections.abc import Callable, Mapping
from typing import Any

from formality.commands import NOOP, ClientCommand
from formality.config import FormalityConfig
from formality.context import current_session
from formality.errors import AlreadyBoundError, UnboundHandlerError, UnknownTokenError

logger = logging.getLogger("formality.dispatch")

type Handler = Callable[[Any], Any]


class FunctionRegistry:
    """Token → handler table for one session."""

    __slots__ = ("_config", "_handlers")

    def __init__(self, config: FormalityConfig) -> None:
        self._config = config
        self._handlers: OrderedDict[str, Handler] = OrderedDict()

    def register(self, handler: Handler) -> str:
        """Store *handler* under a newly minted token and return the token."""
        cfg = self._config
        token = cfg.token_prefix + secrets.token_urlsafe(cfg.token_bytes)
        while token in self._handlers:
            token = cfg.token_prefix + secrets.token_urlsafe(cfg.token_bytes)
        self._handlers[token] = handler

        while len(self._handlers) > cfg.max_handlers:
            evicted, _ = self._handlers.popitem(last=False)
            logger.debug("evicted handler %s (max_handlers=%d)", evicted, cfg.max_handlers)

        logger.debug("registered handler %s", token)
        return token

    def dispatch(self, token: str, value: Any) -> Any:
        """Invoke the handler registered for *token* with *value*.

        Raises ``UnknownTokenError`` if the token was never issued or has
        been evicted.
        """
        handler = self._handlers.get(token)
        if handler is None:
            logger.warning("dispatch to unknown token %s", token)
            raise UnknownTokenError(token)
        logger.debug("dispatching %s", token)
        return handler(value)

    def discard(self, token: str) -> None:
        """Forget *token*. Unknown tokens are ignored."""
        self._handlers.pop(token, None)

    def clear(self) -> None:
        self._handlers.clear()

    def __contains__(self, token: object) -> bool:
        return token in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


class FormSession:
    """Per-user binding state: configuration plus the token registry.

    Keep one per browser session (e.g. keyed by the session cookie) and
    enter it with ``interaction(session)`` for every request.
    """

    __slots__ = ("config", "registry")

    def __init__(self, config: FormalityConfig | None = None) -> None:
        config = config or FormalityConfig()
        config.validate()
        self.config = config
        self.registry = FunctionRegistry(config)

    def __repr__(self) -> str:
        return f"<FormSession handlers={len(self.registry)}>"


class BoundHandler:
    """A handler that needs its own token, built in two phases.

    The token only exists after registration, so the handler is created
    unbound, registered, then bound::

        handler = BoundHandler(lambda token, value: ...)
        handler.bind(register(handler))

    Calling it before ``bind()`` raises ``UnboundHandlerError``.
    """

    __slots__ = ("_fn", "_token")

    def __init__(self, fn: Callable[[str, Any], Any]) -> None:
        self._fn = fn
        self._token: str | None = None

    @property
    def token(self) -> str:
        if self._token is None:
            msg = "Handler invoked before its token was bound"
            raise UnboundHandlerError(msg)
        return self._token

    def bind(self, token: str) -> str:
        if self._token is not None:
            msg = f"Handler already bound to {self._token!r}"
            raise AlreadyBoundError(msg)
        self._token = token
        return token

    def __call__(self, value: Any) -> Any:
        return self._fn(self.token, value)


def register(handler: Handler) -> str:
    """Register *handler* with the current session and return its token."""
    return current_session().registry.register(handler)


def register_bound(fn: Callable[[str, Any], Any]) -> str:
    """Register a handler that receives its own token as first argument."""
    handler = BoundHandler(fn)
    return handler.bind(register(handler))


def dispatch(token: str, value: Any) -> Any:
    """Route *value* to the handler registered for *token*."""
    return current_session().registry.dispatch(token, value)


def process_form(form: Mapping[str, Any]) -> list[str]:
    """Dispatch every registered token present in a submitted form.

    *form* is a ``FormData`` (its ``files`` are dispatched too) or any
    mapping of field names to values. Keys that are not registered tokens
    are ignored. Returns the tokens that were dispatched, in form order.
    """
    registry = current_session().registry
    processed: list[str] = []

    for key in form:
        if key in registry:
            registry.dispatch(key, form[key])
            processed.append(key)

    files: Mapping[str, Any] = getattr(form, "files", {})
    for key, upload in files.items():
        if key in registry:
            registry.dispatch(key, upload)
            processed.append(key)

    return processed


def process_event(token: str, value: str) -> ClientCommand:
    """Dispatch one field event and return the command for the client."""
    result = dispatch(token, value)
    if result is None:
        return NOOP
    return result
