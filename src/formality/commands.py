"""Client commands returned by event handlers.

A command is what the server sends back when a field event fires. The
transport that delivers it to the browser lives outside this package;
it only needs ``command.to_js()``.

Commands compose with ``+``::

    return run("clearErrors()") + alert("Saved")
"""

from __future__ import annotations

import json
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClientCommand:
    """A sequence of JavaScript statements for the client to run."""

    statements: tuple[str, ...] = ()

    def to_js(self) -> str:
        return "".join(f"{s.rstrip(';')};" for s in self.statements)

    def __add__(self, other: ClientCommand) -> ClientCommand:
        return ClientCommand(self.statements + other.statements)

    def __bool__(self) -> bool:
        return bool(self.statements)


NOOP = ClientCommand()
"""The command that does nothing."""


def run(script: str) -> ClientCommand:
    """Run raw JavaScript on the client."""
    return ClientCommand((script,))


def alert(message: str) -> ClientCommand:
    """Show a browser alert with *message*."""
    return run(f"alert({json.dumps(message)})")


def set_html(element_id: str, html: str) -> ClientCommand:
    """Replace the inner HTML of the element with id *element_id*."""
    return run(
        f"document.getElementById({json.dumps(element_id)}).innerHTML = {json.dumps(html)}"
    )
