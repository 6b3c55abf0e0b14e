"""Kida integration — apply bindings to rendered templates.

``install(env)`` registers two filters on a kida ``Environment``:

- ``bind``: apply a ``Transform`` to a markup string.
- ``notices_for``: messages reported against a field token in the
  current interaction.

Usage::

    env = Environment(loader=FileSystemLoader("templates"))
    install(env)

    with interaction(session):
        html = render_bound(env, "signup.html", email.binder() & age.binder())
"""

from typing import Any

from kida import Environment
from kida.utils.html import Markup

from formality.context import in_interaction, notices
from formality.transform import Transform


def bind(markup: str, transform: Transform) -> Markup:
    """Apply *transform* to *markup*.

    Example:
        {{ field_html | bind(binder) }}
    """
    return transform.apply(str(markup))


def notices_for(token: str | None) -> list[str]:
    """Messages reported against *token*; empty outside an interaction.

    Example:
        {% for msg in token | notices_for %}
          <span class="error">{{ msg }}</span>
        {% end %}
    """
    if not token or not in_interaction():
        return []
    return [notice.message for notice in notices(token)]


FILTERS: dict[str, Any] = {
    "bind": bind,
    "notices_for": notices_for,
}


def install(env: Environment) -> Environment:
    """Register formality's filters on *env* and return it."""
    env.update_filters(FILTERS)
    return env


def render_bound(env: Environment, template_name: str, transform: Transform, **context: Any) -> Markup:
    """Render *template_name* with *context*, then apply *transform*."""
    template = env.get_template(template_name)
    return transform.apply(template.render(context))
