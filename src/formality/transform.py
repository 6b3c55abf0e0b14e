"""Template transforms — attribute bindings keyed by CSS selector.

A ``Transform`` is an ordered tuple of ``(selector, attribute, value)``
triples. Composition with ``&`` concatenates them, so it is associative
and keeps declaration order; applying a transform sets each attribute on
every element its selector matches, later bindings overwriting earlier
ones for the same attribute.

Because a transform is plain data, tests can assert on
``transform.attributes(selector)`` without rendering anything.

Application is delegated to ``lxml.html`` with ``cssselect`` for selector
matching::

    binder = set_attribute(".email", "name", "F1") & set_attribute(".email", "value", "")
    html = binder.apply('<input class="email" type="email">')
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import reduce

from kida.utils.html import Markup

from formality.errors import ConfigurationError

# Wraps fragments during application; never matched by real selectors.
_ROOT_TAG = "formality-fragment"

_DOCUMENT_RE = re.compile(r"\s*<(!doctype|html[\s>])", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class AttributeBinding:
    """Set *attribute* to *value* on elements matching *selector*."""

    selector: str
    attribute: str
    value: str


@dataclass(frozen=True, slots=True)
class Transform:
    """An ordered, composable set of attribute bindings."""

    bindings: tuple[AttributeBinding, ...] = ()

    def __and__(self, other: Transform) -> Transform:
        if not other.bindings:
            return self
        if not self.bindings:
            return other
        return Transform(self.bindings + other.bindings)

    def __iter__(self) -> Iterator[AttributeBinding]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __bool__(self) -> bool:
        return bool(self.bindings)

    def selectors(self) -> tuple[str, ...]:
        """Distinct selectors in first-use order."""
        return tuple(dict.fromkeys(b.selector for b in self.bindings))

    def attributes(self, selector: str | None = None) -> dict[str, str]:
        """Resulting attribute values, last binding winning.

        Restricted to *selector* when given.
        """
        return {
            b.attribute: b.value
            for b in self.bindings
            if selector is None or b.selector == selector
        }

    def apply(self, markup: str) -> Markup:
        """Apply every binding to HTML markup and return the result.

        Whole documents (leading ``<!DOCTYPE`` or ``<html``) keep their
        doctype, head and body; anything else is treated as a fragment.

        The markup is re-serialized by lxml, so the output is not
        byte-for-byte the input even outside bound elements: entities such
        as ``&nbsp;`` come back as the characters they stand for, and
        attribute quoting is normalized.
        """
        if not self.bindings:
            return Markup(markup)

        import lxml.html
        from cssselect import SelectorError

        is_document = _DOCUMENT_RE.match(markup) is not None
        if is_document:
            root = lxml.html.document_fromstring(markup)
        else:
            root = lxml.html.fragment_fromstring(markup, create_parent=_ROOT_TAG)

        for binding in self.bindings:
            try:
                matches = root.cssselect(binding.selector)
            except SelectorError as exc:
                msg = f"Invalid selector {binding.selector!r}: {exc}"
                raise ConfigurationError(msg) from exc
            for element in matches:
                if is_document or element is not root:
                    element.set(binding.attribute, binding.value)

        if is_document:
            doctype = root.getroottree().docinfo.doctype
            return Markup(lxml.html.tostring(root, doctype=doctype or None, encoding="unicode"))

        rendered = lxml.html.tostring(root, encoding="unicode")
        inner = rendered[rendered.index(">") + 1 : rendered.rindex("<")]
        return Markup(inner)

    def __call__(self, markup: str) -> Markup:
        return self.apply(markup)


EMPTY = Transform()


def set_attribute(selector: str, attribute: str, value: str) -> Transform:
    """A transform with a single binding."""
    return Transform((AttributeBinding(selector, attribute, value),))


def compose(transforms: Iterable[Transform]) -> Transform:
    """Left-fold *transforms* with ``&``."""
    return reduce(Transform.__and__, transforms, EMPTY)
