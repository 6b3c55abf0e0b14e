"""Assertion helpers for bound markup.

Each helper parses the markup with ``lxml.html`` and produces a clear
error message on failure::

    html = name_field.binder().apply(TEMPLATE)
    assert_bound(html, "div", name=r"F.+", value="")
"""

import re

import lxml.html


def element_attributes(markup: str, tag: str) -> dict[str, str]:
    """Attributes of the first *tag* element in *markup*.

    Raises ``AssertionError`` if there is none.
    """
    root = lxml.html.fragment_fromstring(str(markup), create_parent="formality-fragment")
    found = root.find(f".//{tag}")
    assert found is not None, f"No <{tag}> element in markup: {str(markup)[:500]}"
    return dict(found.attrib)


def assert_bound(markup: str, tag: str, /, **expected: str) -> dict[str, str]:
    """Assert the first *tag* element has attributes matching *expected*.

    Values are regular expressions that must match the whole attribute
    value. Underscores in names become dashes (``data_test`` →
    ``data-test``). Returns the element's attributes.
    """
    attributes = element_attributes(markup, tag)
    for name, pattern in expected.items():
        attribute = name.replace("_", "-")
        assert attribute in attributes, (
            f"<{tag}> has no {attribute!r} attribute; attributes: {attributes!r}"
        )
        assert re.fullmatch(pattern, attributes[attribute]), (
            f"<{tag}> {attribute}={attributes[attribute]!r} does not match {pattern!r}"
        )
    return attributes
