"""Tests for formality.testing — bound markup assertions."""

import pytest

from formality.testing import assert_bound, element_attributes

MARKUP = '<p>Intro <input class="f" name="F1x" data-min="3"></p>'


class TestElementAttributes:
    def test_returns_attributes(self) -> None:
        assert element_attributes(MARKUP, "input") == {
            "class": "f",
            "name": "F1x",
            "data-min": "3",
        }

    def test_missing_tag(self) -> None:
        with pytest.raises(AssertionError, match="No <select> element"):
            element_attributes(MARKUP, "select")


class TestAssertBound:
    def test_regex_match(self) -> None:
        attributes = assert_bound(MARKUP, "input", name=r"F\w+", data_min="3")
        assert attributes["class"] == "f"

    def test_missing_attribute(self) -> None:
        with pytest.raises(AssertionError, match="no 'value' attribute"):
            assert_bound(MARKUP, "input", value="")

    def test_mismatch_is_full_match(self) -> None:
        with pytest.raises(AssertionError, match="does not match"):
            assert_bound(MARKUP, "input", name="F1")
