"""Shared fixtures: a fresh session and an entered interaction."""

from collections.abc import Iterator

import pytest

from formality.context import interaction
from formality.dispatch import FormSession


@pytest.fixture
def session() -> FormSession:
    return FormSession()


@pytest.fixture
def active(session: FormSession) -> Iterator[FormSession]:
    """The session, with an interaction open for the duration of the test."""
    with interaction(session):
        yield session
