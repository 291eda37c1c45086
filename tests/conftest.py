"""Pytest fixtures for prdash tests."""

import pytest

from helpers import NOW, FakeHost


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def clock():
    return lambda: NOW
