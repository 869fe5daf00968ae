"""Shared fixtures."""

from __future__ import annotations

import pytest

from seedstream import ambient


@pytest.fixture(autouse=True)
def fresh_ambient_generator():
    """Start and end every test with an unseeded default generator."""
    ambient.set_state(None, kind=ambient.DEFAULT_KIND)
    yield
    ambient.set_state(None, kind=ambient.DEFAULT_KIND)
