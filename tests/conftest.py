"""
Pytest configuration for snowflakeid tests.
"""

from types import SimpleNamespace

import pytest

from snowflakeid import reset_generator
from snowflakeid import snowflake


@pytest.fixture(autouse=True)
def clean_default_generator(monkeypatch):
    """
    Isolate each test from the environment and from the cached default generator.
    """
    monkeypatch.delenv("SNOWFLAKE_MACHINE_ID", raising=False)
    monkeypatch.delenv("SNOWFLAKE_EPOCH", raising=False)
    reset_generator()
    yield
    reset_generator()


@pytest.fixture
def fixed_clock(monkeypatch):
    """
    Replace the generator's wall clock with a settable nanosecond value.

    Returns a one-element list; tests assign clock[0] to move time.
    """
    clock = [0]
    monkeypatch.setattr(snowflake, "time", SimpleNamespace(time_ns=lambda: clock[0]))
    return clock
