"""
Shared pytest fixtures for the pwcycle test suite.
"""
import os
from pathlib import Path

import pytest

from pwcycle.automation.sites import SALESFORCE
from pwcycle.core.config import ENV_PREFIX
from tests.helpers import FakeEngine, write_fixtures


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PWCYCLE_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def site():
    return SALESFORCE


@pytest.fixture
def data_dir(tmp_path) -> Path:
    return write_fixtures(tmp_path / "data")
