"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from openapi_aggregator.config import CONFIG_KEYS
from openapi_aggregator.logging import LOG_FORMAT_ENV_VAR, LOG_LEVEL_ENV_VAR, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove settings that would leak from the developer's shell into tests."""
    for key in (*CONFIG_KEYS, LOG_FORMAT_ENV_VAR, LOG_LEVEL_ENV_VAR):
        monkeypatch.delenv(key, raising=False)
    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
