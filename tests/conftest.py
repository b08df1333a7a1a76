"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Builder defaults used by every test unless a test overrides them
TEST_ENV = {
    "SEARCH_LIGHT_BASE_THRESHOLD": "0",
    "SEARCH_LIGHT_CASE_SENSITIVE": "false",
    "SEARCH_LIGHT_SORT_BY_RELEVANCE": "false",
    "SEARCH_LIGHT_INJECT_STATS": "false",
    "SEARCH_LIGHT_STATS_PROPERTY": "searchResults",
    "SEARCH_LIGHT_LOG_LEVEL": "info",
    "SEARCH_LIGHT_LOG_JSON": "true",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from search_light.config import get_settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset SEARCH_LIGHT_* variables and the cached settings before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
