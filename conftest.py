"""Root conftest — runs before any test module imports."""

import os

import pytest

# CI runners often set FORCE_COLOR=1, which makes Rich emit ANSI escape
# codes into CLI output and breaks plain-substring assertions.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"

POSTFLOW_ENV_VARS = (
    "POSTFLOW_CONTENT_DIR",
    "POSTFLOW_AUTHORS_DIR",
    "POSTFLOW_GENERATOR",
    "POSTFLOW_AUTHOR",
    "POSTFLOW_GENERATOR_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_postflow_env(monkeypatch):
    """Keep a developer's POSTFLOW_* settings out of every test."""
    for key in POSTFLOW_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
