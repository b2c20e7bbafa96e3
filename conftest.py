"""
Repository-level pytest configuration.

Provides:
  - The repository root path for tests that read files relative to it
  - Environment defaults for the fixture layer so local runs never reach
    a real CNA2.0 server unless the caller asks for one
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _fixture_env_defaults() -> Generator[None, None, None]:
    """
    Set fixture environment defaults if not already provided by the user/CI.

    Values set by run_tests.py or the CI job win over these.
    """
    defaults = {
        "SWT_AUTOMATION_SERVER": "localhost",
        "SWT_AUTOMATION_BROWSER": "chrome",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
