"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads Settings
- In-process backends (memory store + memory notifier) for every test
- A fresh DI container state per test

Architecture:
- Unit tests (test/**/unit/): build use cases directly over in-memory adapters
- Repo tests (test/**/repo/): same behaviour checked against every store backend
- API tests (test/**/api/): FastAPI TestClient over the real app
"""

# =============================================================================
# Environment setup MUST happen before any other imports
# Settings and the loguru file sink read these at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['TICKET_STORE_BACKEND'] = 'memory'
    os.environ['CHANGE_NOTIFIER_BACKEND'] = 'memory'
    os.environ['TICKET_STATUS_SCHEMA'] = 'v2'
    os.environ['KVROCKS_KEY_PREFIX'] = 'test_'


_early_setup_test_environment()

# =============================================================================
# Imports (after environment setup)
# =============================================================================
import pytest  # noqa: E402

from src.platform.config.di import cleanup  # noqa: E402


@pytest.fixture(autouse=True)
def reset_container():
    """Every test starts with an empty store and no subscribers"""
    cleanup()
    yield
    cleanup()
