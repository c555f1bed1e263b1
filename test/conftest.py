"""
Test Configuration and Fixtures

Environment setup MUST happen before any application import: settings and
the loguru sinks are configured at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('API_BASE_URL', 'http://reservation.test')
    os.environ.setdefault('API_TOKEN', 'test-token')
    os.environ.setdefault('SERVICE_NAME', 'checkout-test')


_early_setup_test_environment()

import pytest  # noqa: E402

from src.platform.config.core_setting import Settings  # noqa: E402


@pytest.fixture(scope='session')
def test_settings() -> Settings:
    return Settings()
