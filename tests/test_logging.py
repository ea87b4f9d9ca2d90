"""Tests for CLI logging setup."""

from __future__ import annotations

import logging
import os
import sys
from unittest.mock import patch

import pytest

from centralconfig.core.logging import FORMAT_ENV, LEVEL_ENV, setup_logging


@pytest.fixture
def clean_env():
    with patch.dict(os.environ, {}, clear=False):
        os.environ.pop(LEVEL_ENV, None)
        os.environ.pop(FORMAT_ENV, None)
        yield


class TestSetupLogging:
    def test_default_is_quiet(self, clean_env):
        assert setup_logging() == "WARNING"
        assert logging.getLogger("centralconfig").level == logging.WARNING

    def test_verbose_selects_debug(self, clean_env):
        assert setup_logging(verbose=True) == "DEBUG"
        assert logging.getLogger("centralconfig").level == logging.DEBUG

    def test_environment_overrides_flag(self, clean_env):
        os.environ[LEVEL_ENV] = "info"
        assert setup_logging(verbose=True) == "INFO"

    def test_http_clients_stay_at_warning(self, clean_env):
        setup_logging(verbose=True)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_handler_writes_to_stderr(self, clean_env):
        setup_logging()
        handlers = logging.getLogger().handlers
        assert any(
            isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
            for h in handlers
        )
