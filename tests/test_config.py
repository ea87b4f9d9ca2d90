"""Tests for environment-driven settings."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from centralconfig.core.config import Settings, load_settings

_KEYS = (
    "CENTRALCONFIG_PROJECT_PATTERNS",
    "CENTRALCONFIG_NUGET_URL",
    "CENTRALCONFIG_HTTP_TIMEOUT",
    "CENTRALCONFIG_HTTP_CONCURRENCY",
)


@pytest.fixture
def clean_env():
    with patch.dict(os.environ, {}, clear=False):
        for key in _KEYS:
            os.environ.pop(key, None)
        yield


class TestLoadSettings:
    def test_defaults(self, clean_env):
        assert load_settings() == Settings()

    def test_patterns_are_comma_separated(self, clean_env):
        os.environ["CENTRALCONFIG_PROJECT_PATTERNS"] = "**/*.csproj, src/*.proj ,"
        assert load_settings().project_patterns == ("**/*.csproj", "src/*.proj")

    def test_nuget_url_trailing_slash_stripped(self, clean_env):
        os.environ["CENTRALCONFIG_NUGET_URL"] = "https://feed.example/v3-flatcontainer/"
        assert load_settings().nuget_url == "https://feed.example/v3-flatcontainer"

    def test_http_values(self, clean_env):
        os.environ["CENTRALCONFIG_HTTP_TIMEOUT"] = "2.5"
        os.environ["CENTRALCONFIG_HTTP_CONCURRENCY"] = "0"
        settings = load_settings()
        assert settings.http_timeout == 2.5
        assert settings.http_concurrency == 1

    def test_invalid_number_raises(self, clean_env):
        os.environ["CENTRALCONFIG_HTTP_TIMEOUT"] = "soon"
        with pytest.raises(ValueError):
            load_settings()
