"""Tests for configuration management."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError


class TestSettingsValidation:
    """Tests for settings validation and parsing."""

    def test_default_values(self):
        """Test default configuration values."""
        from sentrydsn.config import Settings

        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_name == "sentrydsn"
            assert settings.debug is False
            assert settings.log_level == "INFO"
            assert settings.host == "0.0.0.0"
            assert settings.port == 8000
            assert settings.auth_header == "X-Sentry-Auth"
            assert settings.dsn_scheme == "https"

    def test_auth_header_override(self):
        """Test reading the auth header name from the environment."""
        from sentrydsn.config import Settings

        with patch.dict(os.environ, {"AUTH_HEADER": "X-Original-Sentry-Auth"}, clear=False):
            settings = Settings(_env_file=None)
            assert settings.auth_header == "X-Original-Sentry-Auth"

    def test_parse_dsn_scheme_case(self):
        """Test that dsn_scheme is normalised."""
        from sentrydsn.config import Settings

        with patch.dict(os.environ, {"DSN_SCHEME": " HTTP "}, clear=False):
            settings = Settings(_env_file=None)
            assert settings.dsn_scheme == "http"

    def test_parse_dsn_scheme_empty(self):
        """Test empty dsn_scheme falls back to https."""
        from sentrydsn.config import Settings

        with patch.dict(os.environ, {"DSN_SCHEME": ""}, clear=False):
            settings = Settings(_env_file=None)
            assert settings.dsn_scheme == "https"

    def test_parse_dsn_scheme_invalid(self):
        """Test rejecting schemes other than http/https."""
        from sentrydsn.config import Settings

        with patch.dict(os.environ, {"DSN_SCHEME": "ftp"}, clear=False):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_parse_log_level(self):
        """Test that log_level is upper-cased."""
        from sentrydsn.config import Settings

        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=False):
            settings = Settings(_env_file=None)
            assert settings.log_level == "DEBUG"
