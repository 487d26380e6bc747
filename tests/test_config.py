"""
Tests for configuration module.

This module tests the Config class and its methods for resolving
configuration from command-line arguments and environment variables.
"""

import argparse
import os
from unittest.mock import patch

import pytest

from xenfo_client.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT,
    DEVELOPMENT_URL,
    ENV_API_KEY,
    ENV_API_URL,
    ENV_LOG_LEVEL,
    ENV_MODE,
    ENV_TIMEOUT,
    PRODUCTION_URL,
    Config,
    add_config_arguments,
    default_base_url,
)

# =============================================================================
# CONFIG INITIALIZATION TESTS
# =============================================================================


class TestConfigInitialization:
    """Tests for Config dataclass initialization."""

    def test_valid_config_creation(self):
        """Test creating a valid Config instance."""
        config = Config(base_url="http://localhost:4000", api_key="key", timeout=5.0)

        assert config.base_url == "http://localhost:4000"
        assert config.api_key == "key"
        assert config.timeout == 5.0
        assert config.log_level == DEFAULT_LOG_LEVEL

    def test_api_key_defaults_to_empty(self):
        """Test that the API key is optional."""
        config = Config(base_url="http://localhost:4000")

        assert config.api_key == ""
        assert config.timeout == DEFAULT_TIMEOUT

    def test_config_is_frozen(self):
        """Test that Config is immutable (frozen dataclass)."""
        config = Config(base_url="http://localhost:4000")

        with pytest.raises(AttributeError):
            config.base_url = "http://other:4000"  # type: ignore[misc]

    def test_empty_base_url_raises_error(self):
        """Test that empty base_url raises ValueError."""
        with pytest.raises(ValueError, match="base_url cannot be empty"):
            Config(base_url="")

    def test_zero_timeout_raises_error(self):
        """Test that zero timeout raises ValueError."""
        with pytest.raises(ValueError, match="timeout must be a positive number"):
            Config(base_url="http://localhost:4000", timeout=0)

    def test_unknown_log_level_raises_error(self):
        """Test that an unknown log level raises ValueError."""
        with pytest.raises(ValueError, match="log_level must be one of"):
            Config(base_url="http://localhost:4000", log_level="LOUD")


# =============================================================================
# BASE URL SELECTION TESTS
# =============================================================================


class TestDefaultBaseUrl:
    """Tests for default_base_url()."""

    def test_production_by_default(self):
        """Test that production is used when no mode is set."""
        assert default_base_url({}) == PRODUCTION_URL

    def test_development_mode(self):
        """Test that development mode selects the local backend."""
        assert default_base_url({ENV_MODE: "development"}) == DEVELOPMENT_URL

    def test_development_mode_case_insensitive(self):
        """Test that the mode value is case-insensitive."""
        assert default_base_url({ENV_MODE: " Development "}) == DEVELOPMENT_URL

    def test_other_mode_is_production(self):
        """Test that any other mode falls back to production."""
        assert default_base_url({ENV_MODE: "staging"}) == PRODUCTION_URL


# =============================================================================
# CONFIG FROM ARGS TESTS
# =============================================================================


class TestConfigFromArgs:
    """Tests for Config.from_args() class method."""

    def test_default_values(self):
        """Test that defaults are used when no args provided."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args([])

            assert config.base_url == PRODUCTION_URL
            assert config.api_key == ""
            assert config.timeout == DEFAULT_TIMEOUT
            assert config.log_level == DEFAULT_LOG_LEVEL

    def test_url_from_cli(self):
        """Test base URL from command-line argument."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(["--url", "http://example.com:4000"])

            assert config.base_url == "http://example.com:4000"

    def test_url_short_flag(self):
        """Test base URL from -u short flag."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(["-u", "http://example.com:4000"])

            assert config.base_url == "http://example.com:4000"

    def test_trailing_slash_removed(self):
        """Test that trailing slash is stripped from base URL."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(["--url", "http://example.com:4000/"])

            assert config.base_url == "http://example.com:4000"

    def test_development_flag(self):
        """Test --development selects the local backend."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(["--development"])

            assert config.base_url == DEVELOPMENT_URL

    def test_url_from_env(self):
        """Test base URL from environment variable."""
        with patch.dict(os.environ, {ENV_API_URL: "http://env-server:4000"}, clear=True):
            config = Config.from_args([])

            assert config.base_url == "http://env-server:4000"

    def test_cli_overrides_env(self):
        """Test that CLI args take precedence over environment variables."""
        env = {
            ENV_API_URL: "http://env-server:4000",
            ENV_API_KEY: "env-key",
            ENV_TIMEOUT: "60",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_args(
                ["--url", "http://cli:4000", "--api-key", "cli-key", "--timeout", "15"]
            )

            assert config.base_url == "http://cli:4000"
            assert config.api_key == "cli-key"
            assert config.timeout == 15.0

    def test_api_key_and_timeout_from_env(self):
        """Test API key and timeout from environment variables."""
        with patch.dict(os.environ, {ENV_API_KEY: "env-key", ENV_TIMEOUT: "45.5"}, clear=True):
            config = Config.from_args([])

            assert config.api_key == "env-key"
            assert config.timeout == 45.5

    def test_log_level_from_env_is_upper_cased(self):
        """Test log level from the environment is normalized."""
        with patch.dict(os.environ, {ENV_LOG_LEVEL: "debug"}, clear=True):
            config = Config.from_args([])

            assert config.log_level == "DEBUG"

    def test_log_level_from_cli(self):
        """Test --log-level accepts lower-case names."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(["--log-level", "info"])

            assert config.log_level == "INFO"

    def test_invalid_timeout_env_raises(self):
        """Test that a non-numeric timeout in the environment raises ValueError."""
        with patch.dict(os.environ, {ENV_TIMEOUT: "soon"}, clear=True):
            with pytest.raises(ValueError):
                Config.from_args([])

    def test_unknown_args_are_ignored(self):
        """Test that from_args tolerates unrelated arguments."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(["login", "alice", "--url", "http://x:1"])

            assert config.base_url == "http://x:1"


class TestConfigFromEnv:
    """Tests for Config.from_env() and from_namespace()."""

    def test_from_env_development_mode(self):
        """Test XENFO_ENV=development selects the local backend."""
        with patch.dict(os.environ, {ENV_MODE: "development"}, clear=True):
            config = Config.from_env()

            assert config.base_url == DEVELOPMENT_URL

    def test_explicit_url_beats_development_mode(self):
        """Test an explicit URL wins over the development default."""
        env = {ENV_MODE: "development", ENV_API_URL: "http://explicit:4000"}
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()

            assert config.base_url == "http://explicit:4000"

    def test_from_namespace_with_parser(self):
        """Test add_config_arguments() wires into a caller's parser."""
        parser = argparse.ArgumentParser()
        add_config_arguments(parser)
        parsed = parser.parse_args(["--api-key", "k", "-t", "3"])

        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_namespace(parsed)

        assert config.api_key == "k"
        assert config.timeout == 3.0
