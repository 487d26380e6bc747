"""
Configuration management for the Xenfo API client.

Configuration is resolved from multiple sources with the following
precedence (highest to lowest):

1. Command-line arguments (--url, --api-key, --timeout, --log-level)
2. Environment variables (XENFO_API_URL, XENFO_API_KEY, ...)
3. Default values

The configuration is immutable once created, so a client built from it
always talks to the same backend with the same credentials.

Example:
    # From CLI args
    config = Config.from_args(["--url", "http://localhost:4000"])

    # From the environment only
    config = Config.from_env()
    print(config.base_url)  # "https://api.xenfo.rocks"
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# DEFAULT CONFIGURATION VALUES
# =============================================================================

# Public backend used unless development mode is requested.
PRODUCTION_URL = "https://api.xenfo.rocks"

# Local backend started by the API project's dev script.
DEVELOPMENT_URL = "http://localhost:4000"

# Default HTTP request timeout in seconds. Applied by the transport.
DEFAULT_TIMEOUT = 30.0

DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variable names for configuration.
ENV_API_URL = "XENFO_API_URL"
ENV_API_KEY = "XENFO_API_KEY"
ENV_TIMEOUT = "XENFO_REQUEST_TIMEOUT"
ENV_LOG_LEVEL = "XENFO_LOG_LEVEL"
ENV_MODE = "XENFO_ENV"


def default_base_url(environ: dict[str, str] | None = None) -> str:
    """
    Select the backend URL from the runtime mode.

    Returns DEVELOPMENT_URL when XENFO_ENV is "development", otherwise
    PRODUCTION_URL.
    """
    env = os.environ if environ is None else environ
    if env.get(ENV_MODE, "").strip().lower() == "development":
        return DEVELOPMENT_URL
    return PRODUCTION_URL


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for the API client.

    Attributes:
        base_url: Backend base URL (e.g., "https://api.xenfo.rocks").
                  Should NOT include a trailing slash.
        api_key: Static API key sent in the Authorization header. May be
                 empty for public deployments.
        timeout: HTTP request timeout in seconds.
        log_level: Root log level used by the CLI.

    Example:
        config = Config(base_url="http://localhost:4000", api_key="key")
    """

    base_url: str
    api_key: str = ""
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """
        Validate configuration values after initialization.

        Raises:
            ValueError: If base_url is empty, timeout is not positive, or
                        log_level is not a standard level name.
        """
        if not self.base_url:
            raise ValueError("base_url cannot be empty")

        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number")

        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

    @classmethod
    def from_namespace(cls, parsed: argparse.Namespace) -> Config:
        """
        Build a Config from parsed arguments, falling back to environment
        variables and then defaults for anything left unset.

        Missing attributes on ``parsed`` are treated as "not given", so an
        empty Namespace resolves purely from the environment.
        """
        if getattr(parsed, "development", False):
            fallback_url = DEVELOPMENT_URL
        else:
            fallback_url = default_base_url()

        # Resolve base_url with precedence: CLI > ENV > DEFAULT
        base_url = getattr(parsed, "base_url", None) or os.environ.get(ENV_API_URL) or fallback_url
        base_url = base_url.rstrip("/")

        api_key = getattr(parsed, "api_key", None)
        if api_key is None:
            api_key = os.environ.get(ENV_API_KEY, "")

        timeout = getattr(parsed, "timeout", None)
        if timeout is None:
            if ENV_TIMEOUT in os.environ:
                timeout = float(os.environ[ENV_TIMEOUT])
            else:
                timeout = DEFAULT_TIMEOUT

        log_level = (
            getattr(parsed, "log_level", None)
            or os.environ.get(ENV_LOG_LEVEL)
            or DEFAULT_LOG_LEVEL
        )

        return cls(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            log_level=log_level.upper(),
        )

    @classmethod
    def from_args(cls, args: Sequence[str] | None = None) -> Config:
        """
        Create a Config instance from command-line arguments.

        Args:
            args: Command-line arguments to parse. If None, uses sys.argv[1:].

        Example:
            config = Config.from_args(["--url", "http://example.com:4000"])
        """
        parser = argparse.ArgumentParser(prog="xenfo")
        add_config_arguments(parser)
        parsed, _ = parser.parse_known_args(args)
        return cls.from_namespace(parsed)

    @classmethod
    def from_env(cls) -> Config:
        """Create a Config from environment variables and defaults only."""
        return cls.from_namespace(argparse.Namespace())


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """
    Register the connection options on an argument parser.

    Every option defaults to None so that from_namespace() can tell
    "not given" apart from an explicit value.
    """
    parser.add_argument(
        "--url",
        "-u",
        dest="base_url",
        default=None,
        help=f"API base URL (default: {PRODUCTION_URL}, or ${ENV_API_URL})",
    )
    parser.add_argument(
        "--api-key",
        "-k",
        dest="api_key",
        default=None,
        help=f"Static API key (default: ${ENV_API_KEY})",
    )
    parser.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help=f"Log level (default: {DEFAULT_LOG_LEVEL}, or ${ENV_LOG_LEVEL})",
    )
    parser.add_argument(
        "--development",
        action="store_true",
        help=f"Use the local development backend ({DEVELOPMENT_URL})",
    )
