"""Xenfo API client.

An async, typed client for the Xenfo user-management backend:
authentication and 2FA, notifications, account settings and admin actions.

Version Management
------------------
``__version__`` is read from the installed package metadata, so the
``version`` field in ``pyproject.toml`` is the single source of truth.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from xenfo_client.client import XenfoClient
from xenfo_client.config import Config
from xenfo_client.errors import APIError, ErrorKind
from xenfo_client.session import Session

try:
    __version__: str = version("xenfo-client")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "APIError",
    "Config",
    "ErrorKind",
    "Session",
    "XenfoClient",
    "__version__",
]
