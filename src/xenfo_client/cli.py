"""
Command-line interface for the Xenfo API client.

Provides a few commands for poking at a backend from a shell:
- login: Authenticate (completing 2FA if required) and print the access token
- profile: Show a user's public profile
- notifications: Show the current user's notifications
- stats: Show admin user counters

Usage:
    xenfo login USERNAME
    xenfo --token TOKEN notifications
    xenfo --development profile 42

Environment Variables:
    XENFO_API_URL: Backend URL (default: https://api.xenfo.rocks)
    XENFO_API_KEY: Static API key
    XENFO_ENV: Set to "development" to use http://localhost:4000
    XENFO_ACCESS_TOKEN: Access token for commands that need one
    XENFO_PASSWORD: Password for login (prompted for if unset)
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import os
import sys
from collections.abc import Coroutine, Sequence
from typing import Any

from pydantic import BaseModel

from xenfo_client import __version__
from xenfo_client.client import XenfoClient
from xenfo_client.config import Config, add_config_arguments
from xenfo_client.errors import APIError

logger = logging.getLogger(__name__)

ENV_ACCESS_TOKEN = "XENFO_ACCESS_TOKEN"
ENV_PASSWORD = "XENFO_PASSWORD"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging for CLI use."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def get_password() -> str:
    """Read the password from XENFO_PASSWORD, prompting if it is unset."""
    password = os.environ.get(ENV_PASSWORD)
    if password:
        return password
    return getpass.getpass("Password: ")


def prompt_for_code() -> str:
    """Prompt for a 2FA one-time code or backup key."""
    return input("2FA code: ").strip()


def print_model(model: BaseModel) -> None:
    print(model.model_dump_json(indent=2, by_alias=True))


def build_client(config: Config, token: str | None = None) -> XenfoClient:
    """Create a client, seeding the session with ``token`` if given."""
    client = XenfoClient(config)
    if token:
        client.session.set_access_token(token)
    return client


def run_async(coro: Coroutine[Any, Any, int]) -> int:
    """Run a command coroutine, reporting API failures as exit code 1."""
    try:
        return asyncio.run(coro)
    except APIError as e:
        logger.debug("Command failed: %s (%s)", e.message, e.kind.value)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


# ============================================================================
# COMMANDS
# ============================================================================


async def _login(config: Config, username: str) -> int:
    password = get_password()

    async with build_client(config) as client:
        try:
            result = await client.login(username, password)
        except APIError as e:
            if e.mfa_continuation is None:
                raise
            print("Two-factor authentication required.", file=sys.stderr)
            result = await client.do_2fa(
                username, password, prompt_for_code(), e.mfa_continuation
            )

    print(f"Logged in as {result.user.username}", file=sys.stderr)
    print(result.access_token)
    return 0


async def _profile(config: Config, token: str | None, uid: str) -> int:
    async with build_client(config, token) as client:
        result = await client.get_user_profile(uid)
    print_model(result.user)
    return 0


async def _notifications(config: Config, token: str | None) -> int:
    async with build_client(config, token) as client:
        result = await client.get_notifications()
    print_model(result)
    return 0


async def _stats(config: Config, token: str | None) -> int:
    async with build_client(config, token) as client:
        result = await client.admin_get_total_stats()
    print(f"Users:       {result.total_users}")
    print(f"Blacklisted: {result.total_bans}")
    return 0


def cmd_login(args: argparse.Namespace, config: Config) -> int:
    """Log in and print the access token."""
    return run_async(_login(config, args.username))


def cmd_profile(args: argparse.Namespace, config: Config) -> int:
    """Print a user's public profile as JSON."""
    return run_async(_profile(config, args.token, args.uid))


def cmd_notifications(args: argparse.Namespace, config: Config) -> int:
    """Print the current user's notifications as JSON."""
    return run_async(_notifications(config, args.token))


def cmd_stats(args: argparse.Namespace, config: Config) -> int:
    """Print the admin user counters."""
    return run_async(_stats(config, args.token))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xenfo",
        description="Command-line client for the Xenfo API",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    add_config_arguments(parser)
    parser.add_argument(
        "--token",
        default=os.environ.get(ENV_ACCESS_TOKEN),
        help=f"Access token for authenticated commands (default: ${ENV_ACCESS_TOKEN})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    login_parser = subparsers.add_parser(
        "login",
        help="Log in and print the access token",
        description=(
            f"Log in as USERNAME. The password is read from ${ENV_PASSWORD} or prompted for. "
            "If the account has 2FA enabled, the one-time code is prompted for."
        ),
    )
    login_parser.add_argument("username")
    login_parser.set_defaults(func=cmd_login)

    profile_parser = subparsers.add_parser("profile", help="Show a user's public profile")
    profile_parser.add_argument("uid")
    profile_parser.set_defaults(func=cmd_profile)

    notifications_parser = subparsers.add_parser(
        "notifications", help="Show the current user's notifications"
    )
    notifications_parser.set_defaults(func=cmd_notifications)

    stats_parser = subparsers.add_parser("stats", help="Show user counters (admin only)")
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = Config.from_namespace(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.log_level)
    return int(args.func(args, config))


if __name__ == "__main__":
    sys.exit(main())
