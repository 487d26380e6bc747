"""
Authentication API operations.

Covers account registration, password reset, login (with the optional
2FA continuation), token refresh, 2FA management and logout.

Login, token refresh and do_2fa() store the returned access token in the
Session, so subsequent calls are authenticated automatically:

    try:
        await client.login("alice", "hunter2")
    except APIError as e:
        if not e.requires_mfa:
            raise
        await client.do_2fa("alice", "hunter2", code, e.mfa_continuation)
"""

from __future__ import annotations

from xenfo_client.api.base import BaseAPIClient, path_segment
from xenfo_client.models import (
    AuthResponse,
    BackupKeysResponse,
    MessageResponse,
    ToggleMfaResponse,
)


class AuthAPI(BaseAPIClient):
    """API client for authentication operations."""

    async def register(
        self, username: str, password: str, email: str, invite: str
    ) -> MessageResponse:
        """
        Register a new account.

        Args:
            username: Desired username.
            password: Desired password.
            email: Email address to verify.
            invite: Invite code.
        """
        return await self._call(
            MessageResponse,
            "/auth/register",
            "POST",
            body={
                "username": username,
                "password": password,
                "email": email,
                "invite": invite,
            },
        )

    async def send_password_reset(self, email: str) -> MessageResponse:
        """Send a password reset email to ``email``."""
        return await self._call(
            MessageResponse,
            "/auth/reset_password/send",
            "POST",
            body={"email": email},
        )

    async def reset_password(
        self, key: str, password: str, confirm_password: str
    ) -> MessageResponse:
        """
        Reset a password with the key from the reset email.

        Args:
            key: Password reset key.
            password: New password.
            confirm_password: New password, repeated.
        """
        return await self._call(
            MessageResponse,
            "/auth/reset_password/reset",
            "POST",
            body={
                "key": key,
                "password": password,
                "confirmPassword": confirm_password,
            },
        )

    async def login(self, username: str, password: str) -> AuthResponse:
        """
        Log in with username and password.

        Raises:
            APIError: With ``requires_mfa`` set if the account has 2FA
                enabled; finish the login with do_2fa().
        """
        return await self._authenticate(
            "/auth/login",
            "POST",
            body={"username": username, "password": password},
        )

    async def refresh_token(self) -> AuthResponse:
        """Exchange the session cookie for a fresh access token."""
        return await self._authenticate("/auth/token", "GET")

    async def do_2fa(self, username: str, password: str, token: str, id: str) -> AuthResponse:
        """
        Complete a login that requires a second factor.

        Args:
            username: The username used for login().
            password: The password used for login().
            token: One-time code from the authenticator app, or a backup key.
            id: The ``mfa_continuation`` from the APIError raised by login().
        """
        return await self._authenticate(
            f"/auth/otp/verify/{path_segment(id)}",
            "POST",
            body={"username": username, "password": password, "token": token},
        )

    async def verify_2fa(self, token: str) -> BackupKeysResponse:
        """Confirm 2FA setup with a first one-time code; returns backup keys."""
        return await self._call(
            BackupKeysResponse,
            "/auth/otp/verify",
            "POST",
            body={"token": token},
        )

    async def toggle_2fa(self) -> ToggleMfaResponse:
        """
        Switch 2FA on or off.

        When switching on, the TOTP secret in the response is kept as
        ``session.mfa_secret``.
        """
        result = await self._call(ToggleMfaResponse, "/auth/otp/toggle", "GET")
        if result.token:
            self.session.set_mfa_secret(result.token)
        return result

    async def regen_2fa_keys(self) -> BackupKeysResponse:
        return await self._call(BackupKeysResponse, "/auth/otp/regenKeys", "GET")

    async def logout(self) -> MessageResponse:
        """Log out of the current session."""
        return await self._call(MessageResponse, "/auth/logout", "GET")

    async def logout_all(self) -> MessageResponse:
        """Log out of every session on every device."""
        return await self._call(MessageResponse, "/auth/logout_all_devices", "GET")
