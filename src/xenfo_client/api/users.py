"""
Current-user API operations: notifications, account settings, profiles.
"""

from __future__ import annotations

from xenfo_client.api.base import BaseAPIClient, path_segment
from xenfo_client.models import (
    ChangeUsernameResponse,
    MessageResponse,
    NotificationsResponse,
    ReadNotificationsResponse,
    UserProfileResponse,
)


class UsersAPI(BaseAPIClient):
    """API client for operations on the logged-in user."""

    async def get_notifications(self) -> NotificationsResponse:
        """Get the current user's read and unread notifications."""
        return await self._call(NotificationsResponse, "/users/me/notifications", "GET")

    async def read_notifications(self) -> ReadNotificationsResponse:
        """Mark all notifications as read."""
        return await self._call(
            ReadNotificationsResponse, "/users/me/notifications/read", "GET"
        )

    async def disable_account(self) -> MessageResponse:
        """Disable the current user's account."""
        return await self._call(MessageResponse, "/users/me/disable", "POST")

    async def change_username(self, username: str, password: str) -> ChangeUsernameResponse:
        """
        Change the current user's username.

        Args:
            username: The new username.
            password: The current password.
        """
        return await self._call(
            ChangeUsernameResponse,
            "/users/me/change_username",
            "PUT",
            body={"username": username, "password": password},
        )

    async def change_password(self, new_password: str, password: str) -> MessageResponse:
        """
        Change the current user's password.

        Args:
            new_password: The new password.
            password: The current password.
        """
        return await self._call(
            MessageResponse,
            "/users/me/change_password",
            "PUT",
            body={"newPassword": new_password, "password": password},
        )

    async def get_user_profile(self, uid: int | str) -> UserProfileResponse:
        """Get a user's public profile by uid."""
        return await self._call(UserProfileResponse, f"/users/profile/{path_segment(uid)}", "GET")
