"""
Administrative API operations.

All of these require the session to belong to an admin account; the
backend rejects them otherwise and the rejection surfaces as an APIError.
"""

from __future__ import annotations

from xenfo_client.api.base import BaseAPIClient, path_segment
from xenfo_client.models import (
    AdminUserResponse,
    AllNotificationsResponse,
    MessageResponse,
    ServerStats,
    SuccessResponse,
    TotalStats,
    WipeUserResponse,
)

DEFAULT_REASON = "No reason provided"


class AdminAPI(BaseAPIClient):
    """API client for admin-only operations."""

    async def admin_get_total_stats(self) -> TotalStats:
        """Get the total number of users and of blacklisted users."""
        stats = await self._call(ServerStats, "/users", "GET")
        return TotalStats(total_users=stats.total, total_bans=stats.blacklisted)

    async def admin_blacklist(self, id: str, reason: str, executor: str) -> MessageResponse:
        """
        Blacklist a user.

        Args:
            id: The user's identifier.
            reason: Reason for the blacklist. Empty means "No reason provided".
            executor: Identifier of the admin responsible.
        """
        return await self._call(
            MessageResponse,
            "/admin/blacklist",
            "POST",
            body={"id": id, "reason": reason or DEFAULT_REASON, "executerId": executor},
        )

    async def admin_unblacklist(self, id: str, reason: str, executor: str) -> MessageResponse:
        """Lift a blacklist. Arguments as for admin_blacklist()."""
        return await self._call(
            MessageResponse,
            "/admin/unblacklist",
            "POST",
            body={"id": id, "reason": reason or DEFAULT_REASON, "executerId": executor},
        )

    async def admin_verify_email(self, id: str) -> MessageResponse:
        """Mark a user's email as verified."""
        return await self._call(MessageResponse, "/admin/verifyemail", "POST", body={"id": id})

    async def admin_wipe_user(self, id: str) -> WipeUserResponse:
        """Delete all of a user's files. ``count`` is the number removed."""
        return await self._call(WipeUserResponse, "/admin/wipeuser", "POST", body={"id": id})

    async def admin_set_uid(self, id: str, new_uid: int) -> MessageResponse:
        return await self._call(
            MessageResponse,
            "/admin/setuid",
            "POST",
            body={"id": id, "newuid": new_uid},
        )

    async def admin_get_user(self, id: str) -> AdminUserResponse:
        """Get a user's full record by identifier."""
        return await self._call(AdminUserResponse, f"/admin/users/{path_segment(id)}", "GET")

    async def admin_send_notification(self, avatar: str, message: str) -> SuccessResponse:
        """Broadcast a notification to every user."""
        return await self._call(
            SuccessResponse,
            "/notifications",
            "POST",
            body={"avatar": avatar, "message": message},
        )

    async def get_all_notifications(self) -> AllNotificationsResponse:
        return await self._call(AllNotificationsResponse, "/notifications/all", "GET")
