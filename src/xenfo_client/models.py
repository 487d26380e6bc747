"""
Pydantic models for API responses.

Every endpoint's JSON payload is validated into one of these models at the
client boundary, so a malformed backend response is reported as an
APIError with kind INVALID_RESPONSE instead of surfacing later as a
KeyError or AttributeError deep in calling code.

The backend speaks camelCase (and MongoDB-style ``_id``); the models
expose snake_case attributes and accept either spelling on input. Fields
the backend sends but the models do not declare are kept (extra="allow").
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ============================================================================
# BASE
# ============================================================================


class WireModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# ============================================================================
# DOMAIN OBJECTS
# ============================================================================


class DiscordLink(WireModel):
    id: str | None = None
    avatar: str | None = None


class BlacklistStatus(WireModel):
    status: bool = False
    reason: str | None = None


class User(WireModel):
    """
    Full user record as returned by authentication and admin endpoints.

    Only the identity fields are required; everything else is optional so
    that older backend builds which omit newer columns still validate.
    """

    id: str = Field(alias="_id")
    uid: int | str
    username: str

    invite: str | None = None
    upload_key: str | None = None
    email: str | None = None
    email_verified: bool = False
    discord: DiscordLink | None = None
    strikes: int = 0
    disabled: bool = False
    blacklisted: BlacklistStatus | None = None
    uploads: int = 0
    invites: int = 0
    invited_by: str | None = None
    invited_users: list[str] = Field(default_factory=list)
    registration_date: datetime | None = None
    last_login: datetime | None = None
    last_domain_addition: datetime | None = None
    last_key_regen: datetime | None = None
    last_username_change: datetime | None = None
    last_file_archive: datetime | None = None
    admin: bool = False
    mfa: bool = False
    notifs: list[str] | None = None


class Notification(WireModel):
    id: str = Field(alias="_id")
    message: str
    avatar: str | None = None
    date: datetime | None = None


class UserProfile(WireModel):
    """Public profile of a user, looked up by uid."""

    uid: int | str
    username: str
    uuid: str | None = None
    registration_date: datetime | None = None
    role: str | None = None
    uploads: int = 0
    invited_by: str | None = None
    avatar: str | None = None


# ============================================================================
# RESPONSE WRAPPERS
# ============================================================================


class SuccessResponse(WireModel):
    success: bool


class MessageResponse(SuccessResponse):
    message: str = ""


class AuthResponse(SuccessResponse):
    """Response of login, token refresh and 2FA login verification."""

    access_token: str
    user: User


class BackupKeysResponse(SuccessResponse):
    backup_keys: list[str]


class ToggleMfaResponse(SuccessResponse):
    """
    Response of toggling 2FA.

    ``token`` holds the new TOTP secret when 2FA was switched on and is
    absent when it was switched off.
    """

    token: str | None = None


class WipeUserResponse(MessageResponse):
    count: int | None = None


class ChangeUsernameResponse(MessageResponse):
    username: str


class UserProfileResponse(SuccessResponse):
    user: UserProfile


class AdminUserResponse(SuccessResponse):
    users: User


class NotificationsResponse(SuccessResponse):
    read: list[Notification] = Field(default_factory=list)
    unread: list[Notification] = Field(default_factory=list)


class ReadNotificationsResponse(SuccessResponse):
    read: list[Notification] = Field(default_factory=list)


class AllNotificationsResponse(SuccessResponse):
    notifications: list[Notification] = Field(default_factory=list)


class ServerStats(WireModel):
    """Raw user counters from ``GET /users``."""

    total: int
    blacklisted: int
    unused_invites: int = 0


class TotalStats(WireModel):
    """Summary returned by admin_get_total_stats()."""

    total_users: int
    total_bans: int
