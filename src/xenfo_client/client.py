"""
Composed client exposing every Xenfo API operation.

    config = Config.from_env()

    async with XenfoClient(config) as client:
        await client.login("alice", "hunter2")
        profile = await client.get_user_profile(1)
        print(profile.user.username)
"""

from __future__ import annotations

from xenfo_client.api.admin import AdminAPI
from xenfo_client.api.auth import AuthAPI
from xenfo_client.api.users import UsersAPI


class XenfoClient(AuthAPI, UsersAPI, AdminAPI):
    """
    Async client for the Xenfo user-management API.

    All domain clients share one Session and one connection pool, so a
    login through this client authenticates every later call on it.
    """

    async def __aenter__(self) -> XenfoClient:
        await super().__aenter__()
        return self

