"""
API client modules for the Xenfo backend.

BaseAPIClient performs authenticated request dispatch; the domain clients
add one method per backend route. Most callers want the composed
XenfoClient from xenfo_client.client instead of these classes directly.
"""

from xenfo_client.api.admin import AdminAPI
from xenfo_client.api.auth import AuthAPI
from xenfo_client.api.base import BaseAPIClient
from xenfo_client.api.users import UsersAPI

__all__ = [
    "AdminAPI",
    "AuthAPI",
    "BaseAPIClient",
    "UsersAPI",
]
