"""
Authentication state held by a single client instance.

The Session owns the credentials that are attached to every outgoing
request: the static API key and the access token returned by the most
recent successful login, token refresh, or 2FA verification.

Token updates are ticketed. Each authentication operation takes a ticket
before its request is sent and presents it when the response arrives;
a response whose ticket is older than one already applied is discarded.
Two overlapping authentications therefore settle on the token of the one
issued last, regardless of the order the responses come back in.

Example:
    session = Session("https://api.xenfo.rocks", api_key="key")
    ticket = session.begin_authentication()
    # ... send login request ...
    session.set_access_token("abc", ticket=ticket)
    print(session.current_access_token())  # "abc"
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class Session:
    """
    Mutable authentication context for one client.

    Attributes:
        base_url: Backend base URL. Read-only.
        api_key: Static API key. Read-only.
        access_token: Current access token, "" until authenticated.
        mfa_secret: TOTP secret returned when 2FA is toggled on, "" otherwise.
    """

    def __init__(self, base_url: str, api_key: str = "") -> None:
        self._base_url = base_url
        self._api_key = api_key
        self._access_token = ""
        self.mfa_secret = ""

        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0

    def __repr__(self) -> str:
        return f"Session(base_url={self._base_url!r}, authenticated={self.is_authenticated})"

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        """True once any authentication response has supplied a token."""
        return bool(self._access_token)

    def current_access_token(self) -> str:
        """Return the token to send with the next request (may be empty)."""
        return self._access_token

    def begin_authentication(self) -> int:
        """
        Reserve a ticket for an authentication request about to be sent.

        Returns:
            int: Ticket to pass to set_access_token() with the response.
        """
        with self._lock:
            self._issued += 1
            return self._issued

    def set_access_token(self, token: str, ticket: int | None = None) -> bool:
        """
        Replace the held access token.

        Args:
            token: New access token from an authentication response.
            ticket: Ticket from begin_authentication(). Without one the
                    token is applied unconditionally and supersedes every
                    ticket issued so far.

        Returns:
            bool: False if the token was discarded because a later
                  authentication had already been applied.
        """
        with self._lock:
            if ticket is None:
                ticket = self._issued
            elif ticket <= self._applied:
                logger.debug(
                    "Discarding access token from ticket %d (ticket %d already applied)",
                    ticket,
                    self._applied,
                )
                return False

            self._applied = ticket
            self._access_token = token

        logger.debug("Access token updated")
        return True

    def set_mfa_secret(self, secret: str) -> None:
        """Store the TOTP secret returned by enabling 2FA."""
        self.mfa_secret = secret
