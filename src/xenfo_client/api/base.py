"""
Base API client: session-bound request dispatch.

BaseAPIClient owns the httpx connection pool and the Session, and performs
every round trip to the backend through request(). Domain clients (auth,
users, admin) inherit from it and add one thin method per endpoint.

The client must be used as an async context manager so the underlying
connection pool is closed:

    async with BaseAPIClient(config) as client:
        data = await client.request("/users/profile/1", "GET")

Every request carries two mandatory headers, Authorization (static API
key) and x-access-token (current session token, possibly empty). The
httpx cookie jar is kept for the lifetime of the client, so cookies set by
the backend accompany later requests alongside the token header.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from xenfo_client.config import Config
from xenfo_client.errors import error_from_response, error_from_transport, invalid_response
from xenfo_client.models import AuthResponse
from xenfo_client.session import Session

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

JSONBody = Mapping[str, Any] | Sequence[Mapping[str, Any]]

API_KEY_HEADER = "Authorization"
ACCESS_TOKEN_HEADER = "x-access-token"


def path_segment(value: object) -> str:
    """Quote a value for safe interpolation into a URL path."""
    return quote(str(value), safe="")


class BaseAPIClient:
    """
    Async HTTP client bound to one authenticated Session.

    Attributes:
        config: Connection settings (base URL, API key, timeout).
        session: Authentication state shared by every request.
    """

    def __init__(self, config: Config, session: Session | None = None) -> None:
        self.config = config
        self.session = session or Session(config.base_url, api_key=config.api_key)
        self._http_client: httpx.AsyncClient | None = None

    # -------------------------------------------------------------------------
    # Context Manager Protocol
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> BaseAPIClient:
        """Create the underlying httpx.AsyncClient."""
        self._http_client = httpx.AsyncClient(
            base_url=self.session.base_url,
            timeout=self.config.timeout,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the connection pool."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """
        Get the HTTP client, ensuring it's been initialized.

        Raises:
            RuntimeError: If accessed outside of async context manager.
        """
        if self._http_client is None:
            raise RuntimeError(
                f"{type(self).__name__} must be used as an async context manager. "
                f"Use 'async with {type(self).__name__}(config) as client:'"
            )
        return self._http_client

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def build_headers(self, extra: Mapping[str, Any] | None = None) -> httpx.Headers:
        """
        Merge caller headers under the mandatory authentication headers.

        Header names compare case-insensitively, so a caller-supplied
        "authorization" is replaced rather than sent twice.
        """
        headers = httpx.Headers({name: str(value) for name, value in (extra or {}).items()})
        headers[API_KEY_HEADER] = self.session.api_key
        headers[ACCESS_TOKEN_HEADER] = self.session.current_access_token()
        return headers

    async def _dispatch(
        self,
        endpoint: str,
        method: str,
        body: JSONBody | None = None,
        headers: Mapping[str, Any] | None = None,
    ) -> tuple[int, Any]:
        method = method.upper()

        try:
            response = await self.http_client.request(
                method,
                endpoint,
                json=body,
                headers=self.build_headers(headers),
            )
        except httpx.RequestError as e:
            raise error_from_transport(e, self.session.base_url) from e

        logger.debug("%s %s -> %d", method, endpoint, response.status_code)

        if not response.is_success:
            raise error_from_response(response)

        if not response.content:
            return response.status_code, None

        try:
            return response.status_code, response.json()
        except ValueError as e:
            logger.debug("%s %s returned a body that is not JSON", method, endpoint)
            raise invalid_response(response.status_code) from e

    async def request(
        self,
        endpoint: str,
        method: str,
        body: JSONBody | None = None,
        headers: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Perform one authenticated round trip and return the decoded payload.

        Args:
            endpoint: Path appended to the base URL (e.g., "/auth/login").
            method: HTTP verb, case-insensitive.
            body: Optional JSON body (an object or a list of objects).
            headers: Optional extra headers. The Authorization and
                     x-access-token headers always take precedence.

        Returns:
            The decoded JSON body of the 2xx response, or None if it was empty.

        Raises:
            APIError: For any non-2xx response or transport failure.
        """
        _, payload = await self._dispatch(endpoint, method, body, headers)
        return payload

    async def _call(
        self,
        model: type[ModelT],
        endpoint: str,
        method: str,
        body: JSONBody | None = None,
    ) -> ModelT:
        """Dispatch a request and validate the payload into ``model``."""
        status, payload = await self._dispatch(endpoint, method, body)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.debug(
                "%s %s payload failed %s validation: %s",
                method.upper(),
                endpoint,
                model.__name__,
                e,
            )
            raise invalid_response(status) from e

    async def _authenticate(
        self,
        endpoint: str,
        method: str,
        body: JSONBody | None = None,
    ) -> AuthResponse:
        """
        Dispatch an authentication request and store the returned token.

        A ticket is taken before the request goes out so that a slower,
        earlier authentication cannot overwrite the token of a later one.
        """
        ticket = self.session.begin_authentication()
        result = await self._call(AuthResponse, endpoint, method, body)
        if self.session.set_access_token(result.access_token, ticket=ticket):
            logger.info("Authenticated as %s", result.user.username)
        return result
