"""
Welstory Plus Client

Session layer for the Welstory Plus API: holds the base URL, the device
id and the current bearer token, decorates every outgoing request with
the headers the service expects, and exposes login, session refresh and
restaurant search.

Usage:
    async with WelstoryClient() as client:
        await client.login("user", "secret")
        restaurants = await client.search_restaurant("R5")

Version: 1.0.0
"""

import logging
import time
from typing import Any, Mapping, Optional
from urllib.parse import urlencode, urljoin

import jwt

from welstory.core.config import Settings, get_settings
from welstory.core.exceptions import (
    AuthenticationError,
    InvalidTokenError,
    ParseError,
    SearchError,
    SessionError,
    TransportError,
)
from welstory.endpoints import Endpoints
from welstory.restaurant import WelstoryRestaurant
from welstory.schemas import decode_restaurant, dump_payload
from welstory.services.transport import BaseTransport, HttpResponse, create_transport, get_transport
from welstory.utils import generate_id

logger = logging.getLogger(__name__)

# Refresh this long before the token actually expires
TOKEN_EXPIRY_MARGIN_MS = 30 * 1000


class WelstoryClient:
    """
    Main client for the Welstory Plus API.

    Attributes:
        base_url: Service root URL (fixed for the instance)
        device_id: Identifier sent as X-Device-Id (fixed for the instance)
        access_token: Current bearer token, None until login/refresh
        transport: HTTP transport in use
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        device_id: Optional[str] = None,
        transport: Optional[BaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service root URL, defaults to the configured one
            device_id: Device identifier, a random UUID when omitted
            transport: HTTP transport; the process-wide one when omitted
            settings: Settings to read defaults from
        """
        self._settings = settings or get_settings()
        self._base_url = base_url or self._settings.base_url
        self._device_id = device_id or generate_id()
        self.access_token: Optional[str] = None

        if transport is not None:
            self.transport = transport
        elif settings is not None:
            # Explicit settings get their own transport
            self.transport = create_transport(settings.transport, settings.request_timeout)
        else:
            self.transport = get_transport()
        self._owns_transport = transport is None and settings is not None

        logger.debug(f"WelstoryClient initialized (transport={self.transport.name})")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def is_authenticated(self) -> bool:
        """Whether a bearer token is currently held."""
        return self.access_token is not None

    def __repr__(self) -> str:
        return (
            f"WelstoryClient(base_url={self._base_url!r}, "
            f"device_id={self._device_id!r}, "
            f"authenticated={self.is_authenticated})"
        )

    async def __aenter__(self) -> "WelstoryClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self.transport.aclose()

    # =========================================================================
    # REQUESTS
    # =========================================================================

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self._settings.user_agent,
            "X-Device-Id": self._device_id,
        }
        if self.access_token is not None:
            headers["Authorization"] = self.access_token
        return headers

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        """
        Make a request to the Welstory API.

        Caller headers override the default ones on conflict.

        Args:
            endpoint: Path (and query) relative to the base URL
            method: HTTP method
            headers: Extra headers
            body: Serialized request body

        Returns:
            HttpResponse: Response with any status

        Raises:
            TransportError: On network failure
        """
        url = urljoin(self._base_url, endpoint)
        merged = self._default_headers()
        merged.update(headers or {})

        logger.debug(f"{method} {url}")
        return await self.transport.send(url, method=method, headers=merged, body=body)

    # =========================================================================
    # AUTHENTICATION
    # =========================================================================

    async def login(self, username: str, password: str) -> dict:
        """
        Authenticate with username and password.

        The bearer token comes back in the response's Authorization
        header and is stored verbatim.

        Returns:
            dict: Parsed user info body

        Raises:
            AuthenticationError: If the response has no Authorization header
            ParseError: If the user info body is not JSON
        """
        response = await self.request(
            Endpoints.LOGIN,
            method="POST",
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "X-Autologin": "N",
            },
            body=urlencode({
                "username": username,
                "password": password,
                "remember-me": "false",
            }),
        )

        access_token = response.headers.get("Authorization")
        if access_token is None:
            logger.warning(f"Login failed: no access token (status {response.status})")
            raise AuthenticationError(
                "Login failed: No access token received",
                details={"status": response.status, "status_text": response.status_text},
            )

        self.access_token = access_token
        logger.info("Login succeeded")

        return response.json()

    async def refresh_session(self) -> float:
        """
        Refresh the session and store the new access token.

        Returns:
            float: Milliseconds until 30 seconds before the new token expires

        Raises:
            SessionError: If the refresh request fails or returns no token
            InvalidTokenError: If the token has no numeric ``exp`` claim
        """
        try:
            response = await self.request(Endpoints.SESSION_REFRESH)
        except TransportError as e:
            raise SessionError(f"Failed to refresh session: {e.message}") from e

        try:
            body = response.json()
        except ParseError:
            body = None

        if not response.ok or body is None:
            raise SessionError(
                f"Failed to refresh session: {response.status_text}, "
                f"response: {dump_payload(response.text())}",
                details={"status": response.status},
            )

        token = body.get("data") if isinstance(body, dict) else None
        if not isinstance(token, str):
            raise SessionError(
                f"No access token received during session refresh: {dump_payload(body)}"
            )

        self.access_token = token
        expires_at = self._decode_expiry(token)

        refresh_in_ms = expires_at * 1000 - time.time() * 1000 - TOKEN_EXPIRY_MARGIN_MS
        logger.info(f"Session refreshed, next refresh in {refresh_in_ms / 1000:.0f}s")
        return refresh_in_ms

    @staticmethod
    def _decode_expiry(token: str) -> float:
        """Read the ``exp`` claim without verifying the signature."""
        try:
            payload = jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": False},
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid JWT token received during session refresh") from e

        exp = payload.get("exp") if isinstance(payload, dict) else None
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidTokenError(
                "Invalid JWT token received during session refresh: missing numeric exp"
            )
        return float(exp)

    # =========================================================================
    # RESTAURANTS
    # =========================================================================

    async def search_restaurant(self, search_query: str) -> list[WelstoryRestaurant]:
        """
        Search restaurants by name.

        Returns:
            list[WelstoryRestaurant]: Matches in service order

        Raises:
            SearchError: If the request fails or ``data`` is not a list
            DataFormatError: If any entry is malformed
        """
        try:
            response = await self.request(Endpoints.search_restaurant(search_query))
            body = response.json()
        except (TransportError, ParseError) as e:
            raise SearchError(f"Failed to search restaurant: {e.message}") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise SearchError(f"Invalid response format: {dump_payload(body)}")

        restaurants = []
        for raw in data:
            parsed = decode_restaurant(raw)
            restaurants.append(
                WelstoryRestaurant(
                    self,
                    parsed.restaurantCode,
                    parsed.restaurantName,
                    parsed.restaurantDesc,
                )
            )

        logger.debug(f"Search {search_query!r}: {len(restaurants)} restaurant(s)")
        return restaurants
