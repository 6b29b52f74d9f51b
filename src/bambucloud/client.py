"""Bambu Lab cloud API client.

Provides programmatic access to a Bambu Lab account: the profile, the
printers bound to it, its print history and one-time camera streaming
URLs.  :meth:`Client.login` is the main entry point::

    import asyncio
    from bambucloud import Client, Region

    async with await Client.login(Region.EUROPE, "email@example.com", "password") as client:
        devices = await client.get_devices()
        tasks = await client.get_tasks(devices[0].dev_id)
        url = await client.get_camera_url(devices[0])

The client holds only read-only state after login, so its coroutines may
be awaited concurrently.  Timeouts are configured on the
:class:`aiohttp.ClientSession` passed to :meth:`Client.login`.
"""

from __future__ import annotations

import typing
from urllib.parse import quote, urlencode

import aiohttp
import pydantic
import structlog

from bambucloud._constants import (
    BIND_PATH,
    CAMERA_URL_SCHEME,
    LOGIN_PATH,
    PROFILE_PATH,
    TASKS_PAGE_LIMIT,
    TASKS_PATH,
    TTCODE_PATH,
)
from bambucloud.auth import Token
from bambucloud.exceptions import CameraUrlError, DecodeError, TransportError
from bambucloud.models import (
    Account,
    CameraTicket,
    Device,
    DevicesResponse,
    LoginResponse,
    Task,
    TasksResponse,
)
from bambucloud.region import Endpoints, Region, endpoints_for

logger = structlog.get_logger(__name__)

M = typing.TypeVar("M", bound=pydantic.BaseModel)

_ERROR_BODY_LIMIT = 500


class Client:
    """Authenticated Bambu Lab cloud client.

    Use :meth:`login` to create one.  Region, token and session are fixed
    for the lifetime of the client; there is no token refresh.
    """

    def __init__(
        self,
        region: Region,
        token: Token,
        session: aiohttp.ClientSession,
        *,
        owns_session: bool = False,
    ) -> None:
        self._region = region
        self._token = token
        self._session = session
        self._owns_session = owns_session

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    async def login(
        cls,
        region: Region,
        email: str,
        password: str,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> Client:
        """Authenticate with Bambu Lab and return a new client.

        If *session* is ``None`` a session is created and owned by the
        client; close it with :meth:`close` or ``async with``.  A session
        passed in is left for the caller to close.

        Raises:
            TransportError: The request failed or returned a non-2xx status.
            DecodeError: The response has no ``accessToken``.
            TokenError: The access token is not a parseable claims token.
        """
        owns_session = session is None
        if session is None:
            session = aiohttp.ClientSession()
        url = f"{endpoints_for(region).user_service}/{LOGIN_PATH}"
        try:
            response = await _send(
                session,
                "POST",
                url,
                LoginResponse,
                json={"account": email, "password": password},
            )
            token = Token.issue(response.access_token)
        except BaseException:
            if owns_session:
                await session.close()
            raise
        logger.debug("Logged in", region=str(region), username=token.username)
        return cls(region, token, session, owns_session=owns_session)

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            await self._session.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def region(self) -> Region:
        """Account region selected at login."""
        return self._region

    @property
    def endpoints(self) -> Endpoints:
        """Hosts used for the client's region."""
        return endpoints_for(self._region)

    @property
    def token(self) -> Token:
        """Bearer token issued at login."""
        return self._token

    @property
    def username(self) -> str:
        """Account identifier from the token's ``username`` claim."""
        return self._token.username

    @property
    def mqtt_host(self) -> str:
        """MQTT broker host for the client's region."""
        return self.endpoints.mqtt_host

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    async def get_profile(self) -> Account:
        """Fetch the profile of the logged-in account."""
        return await self._request(
            "GET", f"{self.endpoints.user_service}/{PROFILE_PATH}", Account
        )

    async def get_devices(self) -> list[Device]:
        """Fetch the printers bound to the account."""
        response = await self._request(
            "GET", f"{self.endpoints.iot_service}/{BIND_PATH}", DevicesResponse
        )
        return response.devices

    async def get_tasks(self, only_device: str | None = None) -> list[Task]:
        """Fetch up to 500 print tasks, optionally for one device.

        The ``deviceId`` query parameter is always sent; it is empty when
        *only_device* is ``None``.
        """
        response = await self._request(
            "GET",
            f"{self.endpoints.user_service}/{TASKS_PATH}",
            TasksResponse,
            params={"limit": str(TASKS_PAGE_LIMIT), "deviceId": only_device or ""},
        )
        return response.hits

    async def get_camera_url(self, device: Device | str) -> str:
        """Request a one-time camera streaming URL for a printer.

        Args:
            device: A :class:`Device` or its ``dev_id``.

        Returns:
            A ``bambu:///<ttcode>?authkey=...&passwd=...&region=...`` URL.

        Raises:
            TransportError: The request failed or returned a non-2xx status.
            DecodeError: The response is not a camera ticket.
            CameraUrlError: The ticket cannot be encoded into a URL.
        """
        dev_id = device.dev_id if isinstance(device, Device) else device
        ticket = await self._request(
            "POST",
            f"{self.endpoints.iot_service}/{TTCODE_PATH}",
            CameraTicket,
            json={"dev_id": dev_id},
            headers={"user-id": self._token.username},
        )
        return build_camera_url(ticket)

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def _auth_headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        """Return the bearer header merged with any per-resource headers."""
        return {"Authorization": self._token.bearer, **(extra or {})}

    async def _request(
        self,
        method: str,
        url: str,
        model: type[M],
        *,
        headers: dict[str, str] | None = None,
        **kwargs: typing.Any,
    ) -> M:
        """Send an authenticated request and decode the body into *model*."""
        return await _send(
            self._session, method, url, model, headers=self._auth_headers(headers), **kwargs
        )


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


async def _send(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    model: type[M],
    **kwargs: typing.Any,
) -> M:
    """Send a request, require a 2xx status and decode the body.

    Network failures and non-2xx statuses raise :class:`TransportError`;
    a body that does not match *model* raises :class:`DecodeError`.
    """
    logger.debug("API request", method=method, url=url)
    try:
        async with session.request(method, url, **kwargs) as resp:
            body = await resp.read()
            status = resp.status
            reason = resp.reason
    except (aiohttp.ClientError, TimeoutError) as e:
        logger.warning("Transport error", method=method, url=url, error=str(e))
        raise TransportError(f"{method} {url} failed: {e}") from e

    logger.debug("API response", status=status, body_len=len(body))
    if not 200 <= status < 300:
        raise TransportError(
            f"{method} {url} failed: {reason}",
            status=status,
            response_body=body[:_ERROR_BODY_LIMIT].decode("utf-8", errors="replace"),
        )

    try:
        return model.model_validate_json(body)
    except pydantic.ValidationError as e:
        raise DecodeError(f"Unexpected {model.__name__} response from {url}: {e}") from e


def build_camera_url(ticket: CameraTicket) -> str:
    """Combine a camera ticket into a ``bambu:///`` streaming URL.

    Values are percent-encoded; plain alphanumeric values appear verbatim.
    Raises :class:`CameraUrlError` if the ticket code is empty or a value
    cannot be encoded.
    """
    if not ticket.ttcode:
        raise CameraUrlError("Camera ticket has an empty ttcode.")
    try:
        path = quote(ticket.ttcode, safe="")
        query = urlencode(
            {"authkey": ticket.authkey, "passwd": ticket.passwd, "region": ticket.region}
        )
    except UnicodeEncodeError as e:
        raise CameraUrlError(f"Camera ticket cannot be encoded into a URL: {e}") from e
    return f"{CAMERA_URL_SCHEME}:///{path}?{query}"
