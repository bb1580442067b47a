"""Session client for the Alfen Eve local HTTPS API."""

import asyncio
import json
from typing import Any, Dict, Iterable, List, Optional, Type

import aiohttp

from .const import API_HEADER, API_URL, JSON_CONTENT_TYPES, PROPERTY_IDS
from .exceptions import AlfenError, AuthError, RequestError
from .logger import SmartLogger
from .models import ApiResponse, DeviceSettings, JsonBody, PropertyRecord, TextBody


class AlfenApiClient:
    """Client for one login/fetch/logout session against a charger.

    All requests share a single keep-alive socket, so they reach the
    charger in the order they are issued. The login cookie lives in the
    session's cookie jar and is replayed on the following requests.
    """

    def __init__(
        self,
        settings: DeviceSettings,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[SmartLogger] = None,
    ):
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = logger or SmartLogger(__name__)

    async def __aenter__(self) -> "AlfenApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _ensure_session(self):
        """Ensure that a keep-alive session limited to one socket exists."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=1, ssl=self._settings.verify_ssl)
            timeout = aiohttp.ClientTimeout(total=self._settings.timeout)
            # unsafe=True keeps cookies issued by bare IP addresses
            self._session = aiohttp.ClientSession(
                connector=connector,
                cookie_jar=aiohttp.CookieJar(unsafe=True),
                timeout=timeout,
            )
            self._owns_session = True

    def _url(self, endpoint: str) -> str:
        return f"{self._settings.base_url}/{API_URL}/{endpoint}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        error_cls: Type[AlfenError],
        body: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        """Issue one request and decode its body."""
        await self._ensure_session()

        headers = {"Content-Type": API_HEADER}
        data = json.dumps(body) if body is not None else None
        url = self._url(endpoint)

        self._logger.debug("%s %s", method, url)
        try:
            async with self._session.request(
                method,
                url,
                data=data,
                headers=headers,
                ssl=self._settings.verify_ssl,
            ) as resp:
                if resp.status != 200:
                    raise error_cls(
                        f"{method} /{API_URL}/{endpoint} failed with status {resp.status}"
                    )

                raw = await resp.read()
                text = raw.decode("utf-8", errors="replace")

                self._logger.debug("Content-Length: %s", resp.headers.get("Content-Length"))
                self._logger.debug("Content-Type: %s", resp.headers.get("Content-Type"))
                self._logger.debug("Set-Cookie: %s", resp.headers.get("Set-Cookie"))

                return self._decode(resp.content_type, text, error_cls)
        except asyncio.CancelledError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as err:
            raise error_cls(
                f"{method} /{API_URL}/{endpoint} failed: {err!r}"
            ) from err

    @staticmethod
    def _decode(content_type: str, text: str, error_cls: Type[AlfenError]) -> ApiResponse:
        """Decode a body strictly for JSON content types, best effort otherwise."""
        if content_type in JSON_CONTENT_TYPES:
            try:
                return JsonBody(json.loads(text))
            except ValueError as err:
                raise error_cls(f"Exception parsing JSON: {err}") from err

        try:
            return JsonBody(json.loads(text))
        except ValueError:
            return TextBody(text)

    async def login(self) -> None:
        """Log in with the configured credentials."""
        response = await self._request(
            "POST",
            "login",
            AuthError,
            body={
                "username": self._settings.username,
                "password": self._settings.password,
            },
        )
        self._logger.status("login", "Login successful: %s", response)

    async def fetch_properties(
        self, ids: Iterable[str] = PROPERTY_IDS
    ) -> List[PropertyRecord]:
        """Fetch the given property ids from the charger."""
        response = await self._request(
            "GET", f"prop?ids={','.join(ids)}", RequestError
        )

        if not isinstance(response, JsonBody) or not isinstance(response.data, dict):
            raise RequestError(f"Unexpected properties response: {response}")

        properties = response.data.get("properties")
        if not isinstance(properties, list):
            raise RequestError(
                f"Properties response has no property list: {list(response.data.keys())}"
            )

        records = [
            PropertyRecord.from_dict(prop)
            for prop in properties
            if isinstance(prop, dict)
        ]
        self._logger.status(
            "properties",
            "Properties retrieved: %s",
            {record.id: record.value for record in records},
        )
        return records

    async def logout(self) -> None:
        """End the session on the charger."""
        response = await self._request("POST", "logout", RequestError)
        self._logger.status("logout", "Logout successful: %s", response)

    async def close(self):
        """Close the session if this client created it."""
        if self._session and self._owns_session:
            try:
                await self._session.close()
            except Exception as e:
                self._logger.error("Error closing API session: %s", e)
            finally:
                self._session = None
