"""
Aiohttp request manager shared by the fal queue client and the studio client.
Parses JSON responses and turns HTTP and transport failures into NetworkError.
"""

import asyncio
import json
import ssl
from typing import NamedTuple

import aiohttp
import certifi

TIMEOUT_MESSAGE = "Connection timed out, the server took too long to respond"


class NetworkError(Exception):
    """Network error with status code and details."""

    def __init__(
        self,
        code: int,
        message: str,
        url: str,
        status: int | None = None,
        data: dict | None = None,
    ):
        self.code = code
        self.message = message
        self.url = url
        self.status = status
        self.data = data
        super().__init__(message)

    def __str__(self):
        return self.message


class DownloadedFile(NamedTuple):
    """Raw bytes of a downloaded file and the content type reported by the server."""

    data: bytes
    content_type: str


class AiohttpRequestManager:
    """
    Thin async HTTP layer over a lazily created aiohttp session.

    Requests have no total time limit: a generation takes as long as the
    provider needs, and a hung call is never cut short.
    """

    def __init__(self):
        self._session: aiohttp.ClientSession | None = None

    async def ensure_session(self):
        """Lazy session creation with proper SSL context."""
        if self._session is None or self._session.closed:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            connector = aiohttp.TCPConnector(ssl=ssl_context)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=None),
            )

    def _get_headers(self, authorization: str | None = None) -> dict:
        headers = {}
        if authorization:
            headers["Authorization"] = authorization
        return headers

    async def get(self, url: str, authorization: str | None = None) -> dict | bytes:
        """
        GET request, auto-parses JSON responses.

        Args:
            url: Request URL
            authorization: Optional Authorization header value

        Returns:
            Parsed JSON dict or raw bytes
        """
        await self.ensure_session()
        assert self._session is not None

        headers = self._get_headers(authorization)

        try:
            async with self._session.get(url, headers=headers) as response:
                return await self._handle_response(response, url)
        except aiohttp.ClientError as e:
            raise NetworkError(0, str(e), url)
        except asyncio.TimeoutError:
            raise NetworkError(0, TIMEOUT_MESSAGE, url)

    async def post(
        self,
        url: str,
        data: dict,
        authorization: str | None = None,
    ) -> dict | bytes:
        """
        POST JSON request.

        Args:
            url: Request URL
            data: JSON data to send
            authorization: Optional Authorization header value

        Returns:
            Parsed JSON dict or raw bytes
        """
        await self.ensure_session()
        assert self._session is not None

        headers = self._get_headers(authorization)
        headers["Content-Type"] = "application/json"

        try:
            async with self._session.post(
                url, json=data, headers=headers
            ) as response:
                return await self._handle_response(response, url)
        except aiohttp.ClientError as e:
            raise NetworkError(0, str(e), url)
        except asyncio.TimeoutError:
            raise NetworkError(0, TIMEOUT_MESSAGE, url)

    async def download(self, url: str) -> DownloadedFile:
        """
        Download a file without authorization headers.

        Generated images live on a public CDN, so the provider credential is
        never sent along.
        """
        await self.ensure_session()
        assert self._session is not None

        try:
            async with self._session.get(url) as response:
                if response.status >= 400:
                    text = await response.text()
                    raise NetworkError(
                        response.status,
                        f"Download failed: {text}",
                        url,
                        status=response.status,
                    )
                content_type = response.headers.get("Content-Type", "")
                data = await response.read()
                return DownloadedFile(data, content_type.split(";")[0].strip())
        except aiohttp.ClientError as e:
            raise NetworkError(0, str(e), url)
        except asyncio.TimeoutError:
            raise NetworkError(0, TIMEOUT_MESSAGE, url)

    async def _handle_response(
        self, response: aiohttp.ClientResponse, url: str
    ) -> dict | bytes:
        """Handle response, parsing JSON if appropriate."""
        if response.status >= 400:
            try:
                data = await response.json()
            except (json.JSONDecodeError, aiohttp.ContentTypeError):
                text = await response.text()
                raise NetworkError(
                    response.status,
                    f"{text} ({response.reason})",
                    url,
                    status=response.status,
                )
            error = _error_message(data)
            raise NetworkError(
                response.status,
                f"{error} ({response.reason})",
                url,
                status=response.status,
                data=data if isinstance(data, dict) else None,
            )

        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            return await response.json()
        else:
            return await response.read()

    async def close(self):
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None


def _error_message(data) -> str:
    # fal reports errors under "detail", the studio API under "error"
    if isinstance(data, dict):
        for key in ("error", "detail", "message"):
            if value := data.get(key):
                return value if isinstance(value, str) else json.dumps(value)
    return "Network error"
