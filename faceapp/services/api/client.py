"""
FaceApp API transport

Wraps an `httpx.AsyncClient` with the three requests the library makes:
1. Photo upload (multipart POST)
2. Filtered image download (GET, identified by device ID)
3. Plain download of an arbitrary URL (the sample photo)

Every failure, whether a connection problem or a non-success status,
leaves this module as a RemoteServiceError carrying the status code and
body. No retries are attempted.
"""

import mimetypes
from typing import Optional

import httpx

from faceapp.config import FaceAppSettings, get_settings
from faceapp.services.api.errors import RemoteServiceError


DEVICE_ID_HEADER = "X-FaceApp-DeviceID"


class FaceAppAPI:
    """Low-level access to the FaceApp HTTP endpoints."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Optional[FaceAppSettings] = None,
    ):
        self._client = client
        self._settings = settings or get_settings().faceapp

    @property
    def settings(self) -> FaceAppSettings:
        return self._settings

    def _headers(self, device_id: str) -> dict[str, str]:
        return {
            "User-Agent": self._settings.api_user_agent,
            DEVICE_ID_HEADER: device_id,
        }

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send a request and raise RemoteServiceError unless it succeeded."""
        try:
            response = await self._client.request(
                method,
                url,
                timeout=self._settings.request_timeout_seconds,
                follow_redirects=True,
                **kwargs,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteServiceError(
                f"FaceApp API returned {e.response.status_code} for {method} {url}",
                status_code=e.response.status_code,
                body=e.response.content,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Request {method} {url} failed: {e}") from e

        return response

    async def upload_photo(self, image_bytes: bytes, device_id: str) -> httpx.Response:
        """
        Upload a photo for filtering.

        Returns the raw response; parsing is left to the caller.
        """
        filename = self._settings.upload_filename
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        return await self._send(
            "POST",
            self._settings.photos_url,
            headers=self._headers(device_id),
            files={"file": (filename, image_bytes, content_type)},
        )

    async def get_filtered_photo(
        self,
        code: str,
        filter_id: str,
        cropped: bool,
        device_id: str,
    ) -> bytes:
        """Download the rendered image for one filter of an uploaded photo."""
        response = await self._send(
            "GET",
            self._settings.filter_url(code, filter_id),
            headers=self._headers(device_id),
            params={"cropped": "1" if cropped else "0"},
        )
        return response.content

    async def download(self, url: str) -> bytes:
        """Fetch an arbitrary URL without FaceApp identification headers."""
        response = await self._send("GET", url)
        return response.content
