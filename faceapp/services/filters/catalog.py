"""
Filter catalog retrieval

Uploads a photo to FaceApp and turns the response into a FilterCatalog:
the session code for the upload, the device ID that made it, and the
filters the service offers for that photo.

A response without `code` or without a non-empty `objects[0].children`
is a broken contract with the service and raises MalformedResponseError.
"""

import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from faceapp.models.filter import Filter, FilterCatalog, PhotoUploadResponse
from faceapp.services.api import FaceAppAPI, MalformedResponseError
from faceapp.services.identity import DeviceIdentityProvider


ImageSource = Union[bytes, bytearray, memoryview, str, os.PathLike]


def read_image_source(image_source: ImageSource) -> bytes:
    """Return raw image bytes from a buffer or a local file path."""
    if isinstance(image_source, (bytes, bytearray, memoryview)):
        return bytes(image_source)
    if isinstance(image_source, (str, os.PathLike)):
        return Path(image_source).read_bytes()
    raise TypeError(
        f"Image source must be bytes or a file path, not {type(image_source).__name__}"
    )


class FilterCatalogFetcher:
    """Uploads a photo and lists the filters available for it."""

    def __init__(
        self,
        api: FaceAppAPI,
        identity_provider: Optional[DeviceIdentityProvider] = None,
    ):
        self._api = api
        self._identity = identity_provider or DeviceIdentityProvider()

    def _parse_catalog(self, content: bytes, device_id: str) -> FilterCatalog:
        try:
            parsed = PhotoUploadResponse.model_validate_json(content)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected photo upload response: {e.error_count()} validation errors"
            ) from e

        filters = tuple(
            Filter.from_remote(remote) for remote in parsed.objects[0].children
        )
        return FilterCatalog(code=parsed.code, device_id=device_id, filters=filters)

    async def fetch(self, image_source: ImageSource) -> FilterCatalog:
        """
        Upload a photo and return its filter catalog.

        Args:
            image_source: Raw image bytes or a path to an image file

        Returns:
            FilterCatalog bound to a freshly generated device ID

        Raises:
            RemoteServiceError: If the upload fails
            MalformedResponseError: If the response is not a valid catalog
        """
        image_bytes = read_image_source(image_source)
        device_id = self._identity.generate_device_id()

        response = await self._api.upload_photo(image_bytes, device_id)
        return self._parse_catalog(response.content, device_id)
