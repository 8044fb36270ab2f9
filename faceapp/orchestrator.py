"""
Main Orchestrator for the FaceApp client

Defines the two end-to-end flows the library offers:
1. Process (photo → upload → catalog → rendered filter image)
2. List filters (sample photo → upload → catalog → filters)

Only the process flow translates service errors into domain errors.
Everything else propagates unchanged to the caller.
"""

from typing import Optional, Union
from uuid import UUID

import httpx

from faceapp.audit import AuditLogger, create_correlation_id
from faceapp.config import FaceAppSettings, get_settings
from faceapp.models.filter import Filter, FilteredImage
from faceapp.services.api import (
    FaceAppAPI,
    FaceAppError,
    InvalidFilterError,
    NoFacesDetectedError,
    RemoteServiceError,
)
from faceapp.services.filters import (
    DEFAULT_FILTER_ID,
    FilterCatalogFetcher,
    FilteredImageFetcher,
    ImageSource,
)
from faceapp.services.identity import DeviceIdentityProvider


def translate_remote_error(error: RemoteServiceError) -> Optional[FaceAppError]:
    """
    Map a known FaceApp error code to a domain error.

    Only status 400 responses are translated. Returns None when the
    original error should be raised as-is.
    """
    if error.status_code != 400:
        return None

    code = error.error_code
    if code == "photo_no_faces":
        return NoFacesDetectedError("No Faces found in Photo")
    if code == "bad_filter_id":
        return InvalidFilterError("Invalid Filter ID")
    return None


class ProcessFlow:
    """
    Applies one filter to one photo.

    Flow:
    1. Upload → FilterCatalog (session code + device ID)
    2. Render → Download the chosen filter with the same device ID

    Service error codes for "no faces" and "bad filter" surface as
    NoFacesDetectedError and InvalidFilterError.
    """

    def __init__(
        self,
        catalog_fetcher: FilterCatalogFetcher,
        image_fetcher: FilteredImageFetcher,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._catalog_fetcher = catalog_fetcher
        self._image_fetcher = image_fetcher
        self._audit_logger = audit_logger

    async def process(
        self,
        image_source: ImageSource,
        filter_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> FilteredImage:
        """
        Run a photo through a FaceApp filter.

        Args:
            image_source: Raw image bytes or a path to an image file
            filter_id: ID of the filter to apply (see list_filters());
                defaults to "no-filter"

        Returns:
            Rendered image bytes

        Raises:
            NoFacesDetectedError: If the service found no faces
            InvalidFilterError: If the filter is unknown locally or to the service
            RemoteServiceError: For any other service or transport failure
            MalformedResponseError: If the upload response is unusable
        """
        correlation_id = correlation_id or create_correlation_id()
        filter_id = filter_id or DEFAULT_FILTER_ID

        try:
            catalog = await self._catalog_fetcher.fetch(image_source)
            if self._audit_logger:
                self._audit_logger.log_catalog_received(
                    code=catalog.code,
                    device_id=catalog.device_id,
                    filter_count=len(catalog.filters),
                    correlation_id=correlation_id,
                )

            image = await self._image_fetcher.fetch(catalog, filter_id)
        except InvalidFilterError as e:
            if self._audit_logger:
                self._audit_logger.log_filter_rejected(
                    filter_id=filter_id,
                    available_filters=e.available_filters,
                    correlation_id=correlation_id,
                )
            raise
        except RemoteServiceError as e:
            if self._audit_logger:
                self._audit_logger.log_remote_service_error(
                    status_code=e.status_code,
                    error_code=e.error_code,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )

            translated = translate_remote_error(e)
            if translated is None:
                raise

            if self._audit_logger:
                self._audit_logger.log_error_translated(
                    error_code=e.error_code,
                    translated_to=type(translated).__name__,
                    correlation_id=correlation_id,
                )
            raise translated from e

        if self._audit_logger:
            self._audit_logger.log_filter_image_received(
                code=catalog.code,
                device_id=catalog.device_id,
                filter_id=filter_id,
                image_size=len(image),
                correlation_id=correlation_id,
            )

        return image


class FilterListingFlow:
    """
    Lists every filter the service supports.

    Uploads a well-known sample face photo, so the result does not
    depend on any user image. Errors are not translated.
    """

    def __init__(
        self,
        api: FaceAppAPI,
        catalog_fetcher: FilterCatalogFetcher,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._api = api
        self._catalog_fetcher = catalog_fetcher
        self._audit_logger = audit_logger

    async def list_filters(
        self,
        minimal: bool = False,
        correlation_id: Optional[UUID] = None,
    ) -> Union[list[Filter], list[str]]:
        """
        List all available filters.

        Args:
            minimal: Return only filter IDs instead of full Filter records
        """
        correlation_id = correlation_id or create_correlation_id()

        sample = await self._api.download(self._api.settings.test_image_url)
        catalog = await self._catalog_fetcher.fetch(sample)

        if self._audit_logger:
            self._audit_logger.log_filters_listed(
                filter_count=len(catalog.filters),
                minimal=minimal,
                correlation_id=correlation_id,
            )

        if minimal:
            return catalog.filter_ids
        return list(catalog.filters)


class FaceAppClient:
    """
    Public entry point.

    Owns the HTTP client unless one is supplied, and wires the fetchers
    and flows together.

    Usage:
        async with FaceAppClient() as client:
            image = await client.process("./face.png", "female_2")
    """

    def __init__(
        self,
        settings: Optional[FaceAppSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        identity_provider: Optional[DeviceIdentityProvider] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings().faceapp
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.request_timeout_seconds),
        )
        self._audit_logger = audit_logger or AuditLogger()

        api = FaceAppAPI(self._http_client, self._settings)
        catalog_fetcher = FilterCatalogFetcher(api, identity_provider)

        self._process_flow = ProcessFlow(
            catalog_fetcher,
            FilteredImageFetcher(api),
            self._audit_logger,
        )
        self._listing_flow = FilterListingFlow(
            api,
            catalog_fetcher,
            self._audit_logger,
        )

    async def process(
        self,
        image_source: ImageSource,
        filter_id: Optional[str] = None,
    ) -> FilteredImage:
        return await self._process_flow.process(image_source, filter_id)

    async def list_filters(self, minimal: bool = False) -> Union[list[Filter], list[str]]:
        return await self._listing_flow.list_filters(minimal)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "FaceAppClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


async def process(
    image_source: ImageSource,
    filter_id: Optional[str] = None,
) -> FilteredImage:
    """
    Run an image through the FaceApp algorithm.

    For a list of filters see `list_filters()`.

    Example:
        image = await process("./path/to/image.png", "female_2")
    """
    async with FaceAppClient() as client:
        return await client.process(image_source, filter_id)


async def list_filters(minimal: bool = False) -> Union[list[Filter], list[str]]:
    """List all filters the service offers, or just their IDs if `minimal`."""
    async with FaceAppClient() as client:
        return await client.list_filters(minimal)
