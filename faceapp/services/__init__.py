"""Services package."""

from faceapp.services.api import (
    DEVICE_ID_HEADER,
    FaceAppAPI,
    FaceAppError,
    InvalidFilterError,
    MalformedResponseError,
    NoFacesDetectedError,
    RemoteServiceError,
)
from faceapp.services.filters import (
    DEFAULT_FILTER_ID,
    FilterCatalogFetcher,
    FilteredImageFetcher,
    ImageSource,
    read_image_source,
)
from faceapp.services.identity import (
    DeviceIdentityProvider,
    generate_device_id,
)

__all__ = [
    # API transport
    "DEVICE_ID_HEADER",
    "FaceAppAPI",
    "FaceAppError",
    "InvalidFilterError",
    "MalformedResponseError",
    "NoFacesDetectedError",
    "RemoteServiceError",
    # Filter services
    "DEFAULT_FILTER_ID",
    "FilterCatalogFetcher",
    "FilteredImageFetcher",
    "ImageSource",
    "read_image_source",
    # Identity
    "DeviceIdentityProvider",
    "generate_device_id",
]
