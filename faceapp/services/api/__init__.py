"""FaceApp API transport package."""

from faceapp.services.api.client import DEVICE_ID_HEADER, FaceAppAPI
from faceapp.services.api.errors import (
    FaceAppError,
    InvalidFilterError,
    MalformedResponseError,
    NoFacesDetectedError,
    RemoteServiceError,
)

__all__ = [
    "DEVICE_ID_HEADER",
    "FaceAppAPI",
    "FaceAppError",
    "InvalidFilterError",
    "MalformedResponseError",
    "NoFacesDetectedError",
    "RemoteServiceError",
]
