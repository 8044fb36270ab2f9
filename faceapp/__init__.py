"""
FaceApp - Python client

Uploads a photo to the FaceApp service, lists the filters it offers for
that photo, and downloads the filtered result.

    import faceapp

    image = await faceapp.process("./face.png", "female_2")
    ids = await faceapp.list_filters(minimal=True)
"""

__version__ = "1.0.0"

from faceapp.models.filter import Filter, FilterCatalog
from faceapp.orchestrator import (
    FaceAppClient,
    FilterListingFlow,
    ProcessFlow,
    list_filters,
    process,
)
from faceapp.services.api import (
    FaceAppError,
    InvalidFilterError,
    MalformedResponseError,
    NoFacesDetectedError,
    RemoteServiceError,
)

__all__ = [
    "FaceAppClient",
    "FaceAppError",
    "Filter",
    "FilterCatalog",
    "FilterListingFlow",
    "InvalidFilterError",
    "MalformedResponseError",
    "NoFacesDetectedError",
    "ProcessFlow",
    "RemoteServiceError",
    "list_filters",
    "process",
]
