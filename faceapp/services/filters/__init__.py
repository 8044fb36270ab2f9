"""Filter catalog and rendering services package."""

from faceapp.services.filters.catalog import (
    FilterCatalogFetcher,
    ImageSource,
    read_image_source,
)
from faceapp.services.filters.rendering import (
    DEFAULT_FILTER_ID,
    FilteredImageFetcher,
)

__all__ = [
    "DEFAULT_FILTER_ID",
    "FilterCatalogFetcher",
    "FilteredImageFetcher",
    "ImageSource",
    "read_image_source",
]
