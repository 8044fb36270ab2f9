"""Filtered image retrieval for an uploaded photo."""

from faceapp.models.filter import FilterCatalog, FilteredImage
from faceapp.services.api import FaceAppAPI, InvalidFilterError


DEFAULT_FILTER_ID = "no-filter"


class FilteredImageFetcher:
    """Downloads the rendered output of one filter from a catalog."""

    def __init__(self, api: FaceAppAPI):
        self._api = api

    async def fetch(
        self,
        catalog: FilterCatalog,
        filter_id: str = DEFAULT_FILTER_ID,
    ) -> FilteredImage:
        """
        Render `filter_id` for the photo behind `catalog`.

        The filter ID is checked against the catalog before any request
        is made.

        Raises:
            InvalidFilterError: If the catalog does not offer `filter_id`
            RemoteServiceError: If the download fails
        """
        selected = catalog.get_filter(filter_id)
        if selected is None:
            available = catalog.filter_ids
            raise InvalidFilterError(
                f"Invalid Filter ID\nAvailable Filters: '{', '.join(available)}'",
                available_filters=available,
            )

        return await self._api.get_filtered_photo(
            code=catalog.code,
            filter_id=selected.id,
            cropped=selected.cropped,
            device_id=catalog.device_id,
        )
