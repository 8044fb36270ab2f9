"""
Core Data Models for the FaceApp client

Two families of models live here:
1. Wire models - the JSON shapes the FaceApp API sends back
2. Domain models - what callers of this library receive

Wire models ignore unknown keys so that new server-side fields never
break parsing. Domain models are frozen: a catalog is produced once per
upload and is never mutated afterwards.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# =============================================================================
# WIRE MODELS - FaceApp API responses
# =============================================================================

class RemoteFilter(BaseModel):
    """One entry of `objects[0].children` in the upload response."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    title: str = ""
    is_paid: bool = False
    only_cropped: bool = False

    @field_validator("title", "is_paid", "only_cropped", mode="before")
    @classmethod
    def null_as_default(cls, v, info: ValidationInfo):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class PhotoObject(BaseModel):
    """A group of filters offered for an uploaded photo."""
    model_config = ConfigDict(extra="ignore")

    children: list[RemoteFilter] = Field(..., min_length=1)


class PhotoUploadResponse(BaseModel):
    """
    Body returned by `POST /api/{version}/photos`.

    Example:
        {"code": "abc", "objects": [{"children": [{"id": "no-filter", ...}]}]}
    """
    model_config = ConfigDict(extra="ignore")

    code: str = Field(..., min_length=1)
    objects: list[PhotoObject] = Field(..., min_length=1)


class ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body returned alongside non-success statuses: `{"err": {"code": ...}}`."""
    model_config = ConfigDict(extra="ignore")

    err: Optional[ErrorDetail] = None


# =============================================================================
# DOMAIN MODELS
# =============================================================================

class Filter(BaseModel):
    """
    A filter that can be applied to an uploaded photo.

    Paid filters are only ever rendered as cropped previews, so `cropped`
    is always True when `paid` is True.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    cropped: bool
    paid: bool

    @classmethod
    def from_remote(cls, remote: RemoteFilter) -> "Filter":
        return cls(
            id=remote.id,
            title=remote.title,
            cropped=remote.is_paid or remote.only_cropped,
            paid=remote.is_paid,
        )


class FilterCatalog(BaseModel):
    """
    Filters available for one uploaded photo.

    `code` identifies the upload on the server and `device_id` must be
    sent again with every follow-up request for the same upload.
    """
    model_config = ConfigDict(frozen=True)

    code: str
    device_id: str
    filters: tuple[Filter, ...] = Field(..., min_length=1)

    @property
    def filter_ids(self) -> list[str]:
        """Filter IDs in the order the service listed them."""
        return [f.id for f in self.filters]

    def get_filter(self, filter_id: str) -> Optional[Filter]:
        """Return the filter with the given ID, or None if it is not offered."""
        for f in self.filters:
            if f.id == filter_id:
                return f
        return None


# Rendered image bytes, handed to the caller as-is.
FilteredImage = bytes
