"""
FaceApp client exceptions

RemoteServiceError is the only error raised for transport or HTTP
failures. The domain errors (InvalidFilterError, NoFacesDetectedError)
come from local validation or from translating a known service error
code.
"""

from typing import Iterable, Optional

from pydantic import ValidationError

from faceapp.models.filter import ErrorResponse


class FaceAppError(Exception):
    """Base exception for FaceApp client errors."""
    pass


class RemoteServiceError(FaceAppError):
    """
    A request to the FaceApp API failed.

    `status_code` is None when no HTTP response was received
    (connection refused, timeout, ...). `body` holds the raw response
    body so callers can inspect the service's error payload.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: bytes = b"",
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @property
    def error_code(self) -> Optional[str]:
        """The service's `err.code`, if the body carries one."""
        if not self.body:
            return None
        try:
            parsed = ErrorResponse.model_validate_json(self.body)
        except ValidationError:
            return None
        if parsed.err is None:
            return None
        return parsed.err.code or None


class MalformedResponseError(FaceAppError):
    """The service answered successfully but not in the expected shape."""
    pass


class InvalidFilterError(FaceAppError):
    """The requested filter is not available for this photo."""

    def __init__(self, message: str, available_filters: Iterable[str] = ()):
        self.available_filters = list(available_filters)
        super().__init__(message)


class NoFacesDetectedError(FaceAppError):
    """The service found no faces in the uploaded photo."""
    pass
