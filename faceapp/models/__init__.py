"""
Data Models Package

Pydantic models for FaceApp API responses, the filter catalog handed to
callers, and audit events.
"""

from faceapp.models.filter import (
    ErrorDetail,
    ErrorResponse,
    Filter,
    FilterCatalog,
    FilteredImage,
    PhotoObject,
    PhotoUploadResponse,
    RemoteFilter,
)
from faceapp.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Filter models
    "ErrorDetail",
    "ErrorResponse",
    "Filter",
    "FilterCatalog",
    "FilteredImage",
    "PhotoObject",
    "PhotoUploadResponse",
    "RemoteFilter",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
