"""
Audit Models for the FaceApp client

Every remote call and every error translation produces one audit event.
Events sharing a correlation ID belong to the same top-level operation
(one `process` or one `list_filters` call).

Image bytes are never recorded, only their size.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Catalog
    CATALOG_RECEIVED = "catalog_received"

    # Rendering
    FILTER_IMAGE_RECEIVED = "filter_image_received"
    FILTER_REJECTED = "filter_rejected"

    # Listing
    FILTERS_LISTED = "filters_listed"

    # Errors
    REMOTE_SERVICE_ERROR = "remote_service_error"
    ERROR_TRANSLATED = "error_translated"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


DESCRIPTION_MAX_LENGTH = 500


def _truncate(text: str, limit: int = DESCRIPTION_MAX_LENGTH) -> str:
    """Cut text to fit a bounded event field."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class AuditEvent(BaseModel):
    """A single audit event."""

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one operation"
    )
    device_id: Optional[str] = Field(
        default=None,
        description="Device identifier sent to the FaceApp API"
    )

    description: str = Field(
        ...,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "device_id": self.device_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.catalog_received(code, device_id, 12, correlation_id)
        event = AuditEventBuilder.filters_listed(12, minimal=True, correlation_id=cid)
    """

    @staticmethod
    def catalog_received(
        code: str,
        device_id: str,
        filter_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATALOG_RECEIVED,
            correlation_id=correlation_id,
            device_id=device_id,
            description=f"Photo uploaded, {filter_count} filters available",
            details={
                "code": code,
                "filter_count": filter_count,
            },
        )

    @staticmethod
    def filter_image_received(
        code: str,
        device_id: str,
        filter_id: str,
        image_size: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_IMAGE_RECEIVED,
            correlation_id=correlation_id,
            device_id=device_id,
            description=_truncate(f"Filter '{filter_id}' rendered"),
            details={
                "code": code,
                "filter_id": filter_id,
                "image_size_bytes": image_size,
            },
        )

    @staticmethod
    def filter_rejected(
        filter_id: str,
        available_filters: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=_truncate(f"Filter '{filter_id}' is not offered for this photo"),
            details={
                "filter_id": filter_id,
                "available_filters": available_filters,
            },
        )

    @staticmethod
    def filters_listed(
        filter_count: int,
        minimal: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTERS_LISTED,
            correlation_id=correlation_id,
            description=f"Listed {filter_count} filters",
            details={
                "filter_count": filter_count,
                "minimal": minimal,
            },
        )

    @staticmethod
    def remote_service_error(
        status_code: Optional[int],
        error_code: Optional[str],
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOTE_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"FaceApp API call failed (status: {status_code})",
            details={
                "status_code": status_code,
            },
            error_code=error_code,
            error_message=_truncate(error_message),
        )

    @staticmethod
    def error_translated(
        error_code: str,
        translated_to: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ERROR_TRANSLATED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=_truncate(f"Service error '{error_code}' raised as {translated_to}"),
            details={
                "translated_to": translated_to,
            },
            error_code=error_code,
        )
