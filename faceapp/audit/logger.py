"""
Audit Logger

Every remote call and error translation in the client is logged as a
structured event. The logger:
- Never raises into the calling flow if an event cannot be built or written
- Writes through structlog (JSON lines on the stdlib logging tree)
- Maps event severity onto the log level
- Supports correlation IDs to trace the events of one operation
"""

from typing import Callable, Optional
from uuid import UUID, uuid4

import structlog

from faceapp.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger_name: str = "faceapp.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def _record(self, build: Callable[..., AuditEvent], **fields) -> None:
        """Build and log an event; failures are logged, not raised."""
        try:
            self.log(build(**fields))
        except Exception as e:
            self._logger.error(
                "audit_event_failed",
                builder=build.__name__,
                error=str(e),
            )

    def log_catalog_received(
        self,
        code: str,
        device_id: str,
        filter_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._record(
            AuditEventBuilder.catalog_received,
            code=code,
            device_id=device_id,
            filter_count=filter_count,
            correlation_id=correlation_id,
        )

    def log_filter_image_received(
        self,
        code: str,
        device_id: str,
        filter_id: str,
        image_size: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._record(
            AuditEventBuilder.filter_image_received,
            code=code,
            device_id=device_id,
            filter_id=filter_id,
            image_size=image_size,
            correlation_id=correlation_id,
        )

    def log_filter_rejected(
        self,
        filter_id: str,
        available_filters: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._record(
            AuditEventBuilder.filter_rejected,
            filter_id=filter_id,
            available_filters=available_filters,
            correlation_id=correlation_id,
        )

    def log_filters_listed(
        self,
        filter_count: int,
        minimal: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._record(
            AuditEventBuilder.filters_listed,
            filter_count=filter_count,
            minimal=minimal,
            correlation_id=correlation_id,
        )

    def log_remote_service_error(
        self,
        status_code: Optional[int],
        error_code: Optional[str],
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._record(
            AuditEventBuilder.remote_service_error,
            status_code=status_code,
            error_code=error_code,
            error_message=error_message,
            correlation_id=correlation_id,
        )

    def log_error_translated(
        self,
        error_code: str,
        translated_to: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._record(
            AuditEventBuilder.error_translated,
            error_code=error_code,
            translated_to=translated_to,
            correlation_id=correlation_id,
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new top-level operation and pass it
    through all subsequent audit calls.
    """
    return uuid4()
