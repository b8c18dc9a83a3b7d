"""
Audit Logger

DESIGN DECISION: Every calculation is logged.
This provides:
1. Traceability of what the roster looked like when it was settled
2. Debugging capability when someone disputes a transfer
3. Visibility of rosters whose amounts did not add up

The audit logger:
- Is synchronous, the engine has no suspension points
- Only logs locally, nothing is persisted
- Supports correlation IDs to trace the events of one calculation
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from chipsettle.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


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
    """
    Central audit logging service.

    Writes every event to the structured local log.
    """

    def __init__(self, logger_name: str = "chipsettle.audit"):
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

    def log_settlement_requested(
        self,
        participant_count: int,
        named_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log the start of a settlement calculation."""
        event = AuditEventBuilder.settlement_requested(
            participant_count=participant_count,
            named_count=named_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_validation_failed(
        self,
        error_code: str,
        error_message: str,
        name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a roster that was rejected."""
        event = AuditEventBuilder.roster_validation_failed(
            error_code=error_code,
            error_message=error_message,
            name=name,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_balance_mismatch(
        self,
        mismatch: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a roster whose balances do not add up."""
        event = AuditEventBuilder.balance_mismatch_detected(
            mismatch=mismatch,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_settlement_completed(
        self,
        transfer_count: int,
        total_transferred: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a finished settlement."""
        event = AuditEventBuilder.settlement_completed(
            transfer_count=transfer_count,
            total_transferred=total_transferred,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_totals_computed(
        self,
        participant_count: int,
        net: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.totals_computed(
            participant_count=participant_count,
            net=net,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_share_text_generated(
        self,
        channel: str,
        transfer_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.share_text_generated(
            channel=channel,
            transfer_count=transfer_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unexpected error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a calculation and pass it through
    all subsequent operations.
    """
    return uuid4()
