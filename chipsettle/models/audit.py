"""
Audit Models for Chip Settle

Every calculation leaves a trail in the structured log:
1. What was asked (roster size)
2. Why it was rejected, if it was
3. What the engine produced

DESIGN DECISION: Audit events carry names and amounts as strings so the
log output is exact (no float rendering of Decimal).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Settlement
    SETTLEMENT_REQUESTED = "settlement_requested"
    ROSTER_VALIDATION_FAILED = "roster_validation_failed"
    BALANCE_MISMATCH_DETECTED = "balance_mismatch_detected"
    SETTLEMENT_COMPLETED = "settlement_completed"

    # Display
    TOTALS_COMPUTED = "totals_computed"
    SHARE_TEXT_GENERATED = "share_text_generated"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant step of a calculation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
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

    # Correlation - all events of one calculation share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one calculation"
    )

    description: str = Field(
        ...,
        max_length=500,
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
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.settlement_requested(5, 4, correlation_id)
        event = AuditEventBuilder.settlement_completed(3, "120", correlation_id)
    """

    @staticmethod
    def settlement_requested(
        participant_count: int,
        named_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_REQUESTED,
            correlation_id=correlation_id,
            description=f"Settlement requested for {named_count} named participants",
            details={
                "participant_count": participant_count,
                "named_count": named_count,
            },
        )

    @staticmethod
    def roster_validation_failed(
        error_code: str,
        error_message: str,
        name: Optional[str] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        details = {"name": name} if name else {}
        return AuditEvent(
            event_type=AuditEventType.ROSTER_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Roster rejected before settlement",
            details=details,
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def balance_mismatch_detected(
        mismatch: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_MISMATCH_DETECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Balances do not sum to zero ({mismatch})",
            details={
                "mismatch": mismatch,
            },
        )

    @staticmethod
    def settlement_completed(
        transfer_count: int,
        total_transferred: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_COMPLETED,
            correlation_id=correlation_id,
            description=f"Settlement completed with {transfer_count} transfers",
            details={
                "transfer_count": transfer_count,
                "total_transferred": total_transferred,
            },
        )

    @staticmethod
    def totals_computed(
        participant_count: int,
        net: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TOTALS_COMPUTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Totals computed for {participant_count} participants",
            details={
                "participant_count": participant_count,
                "net": net,
            },
        )

    @staticmethod
    def share_text_generated(
        channel: str,
        transfer_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHARE_TEXT_GENERATED,
            correlation_id=correlation_id,
            description=f"Summary prepared for {channel}",
            details={
                "channel": channel,
                "transfer_count": transfer_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
