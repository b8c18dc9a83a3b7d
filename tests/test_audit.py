"""Tests for the audit logger."""

from unittest.mock import MagicMock
from uuid import UUID

import pytest

from chipsettle.audit import AuditLogger, create_correlation_id
from chipsettle.models.audit import AuditEvent, AuditEventType, AuditSeverity


@pytest.fixture
def audit_logger():
    logger = AuditLogger()
    logger._logger = MagicMock()
    return logger


class TestAuditLogger:

    @pytest.mark.parametrize("severity,method", [
        (AuditSeverity.DEBUG, "debug"),
        (AuditSeverity.INFO, "info"),
        (AuditSeverity.WARNING, "warning"),
        (AuditSeverity.ERROR, "error"),
    ])
    def test_routes_by_severity(self, audit_logger, severity, method):
        event = AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=severity,
            description="test",
        )
        audit_logger.log(event)

        getattr(audit_logger._logger, method).assert_called_once()
        args, kwargs = getattr(audit_logger._logger, method).call_args
        assert args == ("audit_event",)
        assert kwargs["event_id"] == str(event.event_id)

    def test_settlement_completed(self, audit_logger):
        correlation_id = create_correlation_id()
        audit_logger.log_settlement_completed(
            transfer_count=2,
            total_transferred="100",
            correlation_id=correlation_id,
        )
        kwargs = audit_logger._logger.info.call_args.kwargs
        assert kwargs["event_type"] == "settlement_completed"
        assert kwargs["correlation_id"] == str(correlation_id)
        assert kwargs["details"] == {"transfer_count": 2, "total_transferred": "100"}

    def test_validation_failed_is_warning(self, audit_logger):
        audit_logger.log_validation_failed(
            error_code="insufficient_participants",
            error_message="At least 2 players are required (got 1)",
        )
        kwargs = audit_logger._logger.warning.call_args.kwargs
        assert kwargs["error_code"] == "insufficient_participants"

    def test_balance_mismatch_is_warning(self, audit_logger):
        audit_logger.log_balance_mismatch(mismatch="-3.00")
        kwargs = audit_logger._logger.warning.call_args.kwargs
        assert kwargs["details"] == {"mismatch": "-3.00"}

    def test_error(self, audit_logger):
        audit_logger.log_error(error_type="ValueError", error_message="boom")
        kwargs = audit_logger._logger.error.call_args.kwargs
        assert kwargs["error_message"] == "boom"

    def test_real_logger_does_not_raise(self):
        """Test the configured structlog pipeline accepts our events."""
        AuditLogger().log_settlement_requested(participant_count=3, named_count=2)

    def test_correlation_id(self):
        assert isinstance(create_correlation_id(), UUID)
        assert create_correlation_id() != create_correlation_id()
