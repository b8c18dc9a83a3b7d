"""
Data Models Package

This package contains all Pydantic models used by Chip Settle.
All data flowing through the engine must conform to these schemas.
"""

from chipsettle.models.roster import (
    TOLERANCE,
    BalanceSheet,
    NetBalance,
    Participant,
    RosterIssue,
    SettlementResult,
    Totals,
    Transfer,
    quantize_amount,
)
from chipsettle.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Roster models
    "TOLERANCE",
    "BalanceSheet",
    "NetBalance",
    "Participant",
    "RosterIssue",
    "SettlementResult",
    "Totals",
    "Transfer",
    "quantize_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
