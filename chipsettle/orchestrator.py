"""
Main Orchestrator for Chip Settle

This module ties together all the components and defines the
end-to-end flows for:
1. Settlement (roster -> validate -> net balances -> transfers)
2. Totals (roster -> lenient sums, for live display)
3. Sharing (transfers -> text and links)
4. Live feedback while the roster is edited (issues, per-row profit)

DESIGN DECISION: Every flow is a pure function of its input.
There is no "current state": the validation error, the balance warning
and the transfers are all expressed by the return value (or the raised
error) of a single call.
"""

from decimal import Decimal
from typing import Optional, Sequence
from uuid import UUID

from chipsettle.audit import AuditLogger, create_correlation_id
from chipsettle.config import get_settings
from chipsettle.models.roster import (
    Participant,
    RosterIssue,
    SettlementResult,
    Totals,
)
from chipsettle.queries import TotalsAggregator
from chipsettle.settlement import SettlementEngine
from chipsettle.sharing import SummaryFormatter
from chipsettle.validation import BalanceComputer, SettlementValidationError


class SettlementFlow:
    """
    Orchestrates a settlement calculation.

    Flow:
    1. Roster checks -> raise on the first blocking problem
    2. Net balances and the consistency check
    3. Greedy matching -> transfers
    4. Result carries transfers and the balance warning together
    """

    def __init__(
        self,
        balance_computer: Optional[BalanceComputer] = None,
        engine: Optional[SettlementEngine] = None,
        aggregator: Optional[TotalsAggregator] = None,
        formatter: Optional[SummaryFormatter] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._audit_logger = audit_logger
        self._balance_computer = balance_computer or BalanceComputer(audit_logger=audit_logger)
        self._engine = engine or SettlementEngine()
        self._aggregator = aggregator or TotalsAggregator()
        self._formatter = formatter or SummaryFormatter()

    @property
    def formatter(self) -> SummaryFormatter:
        return self._formatter

    def compute_settlement(
        self,
        participants: Sequence[Participant],
        correlation_id: Optional[UUID] = None,
    ) -> SettlementResult:
        """
        Settle a roster.

        Returns:
            SettlementResult with the transfers and, if the amounts did not
            add up, the signed mismatch as balance_warning.

        Raises:
            SettlementValidationError: the roster cannot be settled. No
            partial result is produced.
        """
        correlation_id = correlation_id or create_correlation_id()

        if self._audit_logger:
            self._audit_logger.log_settlement_requested(
                participant_count=len(participants),
                named_count=len(BalanceComputer.named_participants(participants)),
                correlation_id=correlation_id,
            )

        try:
            sheet = self._balance_computer.compute(participants, correlation_id=correlation_id)
            transfers = self._engine.settle(sheet.balances)
        except SettlementValidationError:
            raise
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"participant_count": len(participants)},
                    correlation_id=correlation_id,
                )
            raise

        result = SettlementResult(
            transfers=transfers,
            balance_warning=sheet.mismatch,
            balances=sheet.balances,
        )

        if self._audit_logger:
            total = sum((t.amount for t in transfers), Decimal("0"))
            self._audit_logger.log_settlement_completed(
                transfer_count=len(transfers),
                total_transferred=str(total),
                correlation_id=correlation_id,
            )

        return result

    def compute_totals(
        self,
        participants: Sequence[Participant],
        correlation_id: Optional[UUID] = None,
    ) -> Totals:
        """Lenient totals of the raw roster. Never fails."""
        totals = self._aggregator.aggregate(participants)

        if self._audit_logger:
            self._audit_logger.log_totals_computed(
                participant_count=totals.participant_count,
                net=str(totals.net),
                correlation_id=correlation_id,
            )

        return totals

    def check_roster(self, participants: Sequence[Participant]) -> list[RosterIssue]:
        """Every problem with the roster as it stands, for live feedback. Never raises."""
        return self._balance_computer.collect_issues(participants)

    def row_profits(self, participants: Sequence[Participant]) -> dict[int, Decimal]:
        """Profit/loss per roster position, for rows with both amounts."""
        return self._aggregator.profit_by_row(participants)

    def summarize(self, result: SettlementResult) -> str:
        """Plain-language summary of a result for the results panel."""
        return self._formatter.get_user_friendly_summary(result)

    def share(
        self,
        result: SettlementResult,
        channel: str = "text",
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """
        Render a result for a share channel.

        Channels: text, whatsapp, telegram, email.
        Returns the share text for "text" and a URL for the others.
        """
        renderers = {
            "text": self._formatter.share_text,
            "whatsapp": self._formatter.whatsapp_url,
            "telegram": self._formatter.telegram_url,
            "email": self._formatter.email_url,
        }
        if channel not in renderers:
            raise ValueError(f"Unknown share channel: {channel}. Allowed: {sorted(renderers)}")

        rendered = renderers[channel](result.transfers)

        if self._audit_logger:
            self._audit_logger.log_share_text_generated(
                channel=channel,
                transfer_count=result.transfer_count,
                correlation_id=correlation_id,
            )

        return rendered


def create_app_components(audit: Optional[bool] = None) -> SettlementFlow:
    """
    Factory function to create the application's settlement flow.

    Args:
        audit: Whether to attach an audit logger. Defaults to the
               audit_enabled setting.
    """
    if audit is None:
        audit = get_settings().app.audit_enabled

    audit_logger = AuditLogger() if audit else None
    return SettlementFlow(audit_logger=audit_logger)


_default_flow: Optional[SettlementFlow] = None


def _get_default_flow() -> SettlementFlow:
    global _default_flow
    if _default_flow is None:
        _default_flow = create_app_components()
    return _default_flow


def compute_settlement(participants: Sequence[Participant]) -> SettlementResult:
    """Settle a roster with the default flow. See SettlementFlow.compute_settlement."""
    return _get_default_flow().compute_settlement(participants)


def compute_totals(participants: Sequence[Participant]) -> Totals:
    """Totals of a roster with the default flow. See SettlementFlow.compute_totals."""
    return _get_default_flow().compute_totals(participants)
