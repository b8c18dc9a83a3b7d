"""
Roster Validation and Net Balances

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - ROSTER CHECKS (blocking):
- Enough named participants
- Every named participant has both amounts
- A failure aborts the settlement, no partial result is produced

STAGE 2 - CONSISTENCY CHECK (advisory):
- Balances should sum to zero
- A mismatch means chips went unaccounted for; it is reported with its
  signed magnitude and the settlement still proceeds on the data as given

IMPORTANT: Validation NEVER silently fixes issues.
It does not drop incomplete rows and it does not force the roster to balance.
"""

from decimal import Decimal
from typing import Optional, Sequence
from uuid import UUID

from chipsettle.audit import AuditLogger
from chipsettle.config import get_settings
from chipsettle.models.roster import (
    BalanceSheet,
    NetBalance,
    Participant,
    RosterIssue,
    quantize_amount,
)
from chipsettle.validation.errors import (
    IncompleteAmountsError,
    InsufficientParticipantsError,
    SettlementValidationError,
)


def format_signed(amount: Decimal, places: int = 2) -> str:
    """Render an amount with an explicit sign, e.g. '+5.00' or '-3.10'."""
    return f"{amount:+.{places}f}"


def format_profit(amount: Decimal, places: int = 0) -> str:
    """
    Render a profit/loss for display, signed after rounding.

    Values that round to zero show as '0', never '+0' or '-0'.
    """
    rounded = quantize_amount(amount, places)
    if rounded == 0:
        return f"{abs(rounded):.{places}f}"
    return format_signed(rounded, places)


def mismatch_message(amount: Decimal) -> str:
    """User-facing warning for a roster whose balances do not sum to zero."""
    return f"Amounts don't balance ({format_signed(amount)})"


class BalanceComputer:
    """
    Turns a raw roster into validated net balances.

    Stage 1 raises a SettlementValidationError.
    Stage 2 only annotates the BalanceSheet.
    """

    def __init__(
        self,
        tolerance: Optional[Decimal] = None,
        min_participants: Optional[int] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the computer.

        Args:
            tolerance: Threshold for "effectively balanced". Defaults to settings.
            min_participants: Named participants required. Defaults to settings.
            audit_logger: If given, rejected rosters and mismatches are logged.
        """
        settings = get_settings().settlement
        self._tolerance = settings.tolerance if tolerance is None else tolerance
        self._min_participants = (
            settings.min_participants if min_participants is None else min_participants
        )
        self._audit_logger = audit_logger

    @property
    def tolerance(self) -> Decimal:
        return self._tolerance

    @staticmethod
    def named_participants(participants: Sequence[Participant]) -> list[Participant]:
        """Participants that take part in the settlement, in roster order."""
        return [p for p in participants if p.name.strip()]

    def _validate_roster(self, named: list[Participant]) -> None:
        """
        Stage 1: roster checks.

        Raises on the first problem found, in roster order.
        """
        if len(named) < self._min_participants:
            raise InsufficientParticipantsError(len(named), self._min_participants)

        for participant in named:
            if not participant.has_both_amounts:
                raise IncompleteAmountsError(
                    participant.name.strip(),
                    participant.missing_amounts,
                )

    def _check_balance(self, balances: list[NetBalance]) -> tuple[Decimal, Optional[Decimal]]:
        """
        Stage 2: consistency check.

        Returns: (signed_total, mismatch_or_None)
        """
        total = sum((b.balance for b in balances), Decimal("0"))
        if abs(total) > self._tolerance:
            return total, total
        return total, None

    def compute(
        self,
        participants: Sequence[Participant],
        correlation_id: Optional[UUID] = None,
    ) -> BalanceSheet:
        """
        Validate the roster and compute each participant's net balance.

        Args:
            participants: The raw roster, including unnamed rows
            correlation_id: Ties audit events to one calculation

        Returns:
            BalanceSheet with balances in roster order and the mismatch, if any

        Raises:
            InsufficientParticipantsError, IncompleteAmountsError
        """
        named = self.named_participants(participants)

        try:
            self._validate_roster(named)
        except SettlementValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    error_code=e.error_code,
                    error_message=str(e),
                    name=e.name,
                    correlation_id=correlation_id,
                )
            raise

        balances = [
            NetBalance(name=p.name.strip(), balance=p.exit_amount - p.entry_amount)
            for p in named
        ]

        total, mismatch = self._check_balance(balances)
        if mismatch is not None and self._audit_logger:
            self._audit_logger.log_balance_mismatch(
                mismatch=format_signed(mismatch),
                correlation_id=correlation_id,
            )

        return BalanceSheet(balances=balances, total=total, mismatch=mismatch)

    def collect_issues(self, participants: Sequence[Participant]) -> list[RosterIssue]:
        """
        Report every problem in the roster without raising.

        Used for live feedback while the roster is being edited; compute()
        stops at the first error instead.
        """
        issues = []
        named = self.named_participants(participants)

        if len(named) < self._min_participants:
            issues.append(RosterIssue(
                issue_type="insufficient_participants",
                message=str(InsufficientParticipantsError(len(named), self._min_participants)),
                severity="error",
            ))

        incomplete = [p for p in named if not p.has_both_amounts]
        for participant in incomplete:
            name = participant.name.strip()
            issues.append(RosterIssue(
                participant_id=participant.id,
                name=name,
                issue_type="incomplete_amounts",
                message=str(IncompleteAmountsError(name, participant.missing_amounts)),
                severity="error",
            ))

        # The sum is only meaningful once every named row is complete
        if named and not incomplete:
            balances = [
                NetBalance(name=p.name.strip(), balance=p.exit_amount - p.entry_amount)
                for p in named
            ]
            _, mismatch = self._check_balance(balances)
            if mismatch is not None:
                issues.append(RosterIssue(
                    issue_type="balance_mismatch",
                    message=mismatch_message(mismatch),
                    severity="warning",
                ))

        return issues
