"""
Core Data Models for Chip Settle

These models define the strict schemas for all data flowing through the
settlement engine. They are designed to:
1. Enforce the numeric domain (non-negative, finite Decimal amounts)
2. Be immutable once handed to the engine
3. Be serializable for logging and sharing

DESIGN DECISION: Money is always Decimal, never float.
Amounts are kept at full precision; rounding only happens for display.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
)


# Balances and transfer amounts at or below this are treated as zero.
TOLERANCE = Decimal("0.01")


def quantize_amount(amount: Decimal, places: int = 2) -> Decimal:
    """Round an amount half-up to a fixed number of decimal places."""
    return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


# =============================================================================
# INPUT
# =============================================================================

class Participant(BaseModel):
    """
    One row of the roster: who they are, what they put in, what they took out.

    Unset amounts are None. A participant with an empty name is ignored by
    the settlement but still counts towards the raw totals.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: Optional[int] = Field(
        default=None,
        ge=0,
        description="Stable ordinal of the row"
    )
    name: str = Field(
        default="",
        description="Participant name (may be empty while the row is being edited)"
    )
    entry_amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Amount the participant bought in with"
    )
    exit_amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Amount the participant cashed out"
    )

    @property
    def is_named(self) -> bool:
        return bool(self.name)

    @property
    def has_both_amounts(self) -> bool:
        return self.entry_amount is not None and self.exit_amount is not None

    @property
    def missing_amounts(self) -> list[str]:
        """Names of the amount fields that are still unset."""
        missing = []
        if self.entry_amount is None:
            missing.append("entry_amount")
        if self.exit_amount is None:
            missing.append("exit_amount")
        return missing

    @property
    def profit(self) -> Optional[Decimal]:
        """Exit minus entry, or None while either amount is unset."""
        if not self.has_both_amounts:
            return None
        return self.exit_amount - self.entry_amount

    @classmethod
    def from_raw(
        cls,
        name: Optional[str],
        entry_text,
        exit_text,
        id: Optional[int] = None,
    ) -> "Participant":
        """
        Build a participant from raw form input.

        Raises InvalidAmountError if either amount is not a valid
        non-negative number. Blank amounts become None.
        """
        from chipsettle.validation.amounts import parse_amount

        return cls(
            id=id,
            name=name or "",
            entry_amount=parse_amount(entry_text),
            exit_amount=parse_amount(exit_text),
        )


# =============================================================================
# DERIVED
# =============================================================================

class NetBalance(BaseModel):
    """
    A named participant's signed result for the event.

    Positive means they are owed money, negative means they owe.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Trimmed participant name"
    )
    balance: Decimal = Field(
        ...,
        description="exit_amount - entry_amount"
    )

    def is_debtor(self, tolerance: Decimal = TOLERANCE) -> bool:
        return self.balance < -tolerance

    def is_creditor(self, tolerance: Decimal = TOLERANCE) -> bool:
        return self.balance > tolerance


class BalanceSheet(BaseModel):
    """Net balances of a validated roster plus the consistency check."""
    model_config = ConfigDict(frozen=True)

    balances: tuple[NetBalance, ...] = Field(
        default_factory=tuple,
        description="Net balances in roster order"
    )
    total: Decimal = Field(
        default=Decimal("0"),
        description="Signed sum of all balances"
    )
    mismatch: Optional[Decimal] = Field(
        default=None,
        description="The signed sum when it exceeds the tolerance"
    )

    @property
    def is_balanced(self) -> bool:
        return self.mismatch is None


# =============================================================================
# OUTPUT
# =============================================================================

class Transfer(BaseModel):
    """
    A single payment needed to settle up.

    The amount is kept at full precision; use rounded() for display.
    """
    model_config = ConfigDict(frozen=True)

    payer: str = Field(
        ...,
        min_length=1,
        description="Debtor who sends the money"
    )
    payee: str = Field(
        ...,
        min_length=1,
        description="Creditor who receives the money"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount to transfer"
    )

    def rounded(self, places: int = 2) -> Decimal:
        return quantize_amount(self.amount, places)

    def to_dict(self) -> dict:
        """Plain dict with display-rounded amount, for JSON output."""
        return {
            "from": self.payer,
            "to": self.payee,
            "amount": str(self.rounded()),
        }


class SettlementResult(BaseModel):
    """
    Result of a successful settlement.

    The balance warning is advisory: when the roster's amounts don't add up,
    the transfers are still computed on the data as given.
    """
    model_config = ConfigDict(frozen=True)

    transfers: tuple[Transfer, ...] = Field(
        default_factory=tuple,
        description="Transfers in the order they were matched"
    )
    balance_warning: Optional[Decimal] = Field(
        default=None,
        description="Signed sum of balances when it exceeds the tolerance"
    )
    balances: tuple[NetBalance, ...] = Field(
        default_factory=tuple,
        description="Net balances the transfers were computed from"
    )

    @property
    def is_settled(self) -> bool:
        """True when nobody needs to pay anybody."""
        return len(self.transfers) == 0

    @property
    def has_warning(self) -> bool:
        return self.balance_warning is not None

    @property
    def transfer_count(self) -> int:
        return len(self.transfers)


class Totals(BaseModel):
    """
    Aggregate amounts across the raw roster.

    Unset amounts count as zero, so this is safe to show while editing.
    """
    model_config = ConfigDict(frozen=True)

    participant_count: int = Field(
        ...,
        ge=0,
        description="Number of named participants"
    )
    total_entry: Decimal = Field(default=Decimal("0"))
    total_exit: Decimal = Field(default=Decimal("0"))

    @computed_field
    @property
    def net(self) -> Decimal:
        return self.total_exit - self.total_entry


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class RosterIssue(BaseModel):
    """A single problem found in the roster."""
    model_config = ConfigDict(frozen=True)

    participant_id: Optional[int] = Field(
        default=None,
        description="Row the issue belongs to, if any"
    )
    name: Optional[str] = Field(
        default=None,
        description="Participant name the issue belongs to, if any"
    )
    issue_type: str = Field(
        ...,
        pattern="^(insufficient_participants|incomplete_amounts|balance_mismatch)$",
        description="Type of issue"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )
