"""
Roster validation errors.

Every error carries a message that can be shown to the user as-is.
A balance mismatch is deliberately NOT an error: it is returned as a
warning next to a successful settlement.
"""

from typing import Optional


class SettlementValidationError(Exception):
    """Base exception for rosters that cannot be settled."""

    error_code = "validation_error"

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return str(self)


class InsufficientParticipantsError(SettlementValidationError):
    """Fewer named participants than a settlement needs."""

    error_code = "insufficient_participants"

    def __init__(self, count: int, required: int = 2):
        self.count = count
        self.required = required
        super().__init__(f"At least {required} players are required (got {count})")


class IncompleteAmountsError(SettlementValidationError):
    """A named participant is missing their entry or exit amount."""

    error_code = "incomplete_amounts"

    def __init__(self, name: str, missing: Optional[list[str]] = None):
        self.missing = missing or []
        super().__init__(f"Please fill in all amounts for {name}", name=name)


class InvalidAmountError(SettlementValidationError):
    """Raw amount text is not a non-negative, finite number."""

    error_code = "invalid_amount"

    def __init__(self, raw, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"'{raw}' is not a valid amount: {reason}")
