"""Roster validation package."""

from chipsettle.validation.amounts import parse_amount
from chipsettle.validation.errors import (
    IncompleteAmountsError,
    InsufficientParticipantsError,
    InvalidAmountError,
    SettlementValidationError,
)
from chipsettle.validation.validator import (
    BalanceComputer,
    format_profit,
    format_signed,
    mismatch_message,
)

__all__ = [
    "BalanceComputer",
    "IncompleteAmountsError",
    "InsufficientParticipantsError",
    "InvalidAmountError",
    "SettlementValidationError",
    "format_profit",
    "format_signed",
    "mismatch_message",
    "parse_amount",
]
