"""Settlement engine package."""

from chipsettle.settlement.engine import SettlementEngine

__all__ = ["SettlementEngine"]
