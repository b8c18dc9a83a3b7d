"""
Totals Aggregation

DESIGN DECISION: Totals are LENIENT where settlement is strict.
They are shown live while the roster is being typed in, so an unset
amount simply counts as zero and unnamed rows still contribute their
amounts. Only the participant count is restricted to named rows.

A non-zero net here is the same signal as the settlement's balance
warning: chips went in that did not come out, or the other way around.
"""

from decimal import Decimal
from typing import Sequence

from chipsettle.models.roster import Participant, Totals


class TotalsAggregator:
    """Sums entry and exit amounts across the whole roster."""

    def aggregate(self, participants: Sequence[Participant]) -> Totals:
        """Aggregate the raw roster. Never fails."""
        total_entry = Decimal("0")
        total_exit = Decimal("0")
        named = 0

        for p in participants:
            total_entry += p.entry_amount or Decimal("0")
            total_exit += p.exit_amount or Decimal("0")
            if p.name.strip():
                named += 1

        return Totals(
            participant_count=named,
            total_entry=total_entry,
            total_exit=total_exit,
        )

    def profit_by_row(self, participants: Sequence[Participant]) -> dict[int, Decimal]:
        """
        Profit/loss of every row that has both amounts, keyed by row position.

        Rows with a missing amount are left out rather than shown as zero.
        """
        result = {}
        for index, p in enumerate(participants):
            profit = p.profit
            if profit is not None:
                result[index] = profit
        return result
