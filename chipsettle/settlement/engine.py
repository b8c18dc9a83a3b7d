"""
Settlement Engine

Greedy largest-debtor / largest-creditor matching.

DESIGN DECISION: The engine pairs the biggest debt with the biggest credit,
settles the smaller of the two in full, and repeats. Every round exhausts
at least one side, so a roster with D debtors and C creditors needs at most
D + C - 1 transfers.

This is a heuristic. The theoretical minimum number of transfers is an
NP-hard problem in general; some rosters admit fewer transfers with other
pairings. The greedy order is kept because it is predictable and easy to
audit by hand.

GUARANTEES:
- Deterministic: equal magnitudes keep their roster order (stable sort)
- Input balances are never mutated
- No transfer at or below the tolerance is ever emitted
"""

from decimal import Decimal
from typing import Optional, Sequence

from chipsettle.config import get_settings
from chipsettle.models.roster import NetBalance, Transfer


class SettlementEngine:
    """
    Computes the transfers that settle a set of net balances.

    Stateless apart from the tolerance; one instance can serve any
    number of calculations.
    """

    def __init__(self, tolerance: Optional[Decimal] = None):
        if tolerance is None:
            tolerance = get_settings().settlement.tolerance
        self._tolerance = tolerance

    @property
    def tolerance(self) -> Decimal:
        return self._tolerance

    def partition(
        self,
        balances: Sequence[NetBalance],
    ) -> tuple[list[list], list[list]]:
        """
        Split balances into debtors and creditors, largest first.

        Each entry is a mutable [name, magnitude] pair; magnitudes are
        positive for both sides. Balances within the tolerance of zero
        are left out.

        Returns: (debtors, creditors)
        """
        debtors = []
        creditors = []
        for b in balances:
            if b.is_debtor(self._tolerance):
                debtors.append([b.name, -b.balance])  # store positive owed amount
            elif b.is_creditor(self._tolerance):
                creditors.append([b.name, b.balance])

        # list.sort is stable, so ties keep roster order
        debtors.sort(key=lambda x: x[1], reverse=True)
        creditors.sort(key=lambda x: x[1], reverse=True)
        return debtors, creditors

    def settle(self, balances: Sequence[NetBalance]) -> list[Transfer]:
        """
        Produce the ordered list of transfers for the given balances.

        An already-settled roster (no debtors or no creditors) yields
        an empty list.
        """
        debtors, creditors = self.partition(balances)

        i = j = 0
        transfers = []
        while i < len(debtors) and j < len(creditors):
            debtor = debtors[i]
            creditor = creditors[j]

            amount = min(debtor[1], creditor[1])
            if amount > self._tolerance:
                transfers.append(Transfer(payer=debtor[0], payee=creditor[0], amount=amount))

            debtor[1] -= amount
            creditor[1] -= amount

            if debtor[1] < self._tolerance:
                i += 1
            if creditor[1] < self._tolerance:
                j += 1

        return transfers
