"""Tests for the greedy settlement engine."""

import pytest
from decimal import Decimal

from chipsettle.models.roster import NetBalance, Transfer
from chipsettle.settlement import SettlementEngine


TOL = Decimal("0.01")


def balances(*pairs):
    return [NetBalance(name=name, balance=Decimal(str(amount))) for name, amount in pairs]


def as_tuples(transfers):
    return [(t.payer, t.payee, t.amount) for t in transfers]


def apply_transfers(nets, transfers):
    """Balances after every transfer has been paid."""
    after = {b.name: b.balance for b in nets}
    for t in transfers:
        after[t.payer] += t.amount
        after[t.payee] -= t.amount
    return after


@pytest.fixture
def engine():
    return SettlementEngine(tolerance=TOL)


class TestScenarios:
    """Worked examples."""

    def test_single_creditor_two_debtors(self, engine):
        """Test {A:+100, B:-60, C:-40}."""
        transfers = engine.settle(balances(("A", 100), ("B", -60), ("C", -40)))
        assert as_tuples(transfers) == [
            ("B", "A", Decimal("60")),
            ("C", "A", Decimal("40")),
        ]

    def test_largest_matched_with_largest(self, engine):
        """Test {A:+50, B:+30, C:-50, D:-30}."""
        transfers = engine.settle(balances(("A", 50), ("B", 30), ("C", -50), ("D", -30)))
        assert as_tuples(transfers) == [
            ("C", "A", Decimal("50")),
            ("D", "B", Decimal("30")),
        ]

    def test_already_settled(self, engine):
        """Test {A:0, B:0} needs no transfers."""
        assert engine.settle(balances(("A", 0), ("B", 0))) == []

    def test_unbalanced_input_still_settles(self, engine):
        """Test the engine works on the data as given when the sum is +5."""
        transfers = engine.settle(balances(("A", 50), ("B", -45)))
        assert as_tuples(transfers) == [("B", "A", Decimal("45"))]

    def test_equal_debtors_keep_roster_order(self, engine):
        """Test three equal debtors pay in roster order."""
        transfers = engine.settle(balances(("A", -10), ("B", -10), ("C", -10), ("D", 30)))
        assert as_tuples(transfers) == [
            ("A", "D", Decimal("10")),
            ("B", "D", Decimal("10")),
            ("C", "D", Decimal("10")),
        ]

    def test_equal_creditors_keep_roster_order(self, engine):
        transfers = engine.settle(balances(("X", 10), ("Y", 10), ("Z", -20)))
        assert as_tuples(transfers) == [
            ("Z", "X", Decimal("10")),
            ("Z", "Y", Decimal("10")),
        ]

    def test_debtor_split_across_creditors(self, engine):
        transfers = engine.settle(balances(("A", 70), ("B", 30), ("C", -100)))
        assert as_tuples(transfers) == [
            ("C", "A", Decimal("70")),
            ("C", "B", Decimal("30")),
        ]

    def test_greedy_order_is_largest_first(self, engine):
        """Test the biggest debtor pays the biggest creditor first."""
        transfers = engine.settle(balances(
            ("A", -5), ("B", 20), ("C", -25), ("D", 10),
        ))
        assert as_tuples(transfers) == [
            ("C", "B", Decimal("20")),
            ("C", "D", Decimal("5")),
            ("A", "D", Decimal("5")),
        ]


class TestEdgeCases:

    def test_no_creditors(self, engine):
        assert engine.settle(balances(("A", -10), ("B", -5))) == []

    def test_no_debtors(self, engine):
        assert engine.settle(balances(("A", 10))) == []

    def test_empty_input(self, engine):
        assert engine.settle([]) == []

    def test_negligible_balances_ignored(self, engine):
        """Test balances within the tolerance are left out."""
        assert engine.settle(balances(("A", "0.005"), ("B", "-0.005"))) == []
        assert engine.settle(balances(("A", "0.01"), ("B", "-0.01"))) == []

    def test_remainder_at_tolerance_not_emitted(self, engine):
        """Test a leftover cent is never turned into a transfer."""
        transfers = engine.settle(balances(("A", "-10.01"), ("B", 10)))
        assert as_tuples(transfers) == [("A", "B", Decimal("10"))]

    def test_full_precision_amounts(self, engine):
        """Test amounts are not rounded by the engine."""
        transfers = engine.settle(balances(("A", "10.005"), ("B", "-10.005")))
        assert transfers == [Transfer(payer="B", payee="A", amount=Decimal("10.005"))]

    def test_input_not_mutated(self, engine):
        nets = balances(("A", 100), ("B", -60), ("C", -40))
        snapshot = [b.model_dump() for b in nets]
        engine.settle(nets)
        assert [b.model_dump() for b in nets] == snapshot

    def test_partition(self, engine):
        debtors, creditors = engine.partition(balances(
            ("A", -5), ("B", 20), ("C", -25), ("D", "0.004"),
        ))
        assert debtors == [["C", Decimal("25")], ["A", Decimal("5")]]
        assert creditors == [["B", Decimal("20")]]

    def test_default_tolerance_from_settings(self):
        assert SettlementEngine().tolerance == Decimal("0.01")


# A zero-sum roster with uneven, fractional balances
MIXED = (
    ("Alice", "37.5"),
    ("Bob", "-12.25"),
    ("Carol", "8.75"),
    ("Dan", "-20"),
    ("Erin", "-14"),
    ("Frank", "0"),
)


class TestProperties:
    """Invariants that hold for any roster."""

    def test_conservation(self, engine):
        """Test each participant sends or receives exactly their balance."""
        nets = balances(*MIXED)
        transfers = engine.settle(nets)
        for b in nets:
            sent = sum((t.amount for t in transfers if t.payer == b.name), Decimal("0"))
            received = sum((t.amount for t in transfers if t.payee == b.name), Decimal("0"))
            if b.balance < 0:
                assert abs(sent - (-b.balance)) <= TOL
                assert received == 0
            else:
                assert abs(received - b.balance) <= TOL
                assert sent == 0

    def test_zero_sum_closure(self, engine):
        """Test everyone ends within the tolerance of zero."""
        nets = balances(*MIXED)
        after = apply_transfers(nets, engine.settle(nets))
        assert all(abs(v) <= TOL for v in after.values())

    def test_idempotent(self, engine):
        nets = balances(*MIXED)
        assert engine.settle(nets) == engine.settle(nets)

    def test_transfer_count_bound(self, engine):
        nets = balances(*MIXED)
        debtors, creditors = engine.partition(nets)
        transfers = engine.settle(nets)
        assert len(transfers) <= len(debtors) + len(creditors) - 1

    def test_all_amounts_above_tolerance(self, engine):
        transfers = engine.settle(balances(*MIXED))
        assert all(t.amount > TOL for t in transfers)

    def test_nobody_pays_themselves(self, engine):
        transfers = engine.settle(balances(*MIXED))
        assert all(t.payer != t.payee for t in transfers)
