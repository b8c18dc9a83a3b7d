"""Tests for raw amount parsing."""

import pytest
from decimal import Decimal

from chipsettle.models.roster import Participant
from chipsettle.validation import InvalidAmountError, SettlementValidationError, parse_amount


class TestParseAmount:
    """Tests for parse_amount."""

    def test_plain_number(self):
        assert parse_amount("100") == Decimal("100")

    def test_strips_whitespace(self):
        assert parse_amount("  42.5 ") == Decimal("42.5")

    def test_thousands_separator(self):
        assert parse_amount("1,250.50") == Decimal("1250.50")

    def test_blank_is_unset(self):
        """Test that blank input means 'not filled in yet'."""
        assert parse_amount("") is None
        assert parse_amount("   ") is None
        assert parse_amount(None) is None

    def test_zero_is_a_value(self):
        """Test that zero is a real amount, not unset."""
        assert parse_amount("0") == Decimal("0")

    def test_negative_zero_loses_sign(self):
        value = parse_amount("-0")
        assert value == Decimal("0")
        assert not value.is_signed()

    def test_int_and_decimal_inputs(self):
        assert parse_amount(7) == Decimal("7")
        assert parse_amount(Decimal("3.25")) == Decimal("3.25")

    def test_float_keeps_short_representation(self):
        """Test that 0.1 does not turn into its binary expansion."""
        assert parse_amount(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("raw", ["abc", "12abc", "1.2.3"])
    def test_rejects_text(self, raw):
        with pytest.raises(InvalidAmountError, match="not a number"):
            parse_amount(raw)

    def test_rejects_negative(self):
        with pytest.raises(InvalidAmountError, match="must not be negative"):
            parse_amount("-5")

    @pytest.mark.parametrize("raw", ["NaN", "Infinity", "-inf", float("inf")])
    def test_rejects_non_finite(self, raw):
        with pytest.raises(InvalidAmountError, match="finite"):
            parse_amount(raw)

    def test_rejects_bool(self):
        with pytest.raises(InvalidAmountError):
            parse_amount(True)

    def test_error_is_a_validation_error(self):
        """Test that parse errors share the validation error base."""
        with pytest.raises(SettlementValidationError) as exc_info:
            parse_amount("ten")
        assert exc_info.value.raw == "ten"
        assert "'ten' is not a valid amount" in str(exc_info.value)


class TestParticipantFromRaw:
    """Tests for Participant.from_raw."""

    def test_from_raw(self):
        p = Participant.from_raw(" Alice ", "100", "", id=3)
        assert p.id == 3
        assert p.name == "Alice"
        assert p.entry_amount == Decimal("100")
        assert p.exit_amount is None

    def test_from_raw_none_name(self):
        p = Participant.from_raw(None, "", "")
        assert p.name == ""
        assert p.is_named is False

    def test_from_raw_invalid_amount(self):
        with pytest.raises(InvalidAmountError):
            Participant.from_raw("Bob", "lots", "0")
