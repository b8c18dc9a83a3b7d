"""
Amount parsing.

Raw amounts arrive as form text. They are parsed here, once, into the
numeric domain type before anything else sees them: the engine never
accepts un-parsed text.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from chipsettle.validation.errors import InvalidAmountError


RawAmount = Union[str, int, float, Decimal, None]


def parse_amount(raw: RawAmount) -> Optional[Decimal]:
    """
    Parse a raw amount into a Decimal.

    Blank input means the amount is not set yet and returns None.
    Anything else must be a finite, non-negative number.

    Examples:
        >>> parse_amount(" 100 ")
        Decimal('100')
        >>> parse_amount("1,250.50")
        Decimal('1250.50')
        >>> parse_amount("") is None
        True
    """
    if raw is None:
        return None

    # bool is an int subclass; "True" is not an amount
    if isinstance(raw, bool):
        raise InvalidAmountError(raw, "not a number")

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        # str() keeps 0.1 as Decimal('0.1') instead of its binary expansion
        value = _to_decimal(str(raw), raw)
    elif isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            return None
        value = _to_decimal(text, raw)
    else:
        raise InvalidAmountError(raw, f"unsupported type {type(raw).__name__}")

    if not value.is_finite():
        raise InvalidAmountError(raw, "must be a finite number")
    if value < 0:
        raise InvalidAmountError(raw, "must not be negative")

    # Drop the sign of negative zero
    if value == 0:
        return abs(value)
    return value


def _to_decimal(text: str, raw: RawAmount) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise InvalidAmountError(raw, "not a number") from None
