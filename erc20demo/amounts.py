"""Conversion between a token's smallest integer unit and its decimal value.

ERC-20 balances are plain integers scaled by ``10 ** decimals``. Amounts
routinely exceed the exact-integer range of an IEEE-754 double, so every
conversion here goes through ``decimal.Decimal`` and never through ``float``.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Union

from .exceptions import InvalidNumberFormat

MAX_DECIMALS = 255
MAX_UINT256 = 2**256 - 1
_MAX_UINT256_DIGITS = len(str(MAX_UINT256))

_BASE10_INT = re.compile(r"[0-9]+")

RawAmount = Union[int, str]
HumanAmount = Union[str, float, int, Decimal]


def _check_decimals(decimals: int) -> None:
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"decimals must be in 0..{MAX_DECIMALS}, got {decimals}")


def _parse_raw(raw: RawAmount) -> int:
    if isinstance(raw, bool):
        raise TypeError("raw amount must be int or str, got bool")
    if isinstance(raw, int):
        if raw < 0:
            raise InvalidNumberFormat(f"token amounts are non-negative, got {raw}")
        return raw
    if isinstance(raw, str):
        if not _BASE10_INT.fullmatch(raw):
            raise InvalidNumberFormat(f"not a base-10 integer: {raw!r}")
        return int(raw, 10)
    raise TypeError(f"raw amount must be int or str, got {type(raw).__name__}")


def _parse_human(amount: HumanAmount) -> Decimal:
    if isinstance(amount, bool):
        raise TypeError("amount must be str, float, int or Decimal, got bool")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, float):
        # repr() is the shortest string that round-trips, so 0.1 stays 0.1
        value = Decimal(repr(amount))
    elif isinstance(amount, str):
        try:
            value = Decimal(amount.strip())
        except InvalidOperation:
            raise InvalidNumberFormat(f"not a decimal number: {amount!r}") from None
    else:
        raise TypeError(
            f"amount must be str, float, int or Decimal, got {type(amount).__name__}"
        )
    if not value.is_finite():
        raise InvalidNumberFormat(f"amount must be finite, got {amount!r}")
    return value


def to_decimal(raw: RawAmount, decimals: int) -> Decimal:
    """Interpret ``raw`` smallest units as a fixed-point number.

    Args:
        raw: Amount in the token's smallest unit, as ``int`` or base-10 string
        decimals: The token's ``decimals()`` value (0..255)

    Returns:
        Exact ``Decimal`` with ``decimals`` fractional digits

    Raises:
        InvalidNumberFormat: If ``raw`` is negative or a string that is not a
            base-10 integer
    """
    _check_decimals(decimals)
    value = _parse_raw(raw)
    # Building from the (sign, digits, exponent) tuple never rounds.
    digits = tuple(int(d) for d in str(value))
    return Decimal((0, digits, -decimals))


def to_wei(amount: HumanAmount, decimals: int) -> int:
    """Scale a human-readable amount to the token's smallest unit.

    The result is truncated toward zero: ``to_wei("1.239", 2) == 123``.

    Raises:
        InvalidNumberFormat: If ``amount`` is unparseable, non-finite, negative
            or larger than uint256 once scaled
    """
    _check_decimals(decimals)
    value = _parse_human(amount)
    sign, digits, exponent = value.as_tuple()
    if not any(digits):
        return 0
    if sign:
        raise InvalidNumberFormat(f"token amounts are non-negative, got {amount!r}")
    shift = exponent + decimals
    # every digit lands right of the decimal point
    if shift < -len(digits):
        return 0
    if len(digits) + shift > _MAX_UINT256_DIGITS:
        raise InvalidNumberFormat(f"amount does not fit in uint256: {amount!r}")
    wei = int(Decimal((sign, digits, shift)))
    if wei > MAX_UINT256:
        raise InvalidNumberFormat(f"amount does not fit in uint256: {amount!r}")
    return wei


def format_amount(raw: RawAmount, decimals: int) -> str:
    """Render a raw amount for display, e.g. ``74605500.647409``."""
    value = to_decimal(raw, decimals)
    sign, digits, exponent = value.as_tuple()
    # strip trailing zeros without going through a rounding context
    digits = list(digits)
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    if digits == [0]:
        exponent = 0
    return format(Decimal((sign, tuple(digits), exponent)), "f")
