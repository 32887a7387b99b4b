"""
Exact conversion between display amounts and integer base units.

All arithmetic is done on integers and digit strings so that financial
amounts never pass through a binary float.
"""
import re
from decimal import Decimal
from enum import Enum
from typing import Union

from .exceptions import InvalidAmount

Amount = Union[str, int, Decimal, float]

# "1", "1.5", ".5" and "5." are accepted; a lone "." is not
_DECIMAL_PATTERN = re.compile(r"(?=\.?[0-9])([0-9]*)(?:\.([0-9]*))?")
_INTEGER_PATTERN = re.compile(r"[0-9]+")


class Unit(str, Enum):
    """Denominations understood by the converter, keyed to their base-unit exponent."""
    WEI = "wei"
    GWEI = "gwei"
    ETHER = "ether"
    # 1 spark = 0.000001 ether
    SPARK = "spark"

    @property
    def decimals(self) -> int:
        return _UNIT_DECIMALS[self]


_UNIT_DECIMALS = {
    Unit.WEI: 0,
    Unit.GWEI: 9,
    Unit.ETHER: 18,
    Unit.SPARK: 12,
}


def _resolve_unit(unit: Union[Unit, str]) -> Unit:
    try:
        return Unit(unit)
    except ValueError as e:
        raise InvalidAmount(f"Unknown unit: {unit!r}") from e


def _amount_text(amount: Amount) -> str:
    if isinstance(amount, bool):
        raise InvalidAmount(f"Amount must be numeric, got {amount!r}")
    if isinstance(amount, int):
        if amount < 0:
            raise InvalidAmount(f"Amount must be non-negative, got {amount}")
        return str(amount)
    if isinstance(amount, Decimal):
        if not amount.is_finite() or amount < 0:
            raise InvalidAmount(f"Amount must be a non-negative finite decimal, got {amount}")
        return format(amount, "f")
    if isinstance(amount, float):
        # repr() of a float is its shortest round-tripping decimal form
        return _amount_text(Decimal(repr(amount)))
    if isinstance(amount, str):
        return amount.strip()
    raise InvalidAmount(f"Unsupported amount type: {type(amount).__name__}")


def to_base_units(amount: Amount, unit: Unit = Unit.ETHER) -> str:
    """
    Convert a display amount into an integer string of base units.

    Args:
        amount: Non-negative decimal amount (e.g. "1.5")
        unit: Denomination the amount is expressed in

    Returns:
        Integer string of base units (e.g. "1500000000000000000" for 1.5 ether)

    Raises:
        InvalidAmount: If the amount is not a non-negative decimal, or has
            more fractional digits than the unit can represent exactly, or if
            the unit is unknown
    """
    text = _amount_text(amount)
    match = _DECIMAL_PATTERN.fullmatch(text)
    if not match:
        raise InvalidAmount(f"Invalid decimal amount: {amount!r}")

    unit = _resolve_unit(unit)
    whole, fraction = match.group(1) or "0", (match.group(2) or "").rstrip("0")
    decimals = unit.decimals
    if len(fraction) > decimals:
        raise InvalidAmount(
            f"Amount {amount!r} has more than {decimals} decimal places for unit '{unit.value}'"
        )
    return str(int(whole + fraction.ljust(decimals, "0")))


def to_display_units(base_amount: Union[str, int], unit: Unit = Unit.ETHER) -> str:
    """
    Convert integer base units into a canonical decimal string.

    Trailing fractional zeros are dropped and no exponent notation is used,
    so ``to_display_units(to_base_units("1.50"))`` returns ``"1.5"``.

    Raises:
        InvalidAmount: If base_amount is not a non-negative integer, or the
            unit is unknown
    """
    if isinstance(base_amount, bool):
        raise InvalidAmount(f"Base amount must be an integer, got {base_amount!r}")
    if isinstance(base_amount, int):
        value = base_amount
    elif isinstance(base_amount, str) and _INTEGER_PATTERN.fullmatch(base_amount.strip()):
        value = int(base_amount.strip())
    else:
        raise InvalidAmount(f"Base amount must be a non-negative integer, got {base_amount!r}")
    if value < 0:
        raise InvalidAmount(f"Base amount must be non-negative, got {value}")

    decimals = _resolve_unit(unit).decimals
    if decimals == 0:
        return str(value)
    whole, fraction = divmod(value, 10 ** decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{fraction_text}" if fraction_text else str(whole)


def convert_sparks_to_eth(sparks: Amount) -> str:
    """Convert a spark amount (as entered for auction bids) to ether."""
    return to_display_units(to_base_units(sparks, Unit.SPARK), Unit.ETHER)
