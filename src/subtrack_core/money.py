"""Rounding-safe money arithmetic.

Each operation works on exact Decimal operands and rounds its own result once
with ROUND_HALF_UP, so regrouping the operands of a single call never changes
the rounded value.
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

from .exceptions import DivisionByZeroError

DEFAULT_PLACES = 2

MoneyLike = Decimal | int | float | str

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def to_decimal(value: MoneyLike) -> Decimal:
    """
    Convert a number to Decimal without picking up binary float noise.

    Floats go through str() so that 9.99 becomes Decimal("9.99") rather than
    Decimal("9.9900000000000002131628...").
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def round_money(value: MoneyLike, places: int = DEFAULT_PLACES) -> Decimal:
    """
    Round to a fixed number of decimal places using ROUND_HALF_UP.

    Rounding an already rounded value returns it unchanged.

    Args:
        value: Amount to round
        places: Number of decimal places (default 2)

    Returns:
        Rounded Decimal
    """
    return to_decimal(value).quantize(_quantum(places), rounding=ROUND_HALF_UP)


def add(*values: MoneyLike, places: int = DEFAULT_PLACES) -> Decimal:
    """Sum any number of amounts, rounding the total once."""
    total = sum((to_decimal(v) for v in values), _ZERO)
    return round_money(total, places)


def subtract(a: MoneyLike, b: MoneyLike, places: int = DEFAULT_PLACES) -> Decimal:
    """Return a - b rounded once."""
    return round_money(to_decimal(a) - to_decimal(b), places)


def multiply(*values: MoneyLike, places: int = DEFAULT_PLACES) -> Decimal:
    """Multiply any number of factors, rounding the product once."""
    product = Decimal(1)
    for v in values:
        product *= to_decimal(v)
    return round_money(product, places)


def divide(a: MoneyLike, b: MoneyLike, places: int = DEFAULT_PLACES) -> Decimal:
    """
    Return a / b rounded once.

    Raises:
        DivisionByZeroError: If b is zero
    """
    divisor = to_decimal(b)
    if divisor == 0:
        raise DivisionByZeroError(f"Cannot divide {a} by zero")
    return round_money(to_decimal(a) / divisor, places)


def percentage(
    value: MoneyLike, total: MoneyLike, places: int = DEFAULT_PLACES
) -> Decimal:
    """
    Express value as a percentage of total.

    A zero total yields 0 rather than an error.
    """
    denominator = to_decimal(total)
    if denominator == 0:
        return round_money(_ZERO, places)
    return round_money(to_decimal(value) / denominator * _HUNDRED, places)


def to_minor_units(amount: MoneyLike, places: int = DEFAULT_PLACES) -> int:
    """
    Convert an amount to integer minor units (cents for places=2).
    Uses ROUND_HALF_UP for consistency.

    Args:
        amount: Amount in major units

    Returns:
        Amount in minor units (integer)
    """
    scaled = to_decimal(amount).scaleb(places)
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(units: int, places: int = DEFAULT_PLACES) -> Decimal:
    """Convert integer minor units back to a rounded Decimal amount."""
    return round_money(Decimal(units).scaleb(-places), places)


def allocate_minor_units(units: int, weights: Sequence[MoneyLike]) -> list[int]:
    """
    Split integer minor units in proportion to weights.

    Each part gets the floor of its exact share; the units left over go one
    at a time to the largest remainders, earlier entries first on ties. The
    parts always sum to units.

    Args:
        units: Amount to split, in minor units
        weights: Non-negative weights, one per part

    Returns:
        One integer per weight. All zeros when the weights sum to zero.
    """
    exact = [Fraction(to_decimal(w)) for w in weights]
    total = sum(exact, Fraction(0))
    if total == 0:
        return [0 for _ in exact]

    shares = [units * w / total for w in exact]
    parts = [share.numerator // share.denominator for share in shares]
    remainders = [share - part for share, part in zip(shares, parts)]
    leftover = units - sum(parts)

    by_remainder = sorted(range(len(parts)), key=lambda i: -remainders[i])
    for i in by_remainder[:leftover]:
        parts[i] += 1
    return parts
