"""Normalize recurring subscription costs to monthly and yearly equivalents."""

from collections.abc import Iterable
from decimal import Decimal

from . import money
from .exceptions import InvalidIntervalError, UnsupportedUnitError
from .models import BillingUnit, NormalizedCost, Subscription

# Month factor per unit as (numerator, denominator) so weekly stays exactly 30/7
UNIT_TO_MONTH_FACTOR: dict[BillingUnit, tuple[int, int]] = {
    BillingUnit.DAILY: (30, 1),
    BillingUnit.WEEKLY: (30, 7),
    BillingUnit.MONTHLY: (1, 1),
    BillingUnit.YEARLY: (1, 12),
}

MONTHS_PER_YEAR = 12

UNCATEGORIZED = "uncategorized"


def parse_unit(unit: BillingUnit | str) -> BillingUnit:
    """
    Resolve a billing unit name.

    Raises:
        UnsupportedUnitError: For anything other than daily/weekly/monthly/yearly
    """
    try:
        return BillingUnit(unit)
    except ValueError as e:
        raise UnsupportedUnitError(unit) from e


def _validate_quantity(quantity: int) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidIntervalError(
            f"Interval quantity must be an integer, got {quantity!r}"
        )
    if quantity <= 0:
        raise InvalidIntervalError(
            f"Interval quantity must be positive, got {quantity}"
        )
    return quantity


def monthly_cost(
    price: money.MoneyLike,
    quantity: int = 1,
    unit: BillingUnit | str = BillingUnit.MONTHLY,
    places: int = money.DEFAULT_PLACES,
) -> Decimal:
    """
    Monthly equivalent of a price charged every `quantity` `unit`s.

    monthly = price x quantity x factor[unit], rounded once.

    Args:
        price: Price per billing period
        quantity: Number of units per billing period
        unit: Billing unit

    Returns:
        Monthly cost

    Raises:
        InvalidIntervalError: If quantity <= 0
        UnsupportedUnitError: If unit is unknown
    """
    _validate_quantity(quantity)
    numerator, denominator = UNIT_TO_MONTH_FACTOR[parse_unit(unit)]
    scaled = money.to_decimal(price) * quantity * numerator
    return money.divide(scaled, denominator, places=places)


def yearly_cost(
    price: money.MoneyLike,
    quantity: int = 1,
    unit: BillingUnit | str = BillingUnit.MONTHLY,
    places: int = money.DEFAULT_PLACES,
) -> Decimal:
    """Yearly equivalent: the rounded monthly cost times 12."""
    monthly = monthly_cost(price, quantity, unit, places=places)
    return money.multiply(monthly, MONTHS_PER_YEAR, places=places)


def normalize(
    price: money.MoneyLike,
    quantity: int = 1,
    unit: BillingUnit | str = BillingUnit.MONTHLY,
    places: int = money.DEFAULT_PLACES,
) -> NormalizedCost:
    """Monthly and yearly equivalents of one price/interval pair."""
    monthly = monthly_cost(price, quantity, unit, places=places)
    return NormalizedCost(
        monthly=monthly,
        yearly=money.multiply(monthly, MONTHS_PER_YEAR, places=places),
    )


def normalize_subscription(
    subscription: Subscription, places: int = money.DEFAULT_PLACES
) -> NormalizedCost:
    """Normalize a subscription record using its own billing interval."""
    return normalize(
        subscription.price,
        subscription.interval.quantity,
        subscription.interval.unit,
        places=places,
    )


def total_monthly_cost(
    subscriptions: Iterable[Subscription], places: int = money.DEFAULT_PLACES
) -> Decimal:
    """Sum of monthly costs across active subscriptions only."""
    monthly_costs = [
        normalize_subscription(sub, places).monthly
        for sub in subscriptions
        if sub.active
    ]
    return money.add(*monthly_costs, places=places)


def average_monthly_cost(
    subscriptions: Iterable[Subscription], places: int = money.DEFAULT_PLACES
) -> Decimal:
    """Average monthly cost of active subscriptions; 0 when there are none."""
    active = [sub for sub in subscriptions if sub.active]
    if not active:
        return money.round_money(0, places)
    return money.divide(total_monthly_cost(active, places), len(active), places=places)


def prorated_amount(
    monthly_price: money.MoneyLike,
    days_used: int,
    days_in_month: int = 30,
    places: int = money.DEFAULT_PLACES,
) -> Decimal:
    """
    Charge for a partial month.

    Raises:
        DivisionByZeroError: If days_in_month is zero
    """
    scaled = money.to_decimal(monthly_price) * days_used
    return money.divide(scaled, days_in_month, places=places)


def group_by_category(
    subscriptions: Iterable[Subscription],
) -> dict[str, list[Subscription]]:
    """Subscriptions keyed by category, in first-seen order."""
    groups: dict[str, list[Subscription]] = {}
    for sub in subscriptions:
        groups.setdefault(sub.category or UNCATEGORIZED, []).append(sub)
    return groups


def spending_by_category(
    subscriptions: Iterable[Subscription], places: int = money.DEFAULT_PLACES
) -> dict[str, Decimal]:
    """
    Monthly cost of active subscriptions per category.

    A category whose subscriptions are all inactive still appears, with 0.
    The values are ready for charts.pie_segments.
    """
    return {
        category: total_monthly_cost(subs, places)
        for category, subs in group_by_category(subscriptions).items()
    }
