"""Budget utilization, remaining balance and category distribution.

A zero budget means "no limit set". It is a valid state, so every ratio over
a zero budget is 0 instead of a division error.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from . import money
from .models import BudgetStatus, BudgetSummary, CategoryBudget, CategoryShare


def utilization(
    spent: money.MoneyLike,
    budget: money.MoneyLike,
    places: int = money.DEFAULT_PLACES,
) -> Decimal:
    """Spent as a percentage of budget; 0 when the budget is 0."""
    return money.percentage(spent, budget, places=places)


def remaining(
    spent: money.MoneyLike,
    budget: money.MoneyLike,
    places: int = money.DEFAULT_PLACES,
) -> Decimal:
    """Budget minus spent. Negative when overspent."""
    return money.subtract(budget, spent, places=places)


def status(
    spent: money.MoneyLike,
    budget: money.MoneyLike,
    places: int = money.DEFAULT_PLACES,
) -> BudgetStatus:
    """
    Classify spending against a budget.

    Both sides are rounded to money precision before comparing so that
    floating noise such as 100.000000001 vs 100 reads as EXACT.
    """
    spent_rounded = money.round_money(spent, places)
    budget_rounded = money.round_money(budget, places)

    if spent_rounded < budget_rounded:
        return BudgetStatus.UNDER
    if spent_rounded > budget_rounded:
        return BudgetStatus.OVER
    return BudgetStatus.EXACT


def is_within_budget(
    spent: money.MoneyLike,
    budget: money.MoneyLike,
    tolerance: money.MoneyLike = 0,
    places: int = money.DEFAULT_PLACES,
) -> bool:
    """True if spent does not exceed budget plus tolerance."""
    limit = money.add(budget, tolerance, places=places)
    return money.round_money(spent, places) <= limit


def daily_budget(
    budget: money.MoneyLike,
    days: int = 30,
    places: int = money.DEFAULT_PLACES,
) -> Decimal:
    """
    Spread a monthly budget evenly across its days.

    Raises:
        DivisionByZeroError: If days is zero
    """
    return money.divide(budget, days, places=places)


def summarize(
    spent: money.MoneyLike,
    budget: money.MoneyLike,
    places: int = money.DEFAULT_PLACES,
) -> BudgetSummary:
    """Collect utilization, remaining and status for one spent/limit pair."""
    return BudgetSummary(
        spent=money.round_money(spent, places),
        budget=money.round_money(budget, places),
        remaining=remaining(spent, budget, places),
        utilization=utilization(spent, budget, places),
        status=status(spent, budget, places),
    )


def _as_category_budgets(
    categories: Iterable[CategoryBudget | Sequence[money.MoneyLike]],
) -> list[CategoryBudget]:
    result = []
    for index, entry in enumerate(categories):
        if isinstance(entry, CategoryBudget):
            result.append(entry)
        else:
            spent, limit = entry
            result.append(
                CategoryBudget(
                    category=str(index),
                    spent=money.to_decimal(spent),
                    budget=money.to_decimal(limit),
                )
            )
    return result


def category_distribution(
    categories: Iterable[CategoryBudget | Sequence[money.MoneyLike]],
    places: int = money.DEFAULT_PLACES,
) -> list[CategoryShare]:
    """
    Each category's budget as a share of the total budget.

    Args:
        categories: CategoryBudget models, or (spent, budget) pairs which are
            labelled by their position ("0", "1", ...)

    Returns:
        One CategoryShare per input, in input order. Every share is 0 when the
        total budget is 0.
    """
    entries = _as_category_budgets(categories)
    total_budget = money.add(*(entry.budget for entry in entries), places=places)

    return [
        CategoryShare(
            category=entry.category,
            spent=money.round_money(entry.spent, places),
            budget=money.round_money(entry.budget, places),
            share=money.percentage(entry.budget, total_budget, places=places),
        )
        for entry in entries
    ]
