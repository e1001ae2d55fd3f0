"""Split a shared expense into per-participant amounts.

Amounts are divided in integer minor units and the leftover cents go to the
largest remainders, so the parts of a split always add back up to the
original amount.
"""

from collections.abc import Sequence
from decimal import Decimal

from . import money
from .exceptions import InvalidSplitError, MismatchedLengthError
from .models import ParticipantShare

_HUNDRED = Decimal("100")


def _validate_weights(weights: Sequence[money.MoneyLike], name: str) -> None:
    for weight in weights:
        if money.to_decimal(weight) < 0:
            raise InvalidSplitError(f"{name} cannot be negative, got {weight}")


def _allocate(
    amount: money.MoneyLike, weights: Sequence[money.MoneyLike], places: int
) -> list[Decimal]:
    units = money.to_minor_units(amount, places)
    return [
        money.from_minor_units(part, places)
        for part in money.allocate_minor_units(units, weights)
    ]


def equal_split(
    amount: money.MoneyLike,
    people_count: int,
    places: int = money.DEFAULT_PLACES,
) -> list[Decimal]:
    """
    Split an amount evenly between people_count people.

    100.00 between three people is [33.34, 33.33, 33.33].

    Returns:
        One amount per person; [] when there is nobody to split with

    Raises:
        InvalidSplitError: If people_count is negative or not an integer
    """
    if isinstance(people_count, bool) or not isinstance(people_count, int):
        raise InvalidSplitError(
            f"People count must be an integer, got {people_count!r}"
        )
    if people_count < 0:
        raise InvalidSplitError(f"People count cannot be negative, got {people_count}")

    return _allocate(amount, [1] * people_count, places)


def percentage_split(
    amount: money.MoneyLike,
    percentages: Sequence[money.MoneyLike],
    places: int = money.DEFAULT_PLACES,
) -> list[Decimal]:
    """
    Split an amount by percentages that must total exactly 100.

    Raises:
        InvalidSplitError: If the percentages do not sum to 100 or any is
            negative
    """
    _validate_weights(percentages, "Percentage")

    total = sum((money.to_decimal(p) for p in percentages), Decimal("0"))
    if total != _HUNDRED:
        raise InvalidSplitError(f"Percentages must sum to 100, got {total}")

    return _allocate(amount, percentages, places)


def custom_split(
    amount: money.MoneyLike,
    shares: Sequence[money.MoneyLike],
    places: int = money.DEFAULT_PLACES,
) -> list[Decimal]:
    """
    Split an amount in proportion to arbitrary shares, e.g. [1, 2] for 1/3 and 2/3.

    Every part is 0 when the shares sum to zero.

    Raises:
        InvalidSplitError: If any share is negative
    """
    _validate_weights(shares, "Share")
    return _allocate(amount, shares, places)


def expense_shares(
    paid_by: str,
    amount: money.MoneyLike,
    participant_ids: Sequence[str],
    weights: Sequence[money.MoneyLike] | None = None,
    places: int = money.DEFAULT_PLACES,
) -> list[ParticipantShare]:
    """
    Who paid and who owes what for one shared expense.

    The result feeds settlement.net_balances.

    Args:
        paid_by: Participant who paid the full amount
        amount: Expense amount
        participant_ids: Participants sharing the expense, in order
        weights: Optional shares per participant; equal split when omitted
        places: Money precision

    Returns:
        One ParticipantShare per participant. The payer is appended with
        nothing owed when they are not among the participants.

    Raises:
        MismatchedLengthError: If weights and participant_ids differ in length
        InvalidSplitError: If a weight is negative
    """
    if weights is None:
        owed = equal_split(amount, len(participant_ids), places)
    else:
        if len(weights) != len(participant_ids):
            raise MismatchedLengthError(
                f"Expected {len(participant_ids)} weights, got {len(weights)}"
            )
        owed = custom_split(amount, weights, places)

    paid = money.round_money(amount, places)
    shares = [
        ParticipantShare(
            participant_id=pid,
            paid=paid if pid == paid_by else Decimal("0"),
            owed=part,
        )
        for pid, part in zip(participant_ids, owed)
    ]

    if paid_by not in participant_ids:
        shares.append(ParticipantShare(participant_id=paid_by, paid=paid))
    return shares
