"""Resolve shared-cost balances into a settlement plan.

The solver pairs the largest creditor with the largest debtor until one side
runs out. It is greedy, so it does not always find the fewest possible
transactions, but it always conserves money and stops after at most
len(owed) + len(owing) - 1 transfers because every step zeroes at least one
participant.

All arithmetic happens in integer minor units; amounts only become Decimal
again on the returned transactions.
"""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Literal

from . import money
from .exceptions import UnbalancedLedgerError
from .models import ParticipantBalance, ParticipantShare, SettlementTransaction

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = Decimal("0.01")

UnbalancedPolicy = Literal["reject", "normalize"]
UNBALANCED_POLICIES = ("reject", "normalize")

BalanceInput = Iterable[ParticipantBalance] | Mapping[str, money.MoneyLike]


def _merge_balances(balances: BalanceInput, places: int) -> list[list]:
    """Collapse input into [participant_id, minor_units] rows in first-seen order."""
    if isinstance(balances, Mapping):
        pairs = [(str(pid), amount) for pid, amount in balances.items()]
    else:
        pairs = [(b.participant_id, b.net_balance) for b in balances]

    merged: dict[str, int] = {}
    for participant_id, amount in pairs:
        units = money.to_minor_units(amount, places)
        merged[participant_id] = merged.get(participant_id, 0) + units

    return [[pid, units] for pid, units in merged.items()]


def _normalize_residual(rows: list[list]) -> None:
    """Shrink the heavier side of the ledger in place to match the lighter side."""
    owed_total = sum(units for _, units in rows if units > 0)
    owing_total = -sum(units for _, units in rows if units < 0)

    if owed_total > owing_total:
        heavy = [row for row in rows if row[1] > 0]
        scaled = money.allocate_minor_units(owing_total, [row[1] for row in heavy])
        for row, units in zip(heavy, scaled):
            row[1] = units
    else:
        heavy = [row for row in rows if row[1] < 0]
        scaled = money.allocate_minor_units(owed_total, [-row[1] for row in heavy])
        for row, units in zip(heavy, scaled):
            row[1] = -units


def _reconcile_residual(
    rows: list[list],
    tolerance_units: int,
    policy: UnbalancedPolicy,
    places: int,
) -> None:
    """
    Make the ledger sum to exactly zero before solving.

    Steps:
    1. Residual within tolerance: the balance with the largest magnitude
       absorbs it (first in input order on ties), unless that would flip
       its sign
    2. Any other residual with policy "reject": raise
    3. Any other residual with policy "normalize": scale the heavier
       side down proportionally

    Raises:
        UnbalancedLedgerError: If the residual cannot be absorbed under "reject"
    """
    residual = sum(units for _, units in rows)
    if residual == 0:
        return

    largest = max(rows, key=lambda row: abs(row[1]))
    adjusted = largest[1] - residual

    # The absorbing balance must not switch between owed and owing
    if abs(residual) <= tolerance_units and adjusted * largest[1] >= 0:
        largest[1] = adjusted

        logger.info(
            f"Applied rounding adjustment: {-residual} minor units "
            f"to participant {largest[0]}"
        )
        return

    residual_amount = money.from_minor_units(residual, places)
    if policy == "reject":
        raise UnbalancedLedgerError(
            residual_amount,
            f"Balances do not net to zero:\n"
            f"  Residual:  {residual_amount}\n"
            f"  Tolerance: {money.from_minor_units(tolerance_units, places)}\n"
            f"This likely indicates a data integrity issue.",
        )

    logger.warning(
        f"Normalizing unbalanced ledger (residual {residual_amount}) "
        f"across {len(rows)} participants"
    )
    _normalize_residual(rows)


def settle(
    balances: BalanceInput,
    tolerance: money.MoneyLike = DEFAULT_TOLERANCE,
    policy: UnbalancedPolicy = "reject",
    places: int = money.DEFAULT_PLACES,
) -> list[SettlementTransaction]:
    """
    Compute transfers that bring every participant's balance to zero.

    Creditors (positive balance) and debtors (negative balance) are each
    sorted by magnitude, largest first, keeping input order for ties. The
    first debtor pays the first creditor min(owed, owing); whoever reaches
    zero leaves the queue. Repeats until a queue is empty.

    Args:
        balances: ParticipantBalance models or a {participant_id: balance}
            mapping. Repeated participant ids are summed.
        tolerance: Largest residual absorbed as rounding noise
        policy: "reject" raises on a larger residual, "normalize" scales the
            heavier side to match
        places: Money precision

    Returns:
        Transactions in the order they were produced

    Raises:
        UnbalancedLedgerError: If balances do not net to zero and policy is
            "reject"
        ValueError: If policy is not "reject" or "normalize"
    """
    if policy not in UNBALANCED_POLICIES:
        raise ValueError(f"Unknown unbalanced ledger policy: {policy!r}")

    rows = _merge_balances(balances, places)
    if not rows:
        return []

    tolerance_units = money.to_minor_units(tolerance, places)
    _reconcile_residual(rows, tolerance_units, policy, places)

    # sorted() is stable, so ties keep input order
    owed = sorted(
        ([pid, units] for pid, units in rows if units > 0), key=lambda row: -row[1]
    )
    owing = sorted(
        ([pid, -units] for pid, units in rows if units < 0), key=lambda row: -row[1]
    )
    expected_total = sum(units for _, units in owed)

    transactions = []
    while owed and owing:
        creditor, debtor = owed[0], owing[0]
        amount = min(creditor[1], debtor[1])

        transactions.append(
            SettlementTransaction(
                from_participant=debtor[0],
                to_participant=creditor[0],
                amount=money.from_minor_units(amount, places),
            )
        )

        creditor[1] -= amount
        debtor[1] -= amount

        if creditor[1] == 0:
            owed.pop(0)
        if debtor[1] == 0:
            owing.pop(0)

    transferred = sum(money.to_minor_units(t.amount, places) for t in transactions)
    assert transferred == expected_total, "Settlement did not conserve balances"

    logger.debug(
        f"Settled {len(rows)} participants with {len(transactions)} transactions "
        f"totalling {money.from_minor_units(transferred, places)}"
    )

    return transactions


def net_balances(
    shares: Iterable[ParticipantShare], places: int = money.DEFAULT_PLACES
) -> list[ParticipantBalance]:
    """
    Net position of each participant across shared expenses (paid - owed).

    Participants appear once, in the order they were first seen.
    """
    totals: dict[str, Decimal] = {}
    for share in shares:
        pid = share.participant_id
        totals[pid] = totals.get(pid, Decimal("0")) + share.paid - share.owed

    return [
        ParticipantBalance(
            participant_id=pid, net_balance=money.round_money(total, places)
        )
        for pid, total in totals.items()
    ]


def apply_settlement(
    balances: Iterable[ParticipantBalance],
    transactions: Iterable[SettlementTransaction],
    places: int = money.DEFAULT_PLACES,
) -> list[ParticipantBalance]:
    """
    Balances after carrying out the given transfers.

    A payer's balance rises by the amount paid and the payee's falls by the
    same amount. Participants only mentioned in transactions are appended.
    """
    totals: dict[str, Decimal] = {}
    for balance in balances:
        totals[balance.participant_id] = (
            totals.get(balance.participant_id, Decimal("0")) + balance.net_balance
        )

    for t in transactions:
        payer, payee = t.from_participant, t.to_participant
        totals[payer] = totals.get(payer, Decimal("0")) + t.amount
        totals[payee] = totals.get(payee, Decimal("0")) - t.amount

    return [
        ParticipantBalance(
            participant_id=pid, net_balance=money.round_money(total, places)
        )
        for pid, total in totals.items()
    ]


def settlement_total(
    transactions: Iterable[SettlementTransaction],
    places: int = money.DEFAULT_PLACES,
) -> Decimal:
    """Total amount moved by a settlement plan."""
    return money.add(*(t.amount for t in transactions), places=places)
