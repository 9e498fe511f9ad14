"""Net balances and settle-up suggestions for shared expenses."""

from collections.abc import Iterable, Sequence
from typing import Any

from tripsync.models.expense import BalanceRecord, SettlementRecord
from tripsync.utils.money import CENT_TOLERANCE, round_money


def calculate_balances(expenses: Iterable[Any], members: Sequence[tuple[str, str]]) -> list[BalanceRecord]:
    """
    Net balance per member: total paid minus total owed.

    ``members`` is a sequence of ``(user_id, display name)``. Payers and split
    participants who are not members are ignored. Positive means the member
    is owed money.
    """
    paid: dict[str, float] = {user_id: 0.0 for user_id, _ in members}
    owed: dict[str, float] = {user_id: 0.0 for user_id, _ in members}

    for expense in expenses:
        if expense.paid_by in paid:
            paid[expense.paid_by] += expense.amount
        for split in expense.splits:
            if split.user_id in owed:
                owed[split.user_id] += split.amount

    return [
        BalanceRecord(user_id=user_id, user_name=name, net_balance=paid[user_id] - owed[user_id])
        for user_id, name in members
    ]


def calculate_settlements(balances: Iterable[BalanceRecord]) -> list[SettlementRecord]:
    """Greedily pair the largest creditor with the largest debtor until settled."""
    balances = list(balances)
    creditors = sorted(
        ([b, b.net_balance] for b in balances if b.net_balance > CENT_TOLERANCE),
        key=lambda pair: pair[1],
        reverse=True,
    )
    debtors = sorted(
        ([b, -b.net_balance] for b in balances if b.net_balance < -CENT_TOLERANCE),
        key=lambda pair: pair[1],
        reverse=True,
    )

    settlements: list[SettlementRecord] = []
    i = j = 0
    while i < len(creditors) and j < len(debtors):
        creditor, debtor = creditors[i], debtors[j]
        amount = min(creditor[1], debtor[1])

        if amount > CENT_TOLERANCE:
            settlements.append(
                SettlementRecord(
                    from_user=debtor[0].user_id,
                    from_name=debtor[0].user_name,
                    to_user=creditor[0].user_id,
                    to_name=creditor[0].user_name,
                    amount=round_money(amount),
                )
            )

        creditor[1] -= amount
        debtor[1] -= amount
        if creditor[1] < CENT_TOLERANCE:
            i += 1
        if debtor[1] < CENT_TOLERANCE:
            j += 1

    return settlements
