"""Money arithmetic for budgets and expense splits.

Amounts are plain floats in dollars, rounded to cents half-up.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Any

CENT_TOLERANCE = 0.01


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def round_money(amount: float) -> float:
    return math.floor(amount * 100 + 0.5) / 100


def calculate_equal_split(total: float, count: int) -> float:
    if count == 0:
        return 0
    return round_money(total / count)


def validate_custom_splits(splits: Iterable[Any], total: float) -> bool:
    """True when the split amounts add up to ``total`` within one cent."""
    split_sum = sum(_field(s, "amount") or 0 for s in splits)
    return abs(round_money(split_sum) - round_money(total)) < CENT_TOLERANCE


def calculate_per_person_budget(categories: Sequence[Any], member_count: int, user_id: str | None = None) -> float:
    """
    Sum of one person's share across budget categories.

    ``equal`` categories divide by ``member_count``; ``custom`` categories use
    the user's own split (``splits`` or ``custom_splits``); ``none`` is skipped.
    """
    if member_count == 0:
        return 0

    total = 0.0
    for category in categories:
        split_type = _field(category, "split_type")
        if split_type == "equal":
            total += calculate_equal_split(_field(category, "estimated_cost") or 0, member_count)
        elif split_type == "custom" and user_id:
            splits = _field(category, "splits") or _field(category, "custom_splits") or []
            own = next((s for s in splits if _field(s, "user_id") == user_id), None)
            total += (_field(own, "amount") or 0) if own is not None else 0
    return total


def calculate_total_budget(categories: Iterable[Any]) -> float:
    return round_money(sum(_field(c, "estimated_cost") or 0 for c in categories))


def calculate_percentage(part: float, total: float) -> int:
    if total == 0:
        return 0
    return math.floor(part / total * 100 + 0.5)
