"""Pure projections of collection snapshots into view-ready shapes."""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from tripsync.db.schemas.supply import SUPPLY_CATEGORIES
from tripsync.realtime.collection import CollectionState, CollectionStatus

logger = logging.getLogger(__name__)

R = TypeVar("R")

TRY_AGAIN = "Try Again"
GO_HOME = "Go Home"


def leaderboard(scores: Iterable[Any]) -> list[Any]:
    """Ascending by score; equal scores keep their fetched order."""
    return sorted(scores, key=lambda s: s.score)


def group_itinerary_by_date(items: Iterable[Any]) -> dict[Any, list[Any]]:
    grouped: dict[Any, list[Any]] = {}
    for item in items:
        grouped.setdefault(item.date, []).append(item)
    return {day: grouped[day] for day in sorted(grouped)}


def group_supplies_by_category(items: Iterable[Any]) -> dict[str, list[Any]]:
    grouped: dict[str, list[Any]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(item)
    order = {c: i for i, c in enumerate(SUPPLY_CATEGORIES)}
    return {c: grouped[c] for c in sorted(grouped, key=lambda c: order.get(c, len(order)))}


def supply_progress(items: Sequence[Any]) -> dict[str, float]:
    counts: dict[str, float] = {"needed": 0, "claimed": 0, "packed": 0}
    for item in items:
        counts[item.status] = counts.get(item.status, 0) + 1
    counts["total"] = len(items)
    counts["total_cost"] = sum(item.cost or 0 for item in items)
    return counts


class ViewKind(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    POPULATED = "populated"
    CRASHED = "crashed"


@dataclass(frozen=True)
class PresentedView:
    kind: ViewKind
    items: tuple[Any, ...] = ()
    message: str | None = None
    actions: tuple[str, ...] = ()


def present(state: CollectionState, empty_message: str = "Nothing here yet.") -> PresentedView:
    if state.status is CollectionStatus.LOADING:
        return PresentedView(ViewKind.LOADING, message="Loading...")
    if state.status is CollectionStatus.FAILED:
        return PresentedView(ViewKind.ERROR, message=state.error, actions=(TRY_AGAIN,))
    if not state.items:
        return PresentedView(ViewKind.EMPTY, message=empty_message)
    return PresentedView(ViewKind.POPULATED, items=state.items)


def render_safely(
    render: Callable[[PresentedView], R], state: CollectionState, empty_message: str = "Nothing here yet."
) -> R | PresentedView:
    """Run ``render`` on the presented state; a crash becomes a recoverable error view."""
    try:
        return render(present(state, empty_message))
    except Exception as e:
        logger.exception("View render failed")
        return PresentedView(
            ViewKind.CRASHED,
            message=str(e) or "Something went wrong",
            actions=(TRY_AGAIN, GO_HOME),
        )
