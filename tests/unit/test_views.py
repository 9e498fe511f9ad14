"""Unit tests for view projections and error presentation."""

from datetime import date
from types import SimpleNamespace

from tripsync.realtime.collection import CollectionState, CollectionStatus
from tripsync.realtime.views import (
    ViewKind,
    group_itinerary_by_date,
    group_supplies_by_category,
    leaderboard,
    present,
    render_safely,
    supply_progress,
)


def test_leaderboard_sorts_ascending_and_keeps_ties_stable():
    scores = [
        SimpleNamespace(user_id="a", score=72),
        SimpleNamespace(user_id="b", score=68),
        SimpleNamespace(user_id="c", score=75),
        SimpleNamespace(user_id="d", score=72),
    ]
    assert [s.user_id for s in leaderboard(scores)] == ["b", "a", "d", "c"]


def test_itinerary_grouped_by_sorted_date():
    items = [
        SimpleNamespace(title="Brunch", date=date(2030, 6, 2)),
        SimpleNamespace(title="Hike", date=date(2030, 6, 1)),
        SimpleNamespace(title="Dinner", date=date(2030, 6, 2)),
    ]
    grouped = group_itinerary_by_date(items)
    assert list(grouped) == [date(2030, 6, 1), date(2030, 6, 2)]
    assert [i.title for i in grouped[date(2030, 6, 2)]] == ["Brunch", "Dinner"]


def test_supplies_grouped_in_category_order():
    items = [
        SimpleNamespace(name="Board games", category="entertainment"),
        SimpleNamespace(name="Chips", category="food_drinks"),
        SimpleNamespace(name="Soap", category="toiletries"),
    ]
    assert list(group_supplies_by_category(items)) == ["food_drinks", "entertainment", "toiletries"]


def test_supply_progress():
    items = [
        SimpleNamespace(status="needed", cost=10.0),
        SimpleNamespace(status="claimed", cost=None),
        SimpleNamespace(status="packed", cost=5.5),
        SimpleNamespace(status="packed", cost=None),
    ]
    assert supply_progress(items) == {"needed": 1, "claimed": 1, "packed": 2, "total": 4, "total_cost": 15.5}


def test_present_states():
    assert present(CollectionState()).kind is ViewKind.LOADING
    assert present(CollectionState(status=CollectionStatus.READY), "No supplies yet").message == "No supplies yet"

    failed = present(CollectionState(status=CollectionStatus.FAILED, error="Failed to fetch"))
    assert failed.kind is ViewKind.ERROR
    assert failed.message == "Failed to fetch"
    assert failed.actions == ("Try Again",)

    populated = present(CollectionState(items=("tent",), status=CollectionStatus.READY))
    assert populated.kind is ViewKind.POPULATED
    assert populated.items == ("tent",)


def test_render_safely_passes_through():
    state = CollectionState(items=("tent",), status=CollectionStatus.READY)
    assert render_safely(lambda view: len(view.items), state) == 1


def test_render_safely_turns_crash_into_recoverable_view():
    def render(view):
        raise KeyError("missing column")

    view = render_safely(render, CollectionState(items=("tent",), status=CollectionStatus.READY))

    assert view.kind is ViewKind.CRASHED
    assert view.actions == ("Try Again", "Go Home")
