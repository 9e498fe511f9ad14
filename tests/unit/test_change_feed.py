"""Unit tests for change events, filters and the in-memory feed."""

import pytest

from tripsync.realtime.feed import ChangeEvent, ChangeFilter, ChangeKind, InMemoryChangeFeed


def test_filter_parse_and_expression():
    f = ChangeFilter.parse("comments", "trip_id=eq.t1,itinerary_item_id=eq.i1")
    assert f.equals == (("itinerary_item_id", "i1"), ("trip_id", "t1"))
    assert ChangeFilter.parse("comments", f.expression) == f


def test_filter_parse_empty_matches_whole_table():
    f = ChangeFilter.parse("trip_members", None)
    assert f.matches(ChangeEvent("trip_members", ChangeKind.DELETE, {"trip_id": "anything"}))


def test_filter_parse_rejects_other_operators():
    with pytest.raises(ValueError, match="Unsupported filter clause"):
        ChangeFilter.parse("comments", "trip_id=gt.5")


def test_filter_matches_table_and_values():
    f = ChangeFilter.on("supply_items", trip_id="t1")
    assert f.matches(ChangeEvent("supply_items", ChangeKind.INSERT, {"trip_id": "t1", "name": "Cooler"}))
    assert not f.matches(ChangeEvent("supply_items", ChangeKind.INSERT, {"trip_id": "t2"}))
    assert not f.matches(ChangeEvent("comments", ChangeKind.INSERT, {"trip_id": "t1"}))


def test_event_message_round_trip():
    event = ChangeEvent("golf_scores", ChangeKind.UPDATE, {"id": "s1", "trip_id": "t1"})
    message = event.to_message("golf_scores_t1")
    assert message["type"] == "change"
    assert message["channel"] == "golf_scores_t1"
    assert ChangeEvent.from_message(message) == event


@pytest.mark.asyncio
async def test_in_memory_feed_delivers_to_matching_subscriptions():
    feed = InMemoryChangeFeed()
    seen_t1, seen_t2 = [], []
    await feed.subscribe("comments_t1", ChangeFilter.on("comments", trip_id="t1"), seen_t1.append)
    await feed.subscribe("comments_t2", ChangeFilter.on("comments", trip_id="t2"), seen_t2.append)

    delivered = feed.publish(ChangeEvent("comments", ChangeKind.INSERT, {"trip_id": "t1"}))

    assert delivered == 1
    assert len(seen_t1) == 1
    assert seen_t2 == []


@pytest.mark.asyncio
async def test_closed_subscription_receives_nothing():
    feed = InMemoryChangeFeed()
    seen = []
    sub = await feed.subscribe("comments_t1", ChangeFilter.on("comments", trip_id="t1"), seen.append)

    await sub.close()
    await sub.close()
    feed.publish(ChangeEvent("comments", ChangeKind.INSERT, {"trip_id": "t1"}))

    assert seen == []
    assert feed.active_channels == []
    assert not sub.active
