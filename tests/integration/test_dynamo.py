"""Integration tests for connection and subscription records in DynamoDB Local."""

import json
from unittest.mock import MagicMock

import pytest

from tripsync.config import get_config
from tripsync.realtime.feed import ChangeEvent, ChangeFilter, ChangeKind
from tripsync.services.changes import ChangePublisher
from tripsync.services.connection import (
    delete_connection,
    get_connection_user,
    store_connection,
    store_subscription,
)


@pytest.fixture
def dynamo_client(dynamodb_resource):
    return dynamodb_resource.meta.client


@pytest.mark.integration
def test_connection_round_trip(connections_table, dynamo_client):
    """Store a connection and read its user back."""
    config = get_config()

    store_connection("conn-001", "user-001", dynamo_client, config.connections_table)

    assert get_connection_user("conn-001", dynamo_client, config.connections_table) == "user-001"
    item = connections_table.get_item(Key={"connectionId": "conn-001"})["Item"]
    assert "ttl" in item


@pytest.mark.integration
def test_delete_connection_removes_subscriptions(connections_table, subscriptions_table, dynamo_client):
    config = get_config()
    store_connection("conn-002", "user-002", dynamo_client, config.connections_table)
    for table in ("comments", "itinerary_items"):
        store_subscription(
            "conn-002",
            "user-002",
            "trip-1",
            f"{table}_trip-1",
            ChangeFilter.on(table, trip_id="trip-1"),
            dynamo_client,
            config.subscriptions_table,
        )

    delete_connection("conn-002", dynamo_client, config.connections_table, config.subscriptions_table)

    assert get_connection_user("conn-002", dynamo_client, config.connections_table) is None
    response = subscriptions_table.query(
        KeyConditionExpression="connectionId = :c",
        ExpressionAttributeValues={":c": "conn-002"},
    )
    assert response["Count"] == 0


@pytest.mark.integration
def test_publisher_finds_subscriptions_by_trip_and_table(subscriptions_table, dynamo_client):
    """The trip-table-index GSI routes a change only to subscriptions on that trip and table."""
    config = get_config()
    store_subscription(
        "conn-a",
        "user-a",
        "trip-1",
        "comments_trip-1",
        ChangeFilter.on("comments", trip_id="trip-1"),
        dynamo_client,
        config.subscriptions_table,
    )
    store_subscription(
        "conn-b",
        "user-b",
        "trip-2",
        "comments_trip-2",
        ChangeFilter.on("comments", trip_id="trip-2"),
        dynamo_client,
        config.subscriptions_table,
    )
    store_subscription(
        "conn-c",
        "user-c",
        "trip-1",
        "supply_items_trip-1",
        ChangeFilter.on("supply_items", trip_id="trip-1"),
        dynamo_client,
        config.subscriptions_table,
    )
    apigw = MagicMock()

    event = ChangeEvent(table="comments", kind=ChangeKind.INSERT, record={"id": "c1", "trip_id": "trip-1"})
    delivered = ChangePublisher(dynamo_client, apigw, config.subscriptions_table).publish(event)

    assert delivered == 1
    call = apigw.post_to_connection.call_args.kwargs
    assert call["ConnectionId"] == "conn-a"
    assert json.loads(call["Data"])["channel"] == "comments_trip-1"
