"""Unit tests for server-side change fan-out over the Subscriptions table."""

import json
from unittest.mock import MagicMock

from tripsync.realtime.feed import ChangeEvent, ChangeKind
from tripsync.services.changes import TRIP_TABLE_INDEX, ChangePublisher, NullChangePublisher


class GoneException(Exception):
    pass


def _subscription(connection_id, channel, expression):
    return {"connectionId": {"S": connection_id}, "channel": {"S": channel}, "filter": {"S": expression}}


def _apigw():
    client = MagicMock()
    client.exceptions.GoneException = GoneException
    return client


EVENT = ChangeEvent(table="comments", kind=ChangeKind.INSERT, record={"id": "c1", "trip_id": "t1", "text": "hi"})


def test_publish_posts_to_matching_subscriptions():
    dynamo = MagicMock()
    dynamo.query.return_value = {
        "Items": [
            _subscription("conn-1", "comments_t1", "trip_id=eq.t1"),
            _subscription("conn-2", "comments_t2", "trip_id=eq.t2"),
        ]
    }
    apigw = _apigw()

    delivered = ChangePublisher(dynamo, apigw, "Subscriptions").publish(EVENT)

    assert delivered == 1
    query = dynamo.query.call_args.kwargs
    assert query["IndexName"] == TRIP_TABLE_INDEX
    assert query["KeyConditionExpression"] == "#p = :p AND #t = :t"
    assert query["ExpressionAttributeNames"] == {"#p": "tripId", "#t": "table"}
    assert query["ExpressionAttributeValues"] == {":p": {"S": "t1"}, ":t": {"S": "comments"}}
    apigw.post_to_connection.assert_called_once()
    call = apigw.post_to_connection.call_args.kwargs
    assert call["ConnectionId"] == "conn-1"
    message = json.loads(call["Data"])
    assert message["type"] == "change"
    assert message["channel"] == "comments_t1"
    assert message["kind"] == "INSERT"
    assert message["record"]["id"] == "c1"


def test_publish_follows_pagination():
    dynamo = MagicMock()
    dynamo.query.side_effect = [
        {"Items": [_subscription("conn-1", "a", "trip_id=eq.t1")], "LastEvaluatedKey": {"k": "v"}},
        {"Items": [_subscription("conn-2", "b", "")]},
    ]
    apigw = _apigw()

    assert ChangePublisher(dynamo, apigw, "Subscriptions").publish(EVENT) == 2
    assert dynamo.query.call_args_list[1].kwargs["ExclusiveStartKey"] == {"k": "v"}


def test_gone_connection_subscriptions_are_removed():
    dynamo = MagicMock()
    dynamo.query.side_effect = [
        {
            "Items": [
                _subscription("conn-gone", "comments_t1", "trip_id=eq.t1"),
                _subscription("conn-gone", "comments_t1_item", "trip_id=eq.t1"),
            ]
        },
        # delete_subscriptions lists the connection's channels
        {"Items": [{"connectionId": {"S": "conn-gone"}, "channel": {"S": "comments_t1"}}]},
    ]
    apigw = _apigw()
    apigw.post_to_connection.side_effect = GoneException()

    delivered = ChangePublisher(dynamo, apigw, "Subscriptions").publish(EVENT)

    assert delivered == 0
    assert apigw.post_to_connection.call_count == 1
    dynamo.delete_item.assert_called_once_with(
        TableName="Subscriptions",
        Key={"connectionId": {"S": "conn-gone"}, "channel": {"S": "comments_t1"}},
    )


def test_bad_filter_is_skipped():
    dynamo = MagicMock()
    dynamo.query.return_value = {
        "Items": [_subscription("conn-1", "x", "trip_id>t1"), _subscription("conn-2", "y", "trip_id=eq.t1")]
    }
    apigw = _apigw()

    assert ChangePublisher(dynamo, apigw, "Subscriptions").publish(EVENT) == 1
    assert apigw.post_to_connection.call_args.kwargs["ConnectionId"] == "conn-2"


def test_lookup_failure_never_raises():
    dynamo = MagicMock()
    dynamo.query.side_effect = RuntimeError("throttled")

    assert ChangePublisher(dynamo, _apigw(), "Subscriptions").publish(EVENT) == 0


def test_trip_rows_are_looked_up_by_their_own_id():
    dynamo = MagicMock()
    dynamo.query.return_value = {"Items": []}

    event = ChangeEvent(table="trips", kind=ChangeKind.UPDATE, record={"id": "t9", "name": "Ski week"})
    ChangePublisher(dynamo, _apigw(), "Subscriptions").publish(event)

    assert dynamo.query.call_args.kwargs["ExpressionAttributeValues"][":p"] == {"S": "t9"}


def test_event_without_trip_is_not_published():
    dynamo = MagicMock()

    event = ChangeEvent(table="profiles", kind=ChangeKind.UPDATE, record={"id": "u1"})

    assert ChangePublisher(dynamo, _apigw(), "Subscriptions").publish(event) == 0
    dynamo.query.assert_not_called()


def test_null_publisher_drops_events():
    assert NullChangePublisher().publish(EVENT) == 0
