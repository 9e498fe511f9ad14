"""Connection and subscription management for WebSocket clients."""

import json
import logging
from time import time
from typing import Any

from tripsync.realtime.feed import ChangeFilter

logger = logging.getLogger(__name__)

CONNECTION_TTL_SECONDS = 86400


def store_connection(connection_id: str, user_id: str, dynamo_client: Any, connections_table: str) -> None:
    """Store WebSocket connection with 24-hour TTL."""
    ttl = int(time()) + CONNECTION_TTL_SECONDS
    dynamo_client.put_item(
        TableName=connections_table,
        Item={"connectionId": {"S": connection_id}, "userId": {"S": user_id}, "ttl": {"N": str(ttl)}},
    )


def get_connection_user(connection_id: str, dynamo_client: Any, connections_table: str) -> str | None:
    response = dynamo_client.get_item(
        TableName=connections_table,
        Key={"connectionId": {"S": connection_id}},
    )
    item = response.get("Item")
    return item["userId"]["S"] if item else None


def delete_connection(
    connection_id: str,
    dynamo_client: Any,
    connections_table: str,
    subscriptions_table: str | None = None,
) -> None:
    """Delete WebSocket connection, and its subscriptions when a table is given."""
    dynamo_client.delete_item(
        TableName=connections_table,
        Key={"connectionId": {"S": connection_id}},
    )
    if subscriptions_table:
        delete_subscriptions(connection_id, dynamo_client, subscriptions_table)


def store_subscription(
    connection_id: str,
    user_id: str,
    trip_id: str,
    channel: str,
    change_filter: ChangeFilter,
    dynamo_client: Any,
    subscriptions_table: str,
) -> None:
    ttl = int(time()) + CONNECTION_TTL_SECONDS
    dynamo_client.put_item(
        TableName=subscriptions_table,
        Item={
            "connectionId": {"S": connection_id},
            "channel": {"S": channel},
            "table": {"S": change_filter.table},
            "filter": {"S": change_filter.expression},
            "userId": {"S": user_id},
            "tripId": {"S": trip_id},
            "ttl": {"N": str(ttl)},
        },
    )


def delete_subscription(connection_id: str, channel: str, dynamo_client: Any, subscriptions_table: str) -> None:
    dynamo_client.delete_item(
        TableName=subscriptions_table,
        Key={"connectionId": {"S": connection_id}, "channel": {"S": channel}},
    )


def delete_subscriptions(connection_id: str, dynamo_client: Any, subscriptions_table: str) -> int:
    """Delete every subscription held by a connection."""
    deleted = 0
    last_key = None

    while True:
        query_kwargs: dict[str, Any] = {
            "TableName": subscriptions_table,
            "KeyConditionExpression": "connectionId = :c",
            "ExpressionAttributeValues": {":c": {"S": connection_id}},
            "ProjectionExpression": "connectionId, channel",
        }
        if last_key:
            query_kwargs["ExclusiveStartKey"] = last_key

        response = dynamo_client.query(**query_kwargs)
        for item in response.get("Items", []):
            delete_subscription(connection_id, item["channel"]["S"], dynamo_client, subscriptions_table)
            deleted += 1

        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            break

    return deleted


def cleanup_stale_connections(
    dynamo_client: Any,
    apigw_client: Any,
    connections_table: str,
    subscriptions_table: str | None = None,
) -> dict[str, int]:
    """Ping all connections and delete stale ones."""
    active_count = 0
    stale_count = 0
    last_key = None

    while True:
        scan_kwargs: dict[str, Any] = {"TableName": connections_table}
        if last_key:
            scan_kwargs["ExclusiveStartKey"] = last_key

        response = dynamo_client.scan(**scan_kwargs)

        for conn in response.get("Items", []):
            connection_id = conn["connectionId"]["S"]
            try:
                apigw_client.post_to_connection(
                    ConnectionId=connection_id,
                    Data=json.dumps({"type": "heartbeat", "timestamp": int(time())}).encode(),
                )
                active_count += 1
            except apigw_client.exceptions.GoneException:
                delete_connection(connection_id, dynamo_client, connections_table, subscriptions_table)
                stale_count += 1
                logger.info("Cleaned stale connection %s", connection_id)
            except Exception:
                logger.exception("Error pinging connection %s", connection_id)

        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            break

    return {"active": active_count, "cleaned": stale_count}
