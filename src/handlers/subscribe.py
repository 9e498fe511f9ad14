"""WebSocket subscribe/unsubscribe route handlers."""

import json
import logging
from typing import Any

from tripsync.clients import get_dynamo_client, get_store
from tripsync.config import get_config
from tripsync.errors import ErrorCode, ForbiddenError, TripSyncError, ValidationError
from tripsync.services.connection import get_connection_user
from tripsync.services.subscriptions import close_subscription, open_subscription, parse_subscription

logger = logging.getLogger(__name__)


def _message(event: dict[str, Any]) -> dict[str, Any]:
    try:
        message = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as e:
        raise ValidationError("Invalid JSON message", code=ErrorCode.INVALID_REQUEST) from e
    if not isinstance(message, dict):
        raise ValidationError("Message must be a JSON object", code=ErrorCode.INVALID_REQUEST)
    return message


def _error(e: TripSyncError) -> dict[str, Any]:
    return {"statusCode": e.status_code, "body": json.dumps(e.to_body())}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Route: subscribe. Only members of the filtered trip may subscribe."""
    connection_id = event["requestContext"]["connectionId"]
    config = get_config()
    dynamo_client = get_dynamo_client()

    try:
        channel, change_filter = parse_subscription(_message(event))
        user_id = get_connection_user(connection_id, dynamo_client, config.connections_table)
        if user_id is None:
            raise ForbiddenError("Unknown connection")
        open_subscription(
            get_store(), dynamo_client, config.subscriptions_table, connection_id, user_id, channel, change_filter
        )
    except TripSyncError as e:
        logger.info("Rejected subscription from %s: %s", connection_id, e.message)
        return _error(e)

    return {"statusCode": 200, "body": json.dumps({"type": "subscribed", "channel": channel})}


def unsubscribe_handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Route: unsubscribe."""
    connection_id = event["requestContext"]["connectionId"]
    config = get_config()

    try:
        channel = _message(event).get("channel")
        if not channel:
            raise ValidationError("channel is required", code=ErrorCode.INVALID_REQUEST)
    except TripSyncError as e:
        return _error(e)

    close_subscription(get_dynamo_client(), config.subscriptions_table, connection_id, channel)
    return {"statusCode": 200, "body": json.dumps({"type": "unsubscribed", "channel": channel})}
