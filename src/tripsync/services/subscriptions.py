"""Authorize and record change-feed subscriptions for WebSocket connections."""

import logging
from typing import Any

from tripsync.db.store import Store
from tripsync.errors import ErrorCode, ForbiddenError, ValidationError
from tripsync.realtime.feed import ChangeFilter
from tripsync.services.connection import delete_subscription, store_subscription
from tripsync.services.guard import get_membership

logger = logging.getLogger(__name__)

SUBSCRIBABLE_TABLES = frozenset(
    {
        "trip_members",
        "budget_categories",
        "budget_splits",
        "shared_expenses",
        "expense_splits",
        "itinerary_items",
        "comments",
        "supply_items",
        "activity_suggestions",
        "golf_tee_times",
        "golf_scores",
        "trip_documents",
        "trip_announcements",
        "user_availability",
        "accommodations",
    }
)


def parse_subscription(message: dict[str, Any]) -> tuple[str, ChangeFilter]:
    """Validate a subscribe message; returns ``(channel, filter)``."""
    channel = message.get("channel")
    table = message.get("table")
    if not channel or not table:
        raise ValidationError("channel and table are required", code=ErrorCode.INVALID_REQUEST)
    if table not in SUBSCRIBABLE_TABLES:
        raise ValidationError(f"Table {table!r} is not subscribable", code=ErrorCode.INVALID_REQUEST)
    try:
        change_filter = ChangeFilter.parse(table, message.get("filter"))
    except ValueError as e:
        raise ValidationError(str(e), code=ErrorCode.INVALID_REQUEST) from e
    if "trip_id" not in dict(change_filter.equals):
        raise ValidationError("Subscriptions must be filtered by trip_id", code=ErrorCode.INVALID_REQUEST)
    return channel, change_filter


def open_subscription(
    store: Store,
    dynamo_client: Any,
    subscriptions_table: str,
    connection_id: str,
    user_id: str,
    channel: str,
    change_filter: ChangeFilter,
) -> None:
    """Record the subscription if ``user_id`` belongs to the filtered trip."""
    trip_id = dict(change_filter.equals)["trip_id"]
    with store.session() as session:
        if get_membership(session, trip_id, user_id) is None:
            raise ForbiddenError("Not a member of this trip")

    store_subscription(connection_id, user_id, trip_id, channel, change_filter, dynamo_client, subscriptions_table)
    logger.info("Connection %s subscribed to %s", connection_id, channel)


def close_subscription(dynamo_client: Any, subscriptions_table: str, connection_id: str, channel: str) -> None:
    delete_subscription(connection_id, channel, dynamo_client, subscriptions_table)
    logger.info("Connection %s unsubscribed from %s", connection_id, channel)
