"""
Server-side change publishing.

Write services report every row they touch as a ChangeEvent. The publisher
looks up WebSocket subscriptions for the event's trip and table (Subscriptions
table, ``trip-table-index`` GSI: ``tripId`` hash key, ``table`` range key),
applies each subscription's filter and posts a change message to the
matching connections. Publishing never fails the write.
"""

import json
import logging
from typing import Any

from sqlalchemy import inspect

from tripsync.realtime.feed import ChangeEvent, ChangeFilter, ChangeKind
from tripsync.services.connection import delete_subscriptions

logger = logging.getLogger(__name__)

TRIP_TABLE_INDEX = "trip-table-index"


def row_record(row: Any, **extra: Any) -> dict[str, Any]:
    """Column values of an ORM row, plus ``extra`` (e.g. the owning trip_id)."""
    record = {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}
    record.update(extra)
    return record


def change(table: str, kind: ChangeKind, row: Any, **extra: Any) -> ChangeEvent:
    return ChangeEvent(table=table, kind=kind, record=row_record(row, **extra))


def event_trip_id(event: ChangeEvent) -> str | None:
    """The trip a change belongs to; ``trips`` rows carry it as their own id."""
    trip_id = event.record.get("id") if event.table == "trips" else event.record.get("trip_id")
    return str(trip_id) if trip_id else None


class NullChangePublisher:
    """Used when no WebSocket endpoint is configured."""

    def publish(self, event: ChangeEvent) -> int:
        logger.debug("No change feed configured; dropping %s event on %s", event.kind.value, event.table)
        return 0


class ChangePublisher:
    def __init__(self, dynamo_client: Any, apigw_client: Any, subscriptions_table: str) -> None:
        self._dynamo = dynamo_client
        self._apigw = apigw_client
        self._table = subscriptions_table

    def publish(self, event: ChangeEvent) -> int:
        """Post ``event`` to every matching subscription; returns deliveries."""
        trip_id = event_trip_id(event)
        if trip_id is None:
            logger.debug("%s event on %s has no trip_id; nothing to publish", event.kind.value, event.table)
            return 0
        try:
            subscriptions = self._subscriptions_for(trip_id, event.table)
        except Exception:
            logger.exception("Failed to load subscriptions for %s", event.table)
            return 0

        delivered = 0
        gone: set[str] = set()
        for item in subscriptions:
            connection_id = item["connectionId"]["S"]
            if connection_id in gone:
                continue
            channel = item["channel"]["S"]
            try:
                change_filter = ChangeFilter.parse(event.table, item.get("filter", {}).get("S"))
            except ValueError:
                logger.warning("Skipping subscription %s/%s with bad filter", connection_id, channel)
                continue
            if not change_filter.matches(event):
                continue

            try:
                self._apigw.post_to_connection(
                    ConnectionId=connection_id,
                    Data=json.dumps(event.to_message(channel), default=str).encode(),
                )
                delivered += 1
            except self._apigw.exceptions.GoneException:
                gone.add(connection_id)
            except Exception:
                logger.exception("Error posting change to connection %s", connection_id)

        for connection_id in gone:
            delete_subscriptions(connection_id, self._dynamo, self._table)
            logger.info("Removed subscriptions of gone connection %s", connection_id)

        return delivered

    def _subscriptions_for(self, trip_id: str, table: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        last_key = None
        while True:
            query_kwargs: dict[str, Any] = {
                "TableName": self._table,
                "IndexName": TRIP_TABLE_INDEX,
                "KeyConditionExpression": "#p = :p AND #t = :t",
                "ExpressionAttributeNames": {"#p": "tripId", "#t": "table"},
                "ExpressionAttributeValues": {":p": {"S": trip_id}, ":t": {"S": table}},
            }
            if last_key:
                query_kwargs["ExclusiveStartKey"] = last_key

            response = self._dynamo.query(**query_kwargs)
            items.extend(response.get("Items", []))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
        return items
