"""WebSocket heartbeat handler. Keeps connections from idling out."""

import logging
from typing import Any

from tripsync.clients import get_apigw_client, get_dynamo_client
from tripsync.config import get_config
from tripsync.services.connection import cleanup_stale_connections

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Ping all active connections and clean up stale ones with their subscriptions."""
    config = get_config()

    result = cleanup_stale_connections(
        get_dynamo_client(), get_apigw_client(), config.connections_table, config.subscriptions_table
    )

    logger.info(
        "Heartbeat complete: %d active, %d cleaned",
        result["active"],
        result["cleaned"],
    )

    return {
        "statusCode": 200,
        "body": f"Heartbeat: {result['active']} active, {result['cleaned']} cleaned",
    }
