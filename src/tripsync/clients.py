"""Lazy-initialized clients, reused across warm Lambda invocations."""

from functools import lru_cache
from typing import Any

import boto3

from tripsync.config import get_config
from tripsync.db.store import Store
from tripsync.services.changes import ChangePublisher, NullChangePublisher


@lru_cache(maxsize=1)
def get_dynamo_client() -> Any:
    config = get_config()
    return boto3.client("dynamodb", endpoint_url=config.dynamodb_endpoint)


@lru_cache(maxsize=1)
def get_apigw_client() -> Any:
    config = get_config()
    return boto3.client(
        "apigatewaymanagementapi",
        endpoint_url=config.websocket_endpoint,
    )


@lru_cache(maxsize=1)
def get_store() -> Store:
    return Store.from_config(get_config())


@lru_cache(maxsize=1)
def get_change_publisher() -> ChangePublisher | NullChangePublisher:
    config = get_config()
    if not config.websocket_endpoint:
        return NullChangePublisher()
    return ChangePublisher(get_dynamo_client(), get_apigw_client(), config.subscriptions_table)
