"""WebSocket Lambda authorizer: validates the Clerk session token on $connect.

Browsers cannot set headers on a WebSocket handshake, so the token normally
arrives as ``?token=``; server-side clients may send ``Authorization: Bearer``.
"""

import asyncio
import logging
from typing import Any

from tripsync.auth import get_auth_provider
from tripsync.errors import AuthenticationError

logger = logging.getLogger(__name__)


def _token(event: dict[str, Any]) -> str | None:
    token = (event.get("queryStringParameters") or {}).get("token")
    if token:
        return token
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    scheme, _, value = headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    method_arn = event["methodArn"]
    token = _token(event)
    if token is None:
        logger.info("Denied $connect without a session token")
        return _deny_policy(method_arn)

    try:
        auth_provider = get_auth_provider()
    except ValueError:
        logger.exception("Auth provider is not configured")
        return _deny_policy(method_arn)

    # AuthProvider methods are async; asyncio.run() bridges into this sync Lambda handler
    try:
        auth_user = asyncio.run(auth_provider.verify_token(token))
    except AuthenticationError as e:
        logger.info("Denied $connect: %s", e.message)
        return _deny_policy(method_arn)
    return _allow_policy(method_arn, auth_user.user_id)


def _policy(principal_id: str, effect: str, method_arn: str) -> dict[str, Any]:
    return {
        "principalId": principal_id,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [{"Action": "execute-api:Invoke", "Effect": effect, "Resource": method_arn}],
        },
    }


def _allow_policy(method_arn: str, user_id: str) -> dict[str, Any]:
    policy = _policy(user_id, "Allow", method_arn)
    policy["context"] = {"userId": user_id}
    return policy


def _deny_policy(method_arn: str) -> dict[str, Any]:
    return _policy("unauthorized", "Deny", method_arn)
