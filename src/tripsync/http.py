"""
HTTP endpoint boundary for API Gateway (HTTP API, payload v2) Lambda handlers.

``api_handler`` turns a ``func(ctx, request) -> (status, body)`` into a Lambda
handler: it parses the event, resolves the caller from the Bearer token,
builds the RequestContext and maps every failure to the JSON error body.
Handlers wrapped this way never raise.
"""

import asyncio
import base64
import functools
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from pydantic_core import to_jsonable_python
from sqlalchemy import select

from tripsync.auth import get_auth_provider
from tripsync.auth.interface import AuthUser
from tripsync.clients import get_change_publisher, get_store
from tripsync.config import get_config
from tripsync.context import RequestContext
from tripsync.db.schemas.profile import Profile
from tripsync.db.store import Store
from tripsync.errors import AuthenticationError, ErrorCode, TripSyncError, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

Response = tuple[int, Any]

_logging_configured = False


@dataclass
class ApiRequest:
    method: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None

    @classmethod
    def from_event(cls, event: dict[str, Any]) -> "ApiRequest":
        http = event.get("requestContext", {}).get("http", {})
        body = event.get("body")
        if body and event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        return cls(
            method=(http.get("method") or event.get("httpMethod") or "GET").upper(),
            path=event.get("rawPath") or event.get("path") or "",
            path_params=event.get("pathParameters") or {},
            query=event.get("queryStringParameters") or {},
            headers={k.lower(): v for k, v in (event.get("headers") or {}).items()},
            body=body,
        )

    @property
    def token(self) -> str | None:
        auth = self.headers.get("authorization", "")
        scheme, _, token = auth.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()

    def param(self, name: str) -> str:
        value = self.path_params.get(name)
        if not value:
            raise ValidationError(f"Missing path parameter: {name}", code=ErrorCode.INVALID_REQUEST)
        return value

    def json(self) -> dict[str, Any]:
        if not self.body:
            return {}
        try:
            data = json.loads(self.body)
        except json.JSONDecodeError as e:
            raise ValidationError("Invalid JSON body", code=ErrorCode.INVALID_REQUEST) from e
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object", code=ErrorCode.INVALID_REQUEST)
        return data


def parse_body(request: ApiRequest, model: type[M]) -> M:
    """Validate the request body against ``model``; failures carry pydantic's issues."""
    try:
        return model.model_validate(request.json())
    except SchemaError as e:
        raise ValidationError(
            "Validation failed", issues=e.errors(include_url=False, include_context=False, include_input=False)
        ) from e


def json_response(status: int, body: Any) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=to_jsonable_python),
    }


def method_not_allowed(request: ApiRequest) -> Response:
    return 405, {"error": f"Method {request.method} not allowed", "code": ErrorCode.INVALID_REQUEST.value}


def resolve_identity(token: str | None) -> AuthUser | None:
    """Verify the session token; an absent or rejected token means no identity."""
    if not token:
        return None
    # AuthProvider methods are async; the sync Lambda handler bridges with asyncio.run()
    try:
        return asyncio.run(get_auth_provider().verify_token(token))
    except AuthenticationError as e:
        logger.info("Rejected session token: %s", e.message)
        return None


def ensure_profile(store: Store, user: AuthUser) -> None:
    """Create the caller's profile row on first sight."""
    with store.session() as session:
        existing = session.scalar(select(Profile).where(Profile.id == user.user_id))
        if existing is None:
            session.add(
                Profile(id=user.user_id, email=user.email, display_name=user.name or None, avatar_url=user.avatar_url)
            )
            logger.info("Created profile for %s", user.user_id)


def build_context(request: ApiRequest) -> RequestContext:
    """Resolve the caller, then open the store; unauthenticated requests never reach the database."""
    identity = resolve_identity(request.token)
    if identity is None:
        raise AuthenticationError()
    store = get_store()
    ensure_profile(store, identity)
    return RequestContext(store=store, changes=get_change_publisher(), identity=identity)


def _configure_logging() -> None:
    global _logging_configured
    if _logging_configured:
        return
    logging.getLogger().setLevel(get_config().log_level)
    _logging_configured = True


def api_handler(func: Callable[[RequestContext, ApiRequest], Response]) -> Callable[[dict[str, Any], object], dict]:
    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: object) -> dict[str, Any]:
        try:
            _configure_logging()
            request = ApiRequest.from_event(event)
            ctx = build_context(request)
            status, body = func(ctx, request)
            return json_response(status, body)
        except TripSyncError as e:
            if e.status_code >= 500:
                logger.error("%s failed: %s", func.__module__, e.message)
            return json_response(e.status_code, e.to_body())
        except Exception:
            logger.exception("Unhandled error in %s", func.__module__)
            return json_response(500, {"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value})

    return wrapper


def public_handler(func: Callable[[ApiRequest], Response]) -> Callable[[dict[str, Any], object], dict]:
    """Like ``api_handler`` for unauthenticated routes: no token, no context."""

    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: object) -> dict[str, Any]:
        try:
            _configure_logging()
            status, body = func(ApiRequest.from_event(event))
            return json_response(status, body)
        except TripSyncError as e:
            return json_response(e.status_code, e.to_body())
        except Exception:
            logger.exception("Unhandled error in %s", func.__module__)
            return json_response(500, {"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value})

    return wrapper
