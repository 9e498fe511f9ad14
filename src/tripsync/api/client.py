"""Async JSON client for the trip-scoped HTTP API."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from tripsync.errors import NetworkError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class TripApiClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET ``path`` and return the decoded body; failures raise NetworkError."""
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {path} failed: {e}") from e

        if response.status_code >= 400:
            raise NetworkError(_error_message(response, path), status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON from {path}", status=response.status_code) from e

    async def get_list(self, path: str, key: str, model: type[M], params: dict[str, Any] | None = None) -> list[M]:
        body = await self.get_json(path, params)
        try:
            return [model.model_validate(row) for row in body.get(key) or []]
        except SchemaError as e:
            raise NetworkError(f"Unexpected response shape from {path}: {e.error_count()} errors") from e

    async def get_one(self, path: str, key: str, model: type[M]) -> M:
        record = await self.get_optional(path, key, model)
        if record is None:
            raise NetworkError(f"Missing {key!r} in response from {path}")
        return record

    async def get_optional(self, path: str, key: str, model: type[M]) -> M | None:
        """Like ``get_one``, but a null ``key`` means the record does not exist yet."""
        body = await self.get_json(path)
        if body.get(key) is None:
            return None
        try:
            return model.model_validate(body[key])
        except SchemaError as e:
            raise NetworkError(f"Unexpected response shape from {path}: {e.error_count()} errors") from e

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TripApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _error_message(response: httpx.Response, path: str) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Failed to fetch {path} (HTTP {response.status_code})"
