"""Migration Lambda: runs Alembic upgrade head."""

from typing import Any

from tripsync.services.migration import run_migrations


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    result = run_migrations()
    return {"statusCode": 200, "body": result}
