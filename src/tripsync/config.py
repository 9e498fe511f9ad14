from os import environ

import boto3
from pydantic import BaseModel, ConfigDict

_cached_clerk_secret: str | None = None


def _resolve_clerk_secret() -> str:
    """Fetch Clerk secret from Secrets Manager at runtime, with caching."""
    global _cached_clerk_secret
    if _cached_clerk_secret is not None:
        return _cached_clerk_secret

    # Local dev: use env var directly
    direct = environ.get("CLERK_SECRET_KEY", "")
    if direct:
        _cached_clerk_secret = direct
        return direct

    # Deployed: fetch from Secrets Manager by ARN
    arn = environ.get("CLERK_SECRET_ARN", "")
    if not arn:
        return ""

    client = boto3.client("secretsmanager")
    _cached_clerk_secret = client.get_secret_value(SecretId=arn)["SecretString"]
    return _cached_clerk_secret


def _database_url() -> str:
    url = environ.get("DATABASE_URL", "")
    if url:
        return url
    return "postgresql+psycopg://{user}:{password}@{host}:{port}/{name}".format(
        user=environ.get("DB_USER", "tripsync"),
        password=environ.get("DB_PASSWORD", "localdev"),
        host=environ.get("DB_HOST", "localhost"),
        port=environ.get("DB_PORT", "5432"),
        name=environ.get("DB_NAME", "tripsync"),
    )


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    database_url: str
    db_secret_arn: str | None = None
    dynamodb_endpoint: str | None = None
    connections_table: str
    subscriptions_table: str
    websocket_endpoint: str = ""
    api_base_url: str = ""
    clerk_secret_key: str = ""
    clerk_authorized_parties: tuple[str, ...] = ()
    environment: str
    log_level: str = "INFO"


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config. For testing only."""
    global _cached_config, _cached_clerk_secret
    _cached_config = None
    _cached_clerk_secret = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        database_url=_database_url(),
        db_secret_arn=environ.get("DB_SECRET_ARN"),
        dynamodb_endpoint=environ.get("DYNAMODB_ENDPOINT"),
        connections_table=environ.get("CONNECTIONS_TABLE", "Connections"),
        subscriptions_table=environ.get("SUBSCRIPTIONS_TABLE", "Subscriptions"),
        websocket_endpoint=environ.get("WEBSOCKET_ENDPOINT", ""),
        api_base_url=environ.get("API_BASE_URL", "http://localhost:3000"),
        clerk_secret_key=_resolve_clerk_secret(),
        clerk_authorized_parties=tuple(
            p.strip() for p in environ.get("CLERK_AUTHORIZED_PARTIES", "").split(",") if p.strip()
        ),
        environment=environ.get("ENVIRONMENT", "local"),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
    return _cached_config
