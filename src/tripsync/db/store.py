"""Relational store client: engine, sessions and error translation."""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import boto3
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tripsync.config import Config
from tripsync.db.schemas.base import Base
from tripsync.errors import StoreError, TripSyncError

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _resolve_url(config: Config) -> URL:
    url = make_url(config.database_url)
    if not config.db_secret_arn:
        return url
    client = boto3.client("secretsmanager", region_name=config.aws_region)
    secret = json.loads(client.get_secret_value(SecretId=config.db_secret_arn)["SecretString"])
    return url.set(
        host=secret.get("host", url.host),
        port=int(secret.get("port", url.port or 5432)),
        database=secret.get("dbname", url.database),
        username=secret.get("username", url.username),
        password=secret.get("password", url.password),
    )


class Store:
    """Owns the SQLAlchemy engine and hands out transactional sessions."""

    def __init__(self, url: str | URL, *, echo: bool = False) -> None:
        kwargs: dict[str, Any] = {"echo": echo}
        url = make_url(url)
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # One shared connection so an in-memory database survives across sessions
            from sqlalchemy.pool import StaticPool

            kwargs.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
        else:
            kwargs["pool_pre_ping"] = True

        self._engine: Engine = create_engine(url, **kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)
        self._sessions = sessionmaker(self._engine, expire_on_commit=False)

    @classmethod
    def from_config(cls, config: Config) -> "Store":
        return cls(_resolve_url(config))

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on any error.

        SQLAlchemy failures are re-raised as StoreError carrying the driver's
        message; domain errors raised inside the block propagate unchanged.
        """
        session = self._sessions()
        try:
            yield session
            session.commit()
        except TripSyncError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Store operation failed: %s", e)
            raise StoreError(str(getattr(e, "orig", None) or e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        """Create every table directly. Local development and tests only; deployed schemas use Alembic."""
        Base.metadata.create_all(self._engine)

    def health_check(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    def dispose(self) -> None:
        self._engine.dispose()
