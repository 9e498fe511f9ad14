"""Shared test fixtures for Trip Sync."""

import os
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing (DynamoDB Local doesn't need it)
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from tripsync.auth.interface import AuthUser  # noqa: E402
from tripsync.config import _reset_config  # noqa: E402
from tripsync.context import RequestContext  # noqa: E402
from tripsync.db import Profile, Store  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_config_cache():
    _reset_config()
    yield
    _reset_config()


class RecordingPublisher:
    """Collects published change events instead of posting them."""

    def __init__(self):
        self.events = []

    def publish(self, event):
        self.events.append(event)
        return 1

    def tables(self):
        return [(e.table, e.kind.value) for e in self.events]


# Relational store fixtures
@pytest.fixture
def store():
    """In-memory SQLite store with every table created."""
    s = Store("sqlite://")
    s.create_all()
    yield s
    s.dispose()


@pytest.fixture
def publisher():
    return RecordingPublisher()


def make_user(user_id: str, email: str | None = None, name: str = "") -> AuthUser:
    return AuthUser(user_id=user_id, email=email or f"{user_id}@example.com", name=name or user_id.title())


@pytest.fixture
def alice():
    return make_user("alice", name="Alice Organizer")


@pytest.fixture
def bob():
    return make_user("bob", name="Bob Member")


@pytest.fixture
def carol():
    return make_user("carol", name="Carol Outsider")


@pytest.fixture
def make_ctx(store, publisher):
    """Build a RequestContext for a user, creating their profile row first."""

    def _make(user: AuthUser | None) -> RequestContext:
        if user is not None:
            with store.session() as session:
                if session.get(Profile, user.user_id) is None:
                    session.add(Profile(id=user.user_id, email=user.email, display_name=user.name))
        return RequestContext(store=store, changes=publisher, identity=user)

    return _make


@pytest.fixture
def future_dates():
    start = date.today() + timedelta(days=30)
    return start, start + timedelta(days=3)


# DynamoDB fixtures
@pytest.fixture
def dynamodb_resource():
    """Provide a DynamoDB resource for integration tests."""
    import boto3
    from tripsync.config import get_config

    config = get_config()

    resource = boto3.resource(
        "dynamodb",
        endpoint_url=config.dynamodb_endpoint,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    return resource


@pytest.fixture
def connections_table(dynamodb_resource):
    """Provide the Connections table."""
    from tripsync.config import get_config

    table = dynamodb_resource.Table(get_config().connections_table)
    yield table

    # Cleanup: scan and delete all items created during test
    response = table.scan()
    with table.batch_writer() as batch:
        for item in response.get("Items", []):
            batch.delete_item(Key={"connectionId": item["connectionId"]})


@pytest.fixture
def subscriptions_table(dynamodb_resource):
    """Provide the Subscriptions table."""
    from tripsync.config import get_config

    table = dynamodb_resource.Table(get_config().subscriptions_table)
    yield table

    response = table.scan()
    with table.batch_writer() as batch:
        for item in response.get("Items", []):
            batch.delete_item(Key={"connectionId": item["connectionId"], "channel": item["channel"]})
