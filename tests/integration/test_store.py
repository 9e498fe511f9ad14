"""Integration tests for the relational store against local PostgreSQL."""

import pytest
from sqlalchemy import inspect

from tripsync.config import get_config
from tripsync.context import RequestContext
from tripsync.db import Profile, Store, TripMember
from tripsync.errors import StoreError
from tripsync.models import CreateTripRequest
from tripsync.services import trips


@pytest.fixture
def pg_store():
    s = Store.from_config(get_config())
    if not s.health_check():
        s.dispose()
        pytest.skip("PostgreSQL is not reachable")
    yield s
    s.dispose()


@pytest.mark.integration
def test_migrated_schema_has_trip_tables(pg_store):
    tables = set(inspect(pg_store.engine).get_table_names())
    assert {"profiles", "trips", "trip_members", "shared_expenses", "golf_scores"} <= tables


@pytest.mark.integration
def test_create_and_delete_trip(pg_store, publisher, alice, future_dates):
    with pg_store.session() as session:
        if session.get(Profile, alice.user_id) is None:
            session.add(Profile(id=alice.user_id, email=alice.email, display_name=alice.name))
    ctx = RequestContext(store=pg_store, changes=publisher, identity=alice)
    start, end = future_dates

    trip = trips.create_trip(
        ctx, CreateTripRequest(title="Integration Trip", destination="Denver", start_date=start, end_date=end)
    )
    try:
        assert trips.get_trip(ctx, trip.id).members[0].role == "organizer"
    finally:
        trips.delete_trip(ctx, trip.id)


@pytest.mark.integration
def test_constraint_violation_is_store_error(pg_store):
    with pytest.raises(StoreError):
        with pg_store.session() as session:
            session.add(TripMember(trip_id="no-such-trip", user_id="no-such-user", role="member"))
