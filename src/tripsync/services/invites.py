"""
Public, unauthenticated trip views keyed by invite code.

Malformed codes are rejected before the store is queried.
"""

from sqlalchemy import select

from tripsync.clients import get_store
from tripsync.db.schemas.budget import BudgetCategory
from tripsync.db.schemas.itinerary import ItineraryItem
from tripsync.db.schemas.trip import Trip
from tripsync.db.store import Store
from tripsync.errors import NotFoundError
from tripsync.models.trip import ProposalCategory, ProposalItineraryItem, ProposalTrip, ProposalView, TripSummary
from tripsync.utils.invite_code import is_valid_invite_code

PROPOSAL_ITINERARY_LIMIT = 10


def get_invite_trip(invite_code: str, store: Store | None = None) -> TripSummary:
    if not is_valid_invite_code(invite_code):
        raise NotFoundError("Trip not found or invite code is invalid")
    store = store or get_store()
    with store.session() as session:
        trip = session.scalar(select(Trip).where(Trip.invite_code == invite_code))
        if trip is None:
            raise NotFoundError("Trip not found or invite code is invalid")
        return TripSummary.from_row(trip)


def get_proposal(invite_code: str, store: Store | None = None) -> ProposalView:
    """Shareable pitch for a trip: headline facts, budget categories and the first itinerary items."""
    if not is_valid_invite_code(invite_code):
        raise NotFoundError("Trip not found")
    store = store or get_store()
    with store.session() as session:
        trip = session.scalar(select(Trip).where(Trip.invite_code == invite_code))
        if trip is None:
            raise NotFoundError("Trip not found")
        if not trip.proposal_enabled:
            raise NotFoundError("Proposal not available")

        categories = session.scalars(
            select(BudgetCategory).where(BudgetCategory.trip_id == trip.id).order_by(BudgetCategory.created_at)
        ).all()
        items = session.scalars(
            select(ItineraryItem)
            .where(ItineraryItem.trip_id == trip.id)
            .order_by(ItineraryItem.date, ItineraryItem.time)
            .limit(PROPOSAL_ITINERARY_LIMIT)
        ).all()

        return ProposalView(
            trip=ProposalTrip(
                title=trip.title,
                destination=trip.destination,
                start_date=trip.start_date,
                end_date=trip.end_date,
                description=trip.description,
                budget_total=trip.budget_total,
                trip_type=trip.trip_type,
                status=trip.status,
                invite_code=trip.invite_code,
                member_count=len(trip.members),
                accepted_count=sum(1 for m in trip.members if m.rsvp_status == "accepted"),
            ),
            categories=[
                ProposalCategory(id=c.id, name=c.name, estimated_cost=c.estimated_cost, split_type=c.split_type)
                for c in categories
            ],
            itinerary=[
                ProposalItineraryItem(
                    id=i.id, title=i.title, description=i.description, date=i.date, time=i.time, location=i.location
                )
                for i in items
            ],
        )
