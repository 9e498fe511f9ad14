"""Itinerary, comments, suggestions, supplies, golf, budget, profile and invite services."""

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import func, select

from tripsync.db import Comment, ItineraryItem
from tripsync.errors import ForbiddenError, NotFoundError, ValidationError
from tripsync.models import (
    CreateBudgetCategoryRequest,
    CreateCommentRequest,
    CreateItineraryItemRequest,
    CreateSuggestionRequest,
    CreateSupplyRequest,
    CreateTeeTimeRequest,
    CreateTripRequest,
    EditSuggestionRequest,
    JoinTripRequest,
    PaymentProfile,
    ProposalToggleRequest,
    RecordScoreRequest,
    UpdateBudgetCategoryRequest,
    UpdateSuggestionStatusRequest,
    UpdateSupplyRequest,
)
from tripsync.services import (
    budget,
    comments,
    golf,
    invites,
    itinerary,
    profile,
    suggestions,
    supplies,
    trips,
)


@pytest.fixture
def trip(make_ctx, alice, bob, future_dates):
    start, end = future_dates
    record = trips.create_trip(
        make_ctx(alice),
        CreateTripRequest(title="Pebble Trip", destination="Monterey", start_date=start, end_date=end, trip_type="golf"),
    )
    trips.join_trip(make_ctx(bob), record.id, JoinTripRequest())
    return record


@pytest.fixture
def item(trip, make_ctx, bob):
    return itinerary.create_item(
        make_ctx(bob), trip.id, CreateItineraryItemRequest(date=trip.start_date, time="09:00", title="Breakfast")
    )


def _count(store, model):
    with store.session() as session:
        return session.scalar(select(func.count()).select_from(model))


class TestItineraryAndComments:
    def test_items_sorted_by_date_then_time(self, trip, item, make_ctx, alice):
        ctx = make_ctx(alice)
        itinerary.create_item(ctx, trip.id, CreateItineraryItemRequest(date=trip.start_date, time="07:30", title="Tee off"))
        itinerary.create_item(
            ctx, trip.id, CreateItineraryItemRequest(date=trip.end_date, time="06:00", title="Drive home")
        )
        assert [i.title for i in itinerary.list_items(ctx, trip.id)] == ["Tee off", "Breakfast", "Drive home"]

    def test_comment_only_on_items_of_this_trip(self, trip, item, make_ctx, bob):
        with pytest.raises(NotFoundError, match="Itinerary item not found"):
            comments.create_comment(make_ctx(bob), trip.id, CreateCommentRequest(itinerary_item_id="other", text="hi"))

    def test_only_author_deletes_comment(self, trip, item, make_ctx, alice, bob):
        comment = comments.create_comment(
            make_ctx(bob), trip.id, CreateCommentRequest(itinerary_item_id=item.id, text="Who's driving?")
        )
        assert comment.author.display_name == "Bob Member"

        with pytest.raises(ForbiddenError, match="your own comments"):
            comments.delete_comment(make_ctx(alice), trip.id, comment.id)
        comments.delete_comment(make_ctx(bob), trip.id, comment.id)
        assert comments.list_comments(make_ctx(bob), trip.id, item.id) == []

    def test_deleting_item_removes_its_comments(self, trip, item, make_ctx, bob, store):
        ctx = make_ctx(bob)
        comments.create_comment(ctx, trip.id, CreateCommentRequest(itinerary_item_id=item.id, text="Coffee first"))
        assert _count(store, Comment) == 1

        itinerary.delete_item(ctx, trip.id, item.id)

        assert _count(store, Comment) == 0


class TestSuggestions:
    def test_approval_copies_into_itinerary_once(self, trip, make_ctx, alice, bob, store, publisher):
        suggestion = suggestions.create_suggestion(
            make_ctx(bob), trip.id, CreateSuggestionRequest(title="Whale watching", date=trip.start_date, time="14:00")
        )
        assert suggestion.status == "pending"

        ctx = make_ctx(alice)
        approved = suggestions.review_suggestion(
            ctx, trip.id, suggestion.id, UpdateSuggestionStatusRequest(status="approved")
        )
        assert approved.status == "approved"
        assert publisher.tables()[-2:] == [("activity_suggestions", "UPDATE"), ("itinerary_items", "INSERT")]

        suggestions.review_suggestion(ctx, trip.id, suggestion.id, UpdateSuggestionStatusRequest(status="approved"))

        with store.session() as session:
            items = session.scalars(select(ItineraryItem).where(ItineraryItem.trip_id == trip.id)).all()
            assert [(i.title, i.created_by) for i in items] == [("Whale watching", "bob")]

    def test_approval_needs_a_date(self, trip, make_ctx, alice, bob):
        suggestion = suggestions.create_suggestion(make_ctx(bob), trip.id, CreateSuggestionRequest(title="Spa day"))
        with pytest.raises(ValidationError, match="needs a date"):
            suggestions.review_suggestion(
                make_ctx(alice), trip.id, suggestion.id, UpdateSuggestionStatusRequest(status="approved")
            )

    def test_members_cannot_review(self, trip, make_ctx, bob):
        suggestion = suggestions.create_suggestion(make_ctx(bob), trip.id, CreateSuggestionRequest(title="Spa day"))
        with pytest.raises(ForbiddenError, match="Only organizers can approve/reject"):
            suggestions.review_suggestion(
                make_ctx(bob), trip.id, suggestion.id, UpdateSuggestionStatusRequest(status="rejected")
            )

    def test_edit_is_owner_only_and_delete_allows_organizer(self, trip, make_ctx, alice, bob):
        suggestion = suggestions.create_suggestion(make_ctx(bob), trip.id, CreateSuggestionRequest(title="Spa day"))
        with pytest.raises(ForbiddenError, match="your own suggestions"):
            suggestions.edit_suggestion(make_ctx(alice), trip.id, suggestion.id, EditSuggestionRequest(title="Nap"))

        edited = suggestions.edit_suggestion(
            make_ctx(bob), trip.id, suggestion.id, EditSuggestionRequest(location="Carmel")
        )
        assert (edited.title, edited.location) == ("Spa day", "Carmel")

        suggestions.delete_suggestion(make_ctx(alice), trip.id, suggestion.id)
        assert suggestions.list_suggestions(make_ctx(bob), trip.id) == []


class TestSupplies:
    def test_claim_and_pack(self, trip, make_ctx, alice, bob):
        ctx = make_ctx(bob)
        supply = supplies.create_supply(ctx, trip.id, CreateSupplyRequest(name="Cooler", category="gear_equipment"))
        assert supply.status == "needed"
        assert supply.claimer is None

        claimed = supplies.update_supply(ctx, trip.id, supply.id, UpdateSupplyRequest(status="claimed", claimed_by="bob"))
        assert claimed.claimer.display_name == "Bob Member"

        packed = supplies.update_supply(make_ctx(alice), trip.id, supply.id, UpdateSupplyRequest(status="packed"))
        assert packed.status == "packed"

    def test_claimer_must_be_member(self, trip, make_ctx, bob):
        ctx = make_ctx(bob)
        supply = supplies.create_supply(ctx, trip.id, CreateSupplyRequest(name="Cooler", category="gear_equipment"))
        with pytest.raises(ValidationError, match="claimed by trip members"):
            supplies.update_supply(ctx, trip.id, supply.id, UpdateSupplyRequest(claimed_by="mallory"))


class TestGolf:
    def test_recording_twice_replaces_own_score(self, trip, make_ctx, bob, publisher):
        ctx = make_ctx(bob)
        tee = golf.create_tee_time(
            ctx, trip.id, CreateTeeTimeRequest(course_name="Spyglass Hill", tee_time=datetime(2030, 6, 1, 8, 0))
        )
        golf.record_score(ctx, trip.id, RecordScoreRequest(tee_time_id=tee.id, score=95))
        score = golf.record_score(ctx, trip.id, RecordScoreRequest(tee_time_id=tee.id, score=89, handicap=18))

        assert (score.user_name, score.score, score.course_name) == ("Bob Member", 89, "Spyglass Hill")
        assert [s.score for s in golf.list_scores(ctx, trip.id)] == [89]
        assert publisher.events[-1].record["trip_id"] == trip.id
        assert publisher.events[-1].kind.value == "UPDATE"

    def test_unknown_tee_time(self, trip, make_ctx, bob):
        with pytest.raises(NotFoundError, match="Tee time not found"):
            golf.record_score(make_ctx(bob), trip.id, RecordScoreRequest(tee_time_id="missing", score=80))


class TestBudget:
    def test_switching_away_from_custom_drops_splits(self, trip, make_ctx, alice):
        ctx = make_ctx(alice)
        category = budget.create_category(
            ctx,
            trip.id,
            CreateBudgetCategoryRequest(
                name="Green fees",
                estimated_cost=400,
                split_type="custom",
                custom_splits=[{"user_id": "alice", "amount": 250}, {"user_id": "bob", "amount": 150}],
            ),
        )
        assert len(category.splits) == 2

        updated = budget.update_category(ctx, trip.id, category.id, UpdateBudgetCategoryRequest(split_type="equal"))
        assert updated.split_type == "equal"
        assert updated.splits == []

    def test_members_cannot_edit_budget(self, trip, make_ctx, bob):
        with pytest.raises(ForbiddenError, match="Only organizers can add budget categories"):
            budget.create_category(
                make_ctx(bob), trip.id, CreateBudgetCategoryRequest(name="Lodging", estimated_cost=900)
            )

    def test_delete_unknown_category(self, trip, make_ctx, alice):
        with pytest.raises(NotFoundError):
            budget.delete_category(make_ctx(alice), trip.id, "missing")


def test_payment_profile_update(make_ctx, alice, publisher):
    ctx = make_ctx(alice)
    assert profile.get_payment_profile(ctx) == PaymentProfile()

    updated = profile.update_payment_profile(ctx, PaymentProfile(venmo_handle="@alice", zelle_email=" "))

    assert updated.venmo_handle == "@alice"
    assert updated.zelle_email is None
    assert publisher.tables()[-1] == ("profiles", "UPDATE")


class TestInvites:
    def test_invite_lookup(self, trip, store):
        summary = invites.get_invite_trip(trip.invite_code, store)
        assert (summary.id, summary.title) == (trip.id, "Pebble Trip")

    def test_malformed_code_never_reaches_store(self):
        with pytest.raises(NotFoundError):
            invites.get_invite_trip("bad code!")

    def test_unknown_code(self, store):
        with pytest.raises(NotFoundError):
            invites.get_invite_trip("A" * 12, store)

    def test_proposal_hidden_until_enabled(self, trip, make_ctx, alice, store):
        with pytest.raises(NotFoundError, match="Proposal not available"):
            invites.get_proposal(trip.invite_code, store)

        ctx = make_ctx(alice)
        trips.set_proposal_enabled(ctx, trip.id, ProposalToggleRequest(proposal_enabled=True))
        budget.create_category(ctx, trip.id, CreateBudgetCategoryRequest(name="Lodging", estimated_cost=1200))
        for day in range(12):
            itinerary.create_item(
                ctx,
                trip.id,
                CreateItineraryItemRequest(date=trip.start_date + timedelta(days=day), title=f"Round {day + 1}"),
            )

        proposal = invites.get_proposal(trip.invite_code, store)

        assert proposal.trip.member_count == 2
        assert proposal.trip.accepted_count == 2
        assert [c.name for c in proposal.categories] == ["Lodging"]
        assert len(proposal.itinerary) == invites.PROPOSAL_ITINERARY_LIMIT
        assert proposal.itinerary[0].title == "Round 1"
        assert isinstance(proposal.itinerary[0].date, date)
