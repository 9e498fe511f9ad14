"""Unit tests for request validation and read records."""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from tripsync.models import (
    UNKNOWN_USER,
    AddMemberRequest,
    CreateCommentRequest,
    CreateExpenseRequest,
    CreateTeeTimeRequest,
    CreateTripRequest,
    PaymentProfile,
    ProposalToggleRequest,
    RecordScoreRequest,
    ScoreRecord,
    UpdateSuggestionStatusRequest,
)
from tripsync.models.common import user_summary


def _future(days: int) -> date:
    return date.today() + timedelta(days=days)


class TestCreateTripRequest:
    def test_valid_trip(self):
        req = CreateTripRequest(title="Lake Weekend", destination="Tahoe", start_date=_future(10), end_date=_future(12))
        assert req.trip_type == "general"

    def test_start_date_must_be_in_future(self):
        with pytest.raises(ValidationError, match="Start date must be in the future"):
            CreateTripRequest(title="Lake Weekend", destination="Tahoe", start_date=_future(-1), end_date=_future(2))

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="End date must be after start date"):
            CreateTripRequest(title="Lake Weekend", destination="Tahoe", start_date=_future(10), end_date=_future(5))

    def test_same_day_trip_allowed(self):
        req = CreateTripRequest(title="Day Trip", destination="Napa", start_date=_future(7), end_date=_future(7))
        assert req.start_date == req.end_date

    def test_short_title_rejected(self):
        with pytest.raises(ValidationError):
            CreateTripRequest(title="Go", destination="Tahoe", start_date=_future(10), end_date=_future(12))

    def test_unknown_trip_type_rejected(self):
        with pytest.raises(ValidationError):
            CreateTripRequest(
                title="Lake Weekend", destination="Tahoe", start_date=_future(10), end_date=_future(12), trip_type="cruise"
            )


def test_proposal_toggle_requires_real_boolean():
    assert ProposalToggleRequest(proposal_enabled=True).proposal_enabled is True
    with pytest.raises(ValidationError):
        ProposalToggleRequest(proposal_enabled="yes")


def test_add_member_lowercases_email():
    assert AddMemberRequest(email="  Dana@Example.COM ").email == "dana@example.com"


def test_add_member_rejects_bad_email():
    with pytest.raises(ValidationError):
        AddMemberRequest(email="not-an-email")


def test_add_member_rejects_non_string_email():
    with pytest.raises(ValidationError):
        AddMemberRequest(email=42)


class TestCreateExpenseRequest:
    def test_defaults_to_equal_split_today(self):
        req = CreateExpenseRequest(description="Groceries", amount=90)
        assert req.split_type == "equal"
        assert req.date is not None

    def test_custom_split_must_sum_to_amount(self):
        with pytest.raises(ValidationError, match="add up"):
            CreateExpenseRequest(
                description="Dinner",
                amount=100,
                split_type="custom",
                custom_splits=[{"user_id": "a", "amount": 50}, {"user_id": "b", "amount": 40}],
            )

    def test_custom_split_within_a_cent_accepted(self):
        req = CreateExpenseRequest(
            description="Dinner",
            amount=100,
            split_type="custom",
            custom_splits=[{"user_id": "a", "amount": 33.33}, {"user_id": "b", "amount": 66.67}],
        )
        assert len(req.custom_splits) == 2

    def test_custom_split_requires_splits(self):
        with pytest.raises(ValidationError, match="custom_splits is required"):
            CreateExpenseRequest(description="Dinner", amount=100, split_type="custom")

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            CreateExpenseRequest(description="Nothing", amount=0)


def test_comment_text_is_stripped_and_required():
    assert CreateCommentRequest(itinerary_item_id="i1", text="  see you there ").text == "see you there"
    with pytest.raises(ValidationError):
        CreateCommentRequest(itinerary_item_id="i1", text="   ")


def test_suggestion_status_only_approved_or_rejected():
    assert UpdateSuggestionStatusRequest(status="approved").status == "approved"
    with pytest.raises(ValidationError):
        UpdateSuggestionStatusRequest(status="pending")


def test_tee_time_player_bounds():
    tee = datetime(2030, 5, 1, 8, 30)
    assert CreateTeeTimeRequest(course_name="Pebble Beach", tee_time=tee).num_players == 4
    with pytest.raises(ValidationError):
        CreateTeeTimeRequest(course_name="Pebble Beach", tee_time=tee, num_players=9)


def test_score_bounds():
    assert RecordScoreRequest(tee_time_id="t", score=72, handicap=-10).handicap == -10
    with pytest.raises(ValidationError):
        RecordScoreRequest(tee_time_id="t", score=0)
    with pytest.raises(ValidationError):
        RecordScoreRequest(tee_time_id="t", score=80, handicap=55)


def test_payment_profile_blank_handles_become_none():
    profile = PaymentProfile(venmo_handle="  ", zelle_email="a@b.co", cashapp_handle="")
    assert profile.venmo_handle is None
    assert profile.zelle_email == "a@b.co"
    assert profile.cashapp_handle is None


def test_missing_profile_join_is_unknown_user():
    assert user_summary(None) is UNKNOWN_USER
    assert UNKNOWN_USER.name == "Unknown"
    assert not UNKNOWN_USER.known


def test_user_summary_name_falls_back_to_email():
    summary = user_summary(SimpleNamespace(id="u1", email="u1@example.com", display_name=None))
    assert summary.name == "u1@example.com"
    assert summary.known


def test_score_record_without_joins():
    row = SimpleNamespace(
        id="s1", user_id="u1", player=None, score=88, handicap=None, tee_time_id="t1", tee_time=None
    )
    record = ScoreRecord.from_row(row)
    assert record.user_name == "Unknown"
    assert record.course_name == "Unknown Course"
