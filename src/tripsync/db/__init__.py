"""
Database ORM models and clients for Trip Sync.

Importing this package registers all models on Base.metadata,
which Alembic needs for autogenerate.
"""

from tripsync.db.schemas.announcement import TripAnnouncement
from tripsync.db.schemas.availability import UserAvailability
from tripsync.db.schemas.base import Base
from tripsync.db.schemas.budget import BudgetCategory, BudgetSplit
from tripsync.db.schemas.expense import ExpenseSplit, SharedExpense
from tripsync.db.schemas.golf import GolfScore, GolfTeeTime
from tripsync.db.schemas.itinerary import Comment, ItineraryItem
from tripsync.db.schemas.profile import Profile
from tripsync.db.schemas.stay import Accommodation, TripDocument
from tripsync.db.schemas.suggestion import ActivitySuggestion
from tripsync.db.schemas.supply import SupplyItem
from tripsync.db.schemas.trip import PendingInvite, Trip, TripMember
from tripsync.db.store import Store

__all__ = [
    "Accommodation",
    "ActivitySuggestion",
    "Base",
    "BudgetCategory",
    "BudgetSplit",
    "Comment",
    "ExpenseSplit",
    "GolfScore",
    "GolfTeeTime",
    "ItineraryItem",
    "PendingInvite",
    "Profile",
    "SharedExpense",
    "Store",
    "SupplyItem",
    "Trip",
    "TripAnnouncement",
    "TripDocument",
    "TripMember",
    "UserAvailability",
]
