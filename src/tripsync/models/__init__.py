"""
Pydantic models for Trip Sync: request schemas and flattened read records.
"""

from tripsync.models.announcement import AnnouncementRecord, CreateAnnouncementRequest, PinAnnouncementRequest
from tripsync.models.availability import AvailabilityRecord, CreateAvailabilityRequest
from tripsync.models.budget import (
    BudgetCategoryRecord,
    BudgetSplitRecord,
    CreateBudgetCategoryRequest,
    SplitInput,
    UpdateBudgetCategoryRequest,
)
from tripsync.models.common import UNKNOWN_USER, UserSummary, user_summary
from tripsync.models.expense import (
    BalanceRecord,
    CreateExpenseRequest,
    ExpenseRecord,
    ExpenseSplitRecord,
    SettlementRecord,
)
from tripsync.models.golf import CreateTeeTimeRequest, RecordScoreRequest, ScoreRecord, TeeTimeRecord
from tripsync.models.itinerary import (
    CommentRecord,
    CreateCommentRequest,
    CreateItineraryItemRequest,
    ItineraryItemRecord,
    UpdateItineraryItemRequest,
)
from tripsync.models.member import AddMemberRequest, BudgetCapRequest, PendingInviteRecord, UpdateMemberRequest
from tripsync.models.profile import PaymentProfile
from tripsync.models.stay import (
    AccommodationRecord,
    AccommodationRequest,
    CreateDocumentRequest,
    DocumentRecord,
)
from tripsync.models.suggestion import (
    CreateSuggestionRequest,
    EditSuggestionRequest,
    SuggestionRecord,
    UpdateSuggestionStatusRequest,
)
from tripsync.models.supply import CreateSupplyRequest, SupplyRecord, UpdateSupplyRequest
from tripsync.models.trip import (
    CreateTripRequest,
    JoinTripRequest,
    MemberRecord,
    ProposalToggleRequest,
    ProposalView,
    TripRecord,
    TripSummary,
    UpdateTripRequest,
)

__all__ = [
    "AccommodationRecord",
    "AccommodationRequest",
    "AddMemberRequest",
    "AnnouncementRecord",
    "AvailabilityRecord",
    "BalanceRecord",
    "BudgetCapRequest",
    "BudgetCategoryRecord",
    "BudgetSplitRecord",
    "CommentRecord",
    "CreateAnnouncementRequest",
    "CreateAvailabilityRequest",
    "CreateBudgetCategoryRequest",
    "CreateCommentRequest",
    "CreateDocumentRequest",
    "CreateExpenseRequest",
    "CreateItineraryItemRequest",
    "CreateSuggestionRequest",
    "CreateSupplyRequest",
    "CreateTeeTimeRequest",
    "CreateTripRequest",
    "DocumentRecord",
    "EditSuggestionRequest",
    "ExpenseRecord",
    "ExpenseSplitRecord",
    "ItineraryItemRecord",
    "JoinTripRequest",
    "MemberRecord",
    "PaymentProfile",
    "PendingInviteRecord",
    "PinAnnouncementRequest",
    "ProposalToggleRequest",
    "ProposalView",
    "RecordScoreRequest",
    "ScoreRecord",
    "SettlementRecord",
    "SplitInput",
    "SuggestionRecord",
    "SupplyRecord",
    "TeeTimeRecord",
    "TripRecord",
    "TripSummary",
    "UNKNOWN_USER",
    "UpdateBudgetCategoryRequest",
    "UpdateItineraryItemRequest",
    "UpdateMemberRequest",
    "UpdateSuggestionStatusRequest",
    "UpdateSupplyRequest",
    "UserSummary",
    "user_summary",
]
