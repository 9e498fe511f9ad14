"""create_trip_tables

Revision ID: 4b1e7c2a9d10
Revises: 
Create Date: 2026-10-19 09:12:44.218306

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e7c2a9d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TABLE profiles (
            id VARCHAR(64) PRIMARY KEY,
            email VARCHAR(255) NOT NULL,
            display_name VARCHAR(255),
            avatar_url VARCHAR(512),
            venmo_handle VARCHAR(100),
            zelle_email VARCHAR(255),
            cashapp_handle VARCHAR(100),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX idx_profiles_email ON profiles (email)")

    op.execute("""
        CREATE TABLE trips (
            id VARCHAR(36) PRIMARY KEY,
            title VARCHAR(100) NOT NULL,
            destination VARCHAR(100) NOT NULL,
            start_date DATE NOT NULL,
            end_date DATE NOT NULL,
            description TEXT,
            budget_total DOUBLE PRECISION,
            status VARCHAR(20) NOT NULL DEFAULT 'planning',
            trip_type VARCHAR(30) NOT NULL DEFAULT 'general',
            proposal_enabled BOOLEAN NOT NULL DEFAULT FALSE,
            created_by VARCHAR(64) NOT NULL,
            invite_code VARCHAR(12) NOT NULL UNIQUE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_trips_status CHECK (status IN ('planning', 'confirmed', 'completed', 'cancelled')),
            CONSTRAINT chk_trips_trip_type
                CHECK (trip_type IN ('general', 'golf', 'ski', 'bachelor_party', 'bachelorette_party'))
        )
    """)
    op.execute("CREATE INDEX idx_trips_created_by ON trips (created_by)")

    op.execute("""
        CREATE TABLE trip_members (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            user_id VARCHAR(64) NOT NULL,
            role VARCHAR(20) NOT NULL DEFAULT 'member',
            rsvp_status VARCHAR(20) NOT NULL DEFAULT 'pending',
            budget_cap DOUBLE PRECISION,
            joined_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_trip_members_trip_user UNIQUE (trip_id, user_id),
            CONSTRAINT chk_trip_members_role CHECK (role IN ('organizer', 'member')),
            CONSTRAINT chk_trip_members_rsvp_status
                CHECK (rsvp_status IN ('pending', 'accepted', 'declined', 'maybe'))
        )
    """)
    op.execute("CREATE INDEX idx_trip_members_user_id ON trip_members (user_id)")

    op.execute("""
        CREATE TABLE pending_invites (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            email VARCHAR(255) NOT NULL,
            name VARCHAR(100),
            invited_by VARCHAR(64) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_pending_invites_trip_email UNIQUE (trip_id, email)
        )
    """)

    op.execute("""
        CREATE TABLE budget_categories (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            name VARCHAR(100) NOT NULL,
            estimated_cost DOUBLE PRECISION NOT NULL DEFAULT 0,
            split_type VARCHAR(10) NOT NULL DEFAULT 'equal',
            description TEXT,
            sort_order INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_budget_categories_split_type CHECK (split_type IN ('equal', 'custom', 'none'))
        )
    """)
    op.execute("CREATE INDEX idx_budget_categories_trip_id ON budget_categories (trip_id)")

    op.execute("""
        CREATE TABLE budget_splits (
            id VARCHAR(36) PRIMARY KEY,
            category_id VARCHAR(36) NOT NULL REFERENCES budget_categories (id) ON DELETE CASCADE,
            user_id VARCHAR(64) NOT NULL,
            amount DOUBLE PRECISION NOT NULL DEFAULT 0
        )
    """)
    op.execute("CREATE INDEX idx_budget_splits_category_id ON budget_splits (category_id)")

    op.execute("""
        CREATE TABLE shared_expenses (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            paid_by VARCHAR(64) NOT NULL,
            amount DOUBLE PRECISION NOT NULL,
            description VARCHAR(200) NOT NULL,
            category VARCHAR(50),
            date DATE NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_shared_expenses_amount CHECK (amount > 0)
        )
    """)
    op.execute("CREATE INDEX idx_shared_expenses_trip_id ON shared_expenses (trip_id)")

    op.execute("""
        CREATE TABLE expense_splits (
            id VARCHAR(36) PRIMARY KEY,
            expense_id VARCHAR(36) NOT NULL REFERENCES shared_expenses (id) ON DELETE CASCADE,
            user_id VARCHAR(64) NOT NULL,
            amount DOUBLE PRECISION NOT NULL
        )
    """)
    op.execute("CREATE INDEX idx_expense_splits_expense_id ON expense_splits (expense_id)")

    op.execute("""
        CREATE TABLE itinerary_items (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            date DATE NOT NULL,
            time VARCHAR(8),
            title VARCHAR(200) NOT NULL,
            description TEXT,
            location VARCHAR(200),
            sort_order INTEGER NOT NULL DEFAULT 0,
            created_by VARCHAR(64),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX idx_itinerary_items_trip_date ON itinerary_items (trip_id, date)")

    op.execute("""
        CREATE TABLE comments (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            itinerary_item_id VARCHAR(36) NOT NULL REFERENCES itinerary_items (id) ON DELETE CASCADE,
            user_id VARCHAR(64) NOT NULL,
            text VARCHAR(500) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX idx_comments_trip_id ON comments (trip_id)")
    op.execute("CREATE INDEX idx_comments_itinerary_item_id ON comments (itinerary_item_id)")

    op.execute("""
        CREATE TABLE activity_suggestions (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            suggested_by VARCHAR(64) NOT NULL,
            title VARCHAR(200) NOT NULL,
            description TEXT,
            date DATE,
            time VARCHAR(8),
            location VARCHAR(200),
            status VARCHAR(10) NOT NULL DEFAULT 'pending',
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_activity_suggestions_status CHECK (status IN ('pending', 'approved', 'rejected'))
        )
    """)
    op.execute("CREATE INDEX idx_activity_suggestions_trip_id ON activity_suggestions (trip_id)")

    op.execute("""
        CREATE TABLE supply_items (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            name VARCHAR(200) NOT NULL,
            description TEXT,
            category VARCHAR(30) NOT NULL,
            quantity INTEGER NOT NULL DEFAULT 1,
            status VARCHAR(10) NOT NULL DEFAULT 'needed',
            cost DOUBLE PRECISION,
            claimed_by VARCHAR(64),
            created_by VARCHAR(64) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_supply_items_status CHECK (status IN ('needed', 'claimed', 'packed'))
        )
    """)
    op.execute("CREATE INDEX idx_supply_items_trip_id ON supply_items (trip_id)")

    op.execute("""
        CREATE TABLE golf_tee_times (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            course_name VARCHAR(200) NOT NULL,
            course_location VARCHAR(200),
            tee_time TIMESTAMPTZ NOT NULL,
            num_players INTEGER NOT NULL DEFAULT 4,
            notes TEXT,
            created_by VARCHAR(64) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX idx_golf_tee_times_trip_id ON golf_tee_times (trip_id)")

    op.execute("""
        CREATE TABLE golf_scores (
            id VARCHAR(36) PRIMARY KEY,
            tee_time_id VARCHAR(36) NOT NULL REFERENCES golf_tee_times (id) ON DELETE CASCADE,
            user_id VARCHAR(64) NOT NULL,
            score INTEGER NOT NULL,
            handicap INTEGER,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_golf_scores_tee_time_user UNIQUE (tee_time_id, user_id)
        )
    """)


def downgrade() -> None:
    """Downgrade schema."""
    # Children first so foreign keys never dangle
    for table in (
        "golf_scores",
        "golf_tee_times",
        "supply_items",
        "activity_suggestions",
        "comments",
        "itinerary_items",
        "expense_splits",
        "shared_expenses",
        "budget_splits",
        "budget_categories",
        "pending_invites",
        "trip_members",
        "trips",
        "profiles",
    ):
        op.execute(f"DROP TABLE IF EXISTS {table}")
