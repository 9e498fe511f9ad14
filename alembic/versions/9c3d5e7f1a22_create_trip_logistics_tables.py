"""create_trip_logistics_tables

Revision ID: 9c3d5e7f1a22
Revises: 4b1e7c2a9d10
Create Date: 2026-10-19 15:40:02.731554

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9c3d5e7f1a22'
down_revision: Union[str, Sequence[str], None] = '4b1e7c2a9d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TABLE accommodations (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL UNIQUE REFERENCES trips (id) ON DELETE CASCADE,
            name VARCHAR(200),
            address VARCHAR(500),
            check_in TIMESTAMPTZ,
            check_out TIMESTAMPTZ,
            door_code VARCHAR(50),
            wifi_name VARCHAR(100),
            wifi_password VARCHAR(100),
            house_rules TEXT,
            notes TEXT,
            updated_by VARCHAR(64),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    op.execute("""
        CREATE TABLE trip_documents (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            title VARCHAR(200) NOT NULL,
            url VARCHAR(2048) NOT NULL,
            description TEXT,
            category VARCHAR(20) NOT NULL DEFAULT 'other',
            created_by VARCHAR(64) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_trip_documents_category
                CHECK (category IN ('accommodation', 'reservation', 'activity', 'flight', 'other'))
        )
    """)
    op.execute("CREATE INDEX idx_trip_documents_trip_id ON trip_documents (trip_id)")

    op.execute("""
        CREATE TABLE trip_announcements (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            title VARCHAR(200) NOT NULL,
            content TEXT NOT NULL,
            is_pinned BOOLEAN NOT NULL DEFAULT FALSE,
            created_by VARCHAR(64) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX idx_trip_announcements_trip_id ON trip_announcements (trip_id)")

    op.execute("""
        CREATE TABLE user_availability (
            id VARCHAR(36) PRIMARY KEY,
            trip_id VARCHAR(36) NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            user_id VARCHAR(64) NOT NULL,
            start_date DATE NOT NULL,
            end_date DATE NOT NULL,
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_user_availability_dates CHECK (end_date >= start_date)
        )
    """)
    op.execute("CREATE INDEX idx_user_availability_trip_id ON user_availability (trip_id)")


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("user_availability", "trip_announcements", "trip_documents", "accommodations"):
        op.execute(f"DROP TABLE IF EXISTS {table}")
