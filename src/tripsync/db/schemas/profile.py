"""SQLAlchemy ORM model for the profiles table."""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from tripsync.db.schemas.base import Base, TimestampMixin


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"

    # Identity provider user id, not generated locally
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255))
    avatar_url: Mapped[str | None] = mapped_column(String(512))
    venmo_handle: Mapped[str | None] = mapped_column(String(100))
    zelle_email: Mapped[str | None] = mapped_column(String(255))
    cashapp_handle: Mapped[str | None] = mapped_column(String(100))

    __table_args__ = (Index("idx_profiles_email", "email"),)
