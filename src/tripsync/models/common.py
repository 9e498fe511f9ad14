"""Shared read-record pieces: flattened user profiles and the unknown-user sentinel."""

from typing import Any

from pydantic import BaseModel, ConfigDict

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class UserSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: str = ""
    display_name: str | None = None

    @property
    def name(self) -> str:
        return self.display_name or self.email or "Unknown"

    @property
    def known(self) -> bool:
        return bool(self.id)


UNKNOWN_USER = UserSummary(id="", email="", display_name="Unknown")


def user_summary(profile: Any | None) -> UserSummary:
    """Flatten a joined profile row; an absent join becomes UNKNOWN_USER."""
    if profile is None:
        return UNKNOWN_USER
    return UserSummary(id=profile.id, email=profile.email or "", display_name=profile.display_name)
