from abc import ABC, abstractmethod

from pydantic import BaseModel, field_validator


class AuthUser(BaseModel):
    """The signed-in caller as the identity service reports them.

    ``name`` may be empty; profiles fall back to the email for display.
    """

    user_id: str
    email: str
    name: str = ""
    avatar_url: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class AuthProvider(ABC):
    @abstractmethod
    async def verify_token(self, token: str) -> AuthUser: ...

    @abstractmethod
    async def get_user(self, user_id: str) -> AuthUser: ...


def get_auth_provider() -> AuthProvider:
    from tripsync.config import get_config

    config = get_config()
    if not config.clerk_secret_key:
        raise ValueError("CLERK_SECRET_KEY not configured")

    from tripsync.auth.clerk_provider import ClerkAuthProvider

    return ClerkAuthProvider(
        secret_key=config.clerk_secret_key,
        authorized_parties=list(config.clerk_authorized_parties) or None,
    )
