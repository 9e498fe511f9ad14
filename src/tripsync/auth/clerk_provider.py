"""Clerk session verification and user lookup."""

import logging
from typing import Any

from clerk_backend_api import Clerk, authenticate_request
from clerk_backend_api.security.types import AuthenticateRequestOptions

from tripsync.errors import AuthenticationError, ErrorCode

from .interface import AuthProvider, AuthUser

logger = logging.getLogger(__name__)


class _BearerRequest:
    """Carries a raw session token in the shape authenticate_request reads."""

    def __init__(self, token: str):
        self.headers = {"Authorization": f"Bearer {token}"}


def _primary_email(user: Any) -> str:
    addresses = user.email_addresses or []
    for address in addresses:
        if address.id == user.primary_email_address_id:
            return address.email_address
    return addresses[0].email_address if addresses else ""


def _display_name(user: Any) -> str:
    return f"{user.first_name or ''} {user.last_name or ''}".strip() or user.username or ""


class ClerkAuthProvider(AuthProvider):
    def __init__(self, secret_key: str, authorized_parties: list[str] | None = None):
        self._client = Clerk(bearer_auth=secret_key)
        self._options = AuthenticateRequestOptions(secret_key=secret_key, authorized_parties=authorized_parties)

    async def verify_token(self, token: str) -> AuthUser:
        """Verify a session token and resolve the caller.

        Session tokens customized to carry ``email`` (plus optional ``name`` and
        ``image_url``) resolve from their claims; others cost one Users API call.
        """
        try:
            request_state = authenticate_request(_BearerRequest(token), self._options)
        except Exception as e:
            raise AuthenticationError(f"Token verification failed: {e}", code=ErrorCode.INVALID_TOKEN) from e

        claims = request_state.payload
        if not request_state.is_signed_in or not claims or not claims.get("sub"):
            raise AuthenticationError(
                f"Token verification failed: {request_state.message or 'unknown'}",
                code=ErrorCode.INVALID_TOKEN,
            )

        user_id = str(claims["sub"])
        if claims.get("email"):
            return AuthUser(
                user_id=user_id,
                email=str(claims["email"]),
                name=str(claims.get("name") or ""),
                avatar_url=claims.get("image_url"),
            )
        return await self.get_user(user_id)

    async def get_user(self, user_id: str) -> AuthUser:
        try:
            user = self._client.users.get(user_id=user_id)
        except Exception as e:
            raise AuthenticationError(f"Failed to fetch user: {e}") from e

        email = _primary_email(user)
        if not email:
            logger.warning("Clerk user %s has no email address", user_id)
        return AuthUser(user_id=user.id, email=email, name=_display_name(user), avatar_url=user.image_url)
