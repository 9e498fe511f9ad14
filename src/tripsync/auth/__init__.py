"""Authentication abstraction layer."""

from tripsync.auth.clerk_provider import ClerkAuthProvider
from tripsync.auth.interface import AuthProvider, AuthUser, get_auth_provider

__all__ = ["AuthProvider", "AuthUser", "ClerkAuthProvider", "get_auth_provider"]
