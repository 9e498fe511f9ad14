"""
Core business logic package for Trip Sync.

Validation, persistence, authorization, change publishing and the client-side
live-synced collections live here. Lambda handlers in src/handlers/ are thin
wrappers that call into tripsync/.
"""

__all__: list[str] = []
