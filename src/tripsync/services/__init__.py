"""
Business services for Trip Sync.

Every function takes a RequestContext first, runs the authorization guard
before touching rows, and reports the rows it wrote as change events.
"""

__all__: list[str] = []
