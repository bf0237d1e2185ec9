"""API route handlers."""

from lookin.api import (
    auth,
    catalog,
    profiles,
    find,
    listings,
    conversations,
    uploads,
    safety,
    websocket,
)

__all__ = [
    "auth",
    "catalog",
    "profiles",
    "find",
    "listings",
    "conversations",
    "uploads",
    "safety",
    "websocket",
]
