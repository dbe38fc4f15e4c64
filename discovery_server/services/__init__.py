"""Backing logic: catalog loading and session stores."""

from .catalog_loader import CatalogError, CatalogLoader
from .session_store import InMemorySessionStore, JsonSessionStore, SessionRepository

__all__ = [
    "CatalogError",
    "CatalogLoader",
    "InMemorySessionStore",
    "JsonSessionStore",
    "SessionRepository",
]
