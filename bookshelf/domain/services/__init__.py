"""
Domain services package.

Services orchestrate domain logic that doesn't naturally belong to a single
entity. They coordinate between entities and ports to implement use cases.

Following Hexagonal Architecture principles, services depend only on domain
entities, value objects, and port protocols (never on concrete implementations).
"""

from .auth_service import AuthService
from .catalog_service import CatalogService
from .preferences import load_stored_preference, resolve_preferences

__all__ = [
    "AuthService",
    "CatalogService",
    "load_stored_preference",
    "resolve_preferences",
]
