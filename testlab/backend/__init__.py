"""Client for the hosted backend (auth, data, remote procedures)."""

from .client import BackendClient
from .models import APIResponse, AuthResponse, Session, User
from .query import QueryBuilder

__all__ = [
    "APIResponse",
    "AuthResponse",
    "BackendClient",
    "QueryBuilder",
    "Session",
    "User",
]
