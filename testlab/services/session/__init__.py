from .session_store import AuthChangeEvent, SessionStore, Subscription

__all__ = [
    "AuthChangeEvent",
    "SessionStore",
    "Subscription",
]
