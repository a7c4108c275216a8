"""Wire models returned by the hosted backend's auth and data endpoints."""
import time
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    email_confirmed_at: Optional[str] = None


class Session(BaseModel):
    """An authenticated session. Tokens are opaque to the application."""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    expires_at: Optional[int] = None
    user: Optional[User] = None

    @classmethod
    def from_token_payload(cls, payload: Dict[str, Any]) -> "Session":
        """Build a session from a token grant, filling ``expires_at`` from ``expires_in``."""
        session = cls.model_validate(payload)
        if session.expires_at is None and session.expires_in is not None:
            session.expires_at = int(time.time()) + session.expires_in
        return session

    def is_expired(self, margin_seconds: int = 0) -> bool:
        if self.expires_at is None:
            return False
        return time.time() >= self.expires_at - margin_seconds


class AuthResponse(BaseModel):
    user: Optional[User] = None
    session: Optional[Session] = None


class APIResponse(BaseModel):
    data: Any = None
    count: Optional[int] = None
