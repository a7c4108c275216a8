"""Authentication services: e-mail confirmation callback."""

from .auth_callback import AuthCallbackHandler, ConfirmationResult, ConfirmationStatus, has_token_marker

__all__ = [
    "AuthCallbackHandler",
    "ConfirmationResult",
    "ConfirmationStatus",
    "has_token_marker",
]
