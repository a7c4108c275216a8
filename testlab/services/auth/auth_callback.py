"""
E-mail confirmation callback.

The confirmation link in a sign-up e-mail redirects back to the page with
the session tokens in the address fragment. This handler turns that one
redirect into a single human-readable status; the page then offers one way
out, back to the sign-in screen.
"""
import logging
from enum import Enum

from pydantic import BaseModel

from ..session import SessionStore
from ...core.messages import Messages
from ...utils.logging_config import log_error_with_context

logger = logging.getLogger(__name__)


class ConfirmationStatus(str, Enum):
    CONFIRMED = "confirmed"
    UNCONFIRMED = "unconfirmed"
    INVALID_LINK = "invalid_link"
    FAILED = "failed"


_STATUS_KEYS = {
    ConfirmationStatus.CONFIRMED: "callback.confirmed",
    ConfirmationStatus.UNCONFIRMED: "callback.unconfirmed",
    ConfirmationStatus.INVALID_LINK: "callback.invalid_link",
    ConfirmationStatus.FAILED: "callback.failed",
}


class ConfirmationResult(BaseModel):
    status: ConfirmationStatus
    message: str
    exit_path: str = "/"


def has_token_marker(fragment: str, marker: str = "access_token") -> bool:
    return bool(fragment) and marker in fragment


class AuthCallbackHandler:
    def __init__(self, session_store: SessionStore, messages: Messages, token_marker: str = "access_token"):
        self.session_store = session_store
        self.messages = messages
        self.token_marker = token_marker

    async def confirm(self, fragment: str) -> ConfirmationResult:
        """Resolve a redirect fragment into a confirmation status."""
        if not has_token_marker(fragment, self.token_marker):
            return self._result(ConfirmationStatus.INVALID_LINK)

        try:
            await self.session_store.recover_session_from_fragment(fragment)
            session = await self.session_store.get_current_session()
        except Exception as e:
            log_error_with_context(e, "Error confirming e-mail", logger)
            return self._result(ConfirmationStatus.FAILED)

        if session is not None:
            return self._result(ConfirmationStatus.CONFIRMED)
        return self._result(ConfirmationStatus.UNCONFIRMED)

    def _result(self, status: ConfirmationStatus) -> ConfirmationResult:
        return ConfirmationResult(status=status, message=self.messages.get(_STATUS_KEYS[status]))
