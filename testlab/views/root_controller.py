"""
Root controller.

Decides what the page shows: the e-mail confirmation page when the address
fragment carries a token, a loading screen until the session store has
reported the initial session, then either the dashboard or the sign-in
form. It is the session store's one subscriber and re-renders the whole
shell on every session change.
"""
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .dashboard_shell import DashboardShell
from ..backend import Session, User
from ..core.messages import Messages
from ..services.auth import AuthCallbackHandler, ConfirmationResult, has_token_marker
from ..services.session import AuthChangeEvent, SessionStore, Subscription
from ..utils.logging_config import get_logger

ShellFactory = Callable[[User], DashboardShell]


class Screen(str, Enum):
    CONFIRM_EMAIL = "confirm_email"
    LOADING = "loading"
    DASHBOARD = "dashboard"
    SIGN_IN = "sign_in"


class RootController:
    def __init__(
        self,
        session_store: SessionStore,
        callback_handler: AuthCallbackHandler,
        messages: Messages,
        shell_factory: ShellFactory,
    ):
        self.session_store = session_store
        self.callback_handler = callback_handler
        self.messages = messages
        self.shell_factory = shell_factory
        self.logger = get_logger(__name__)

        self.session: Optional[Session] = None
        self.initialized = False
        self.shell: Optional[DashboardShell] = None
        self.form_error: Optional[str] = None
        self.submitting = False
        self._subscription: Optional[Subscription] = None

    # --- lifecycle -------------------------------------------------------

    def mount(self) -> None:
        if self._subscription is not None and self._subscription.active:
            return
        self._subscription = self.session_store.on_session_change(self._on_session_change)

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self.shell is not None:
            self.shell.teardown()
            self.shell = None

    @property
    def mounted(self) -> bool:
        return self._subscription is not None and self._subscription.active

    async def _on_session_change(self, event: AuthChangeEvent, session: Optional[Session]) -> None:
        self.logger.debug(f"Root controller received {event.value}")
        self.initialized = True
        await self._apply_session(session)

    async def _apply_session(self, session: Optional[Session]) -> None:
        self.session = session
        user = session.user if session else None

        if user is None:
            if self.shell is not None:
                self.shell.teardown()
                self.shell = None
            return

        if self.shell is not None and self.shell.user.id == user.id:
            self.shell.user = user
            return

        if self.shell is not None:
            self.shell.teardown()
        self.shell = self.shell_factory(user)
        await self.shell.enter()

    async def sync_session(self) -> Optional[DashboardShell]:
        """Bring the shell in line with the store's session, refreshing it if expired."""
        session = await self.session_store.get_current_session()
        self.initialized = True
        await self._apply_session(session)
        return self.shell

    # --- screens ---------------------------------------------------------

    def screen(self, fragment: str = "") -> Screen:
        if has_token_marker(fragment, self.callback_handler.token_marker):
            return Screen.CONFIRM_EMAIL
        if not self.initialized:
            return Screen.LOADING
        if self.session is not None and self.shell is not None:
            return Screen.DASHBOARD
        return Screen.SIGN_IN

    async def confirm_email(self, fragment: str) -> ConfirmationResult:
        return await self.callback_handler.confirm(fragment)

    # --- sign-in form ----------------------------------------------------

    async def _authenticate(self, action: Callable[[], Any]) -> bool:
        self.form_error = None
        self.submitting = True
        try:
            session = await action()
        except Exception as e:
            self.form_error = self.messages.for_error(e, "auth.failed")
            return False
        finally:
            self.submitting = False

        self.initialized = True
        await self._apply_session(session)
        return True

    async def sign_in(self, email: str, password: str) -> bool:
        return await self._authenticate(lambda: self.session_store.sign_in(email, password))

    async def sign_up(self, email: str, password: str) -> bool:
        """Register and sign straight in; a failed sign-in step is what the form reports."""
        return await self._authenticate(lambda: self.session_store.sign_up(email, password))

    async def sign_out(self) -> None:
        await self.session_store.sign_out()
        self.form_error = None
        await self._apply_session(None)

    def snapshot(self, fragment: str = "") -> Dict[str, Any]:
        screen = self.screen(fragment)
        return {
            "screen": screen.value,
            "form_error": self.form_error,
            "submitting": self.submitting,
            "loading_message": self.messages.get("loading") if screen == Screen.LOADING else None,
            "dashboard": self.shell.snapshot() if screen == Screen.DASHBOARD and self.shell else None,
        }
