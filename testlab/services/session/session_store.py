"""
Process-wide session store.

Owns the one authenticated session of this front end and tells subscribers
about every change. Subscribers get a ``Subscription`` handle that refers
back to the store only weakly; releasing the handle on teardown is what
keeps callbacks from leaking.
"""
import asyncio
import weakref
from enum import Enum
from typing import Any, Callable, List, Optional, Set
from urllib.parse import parse_qsl

from ...backend import BackendClient, Session, User
from ...core.errors import AuthApiError, BackendError
from ...utils.logging_config import get_logger


class AuthChangeEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


SessionCallback = Callable[[AuthChangeEvent, Optional[Session]], Any]


class Subscription:
    """Handle returned by ``SessionStore.on_session_change``."""

    def __init__(self, store: "SessionStore", callback: SessionCallback):
        self._store_ref = weakref.ref(store)
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        store = self._store_ref()
        if store is not None:
            store._remove(self)


class SessionStore:
    def __init__(self, backend: BackendClient, refresh_margin_seconds: int = 10):
        self.logger = get_logger(__name__)
        self._backend = backend
        self._refresh_margin = refresh_margin_seconds
        self._session: Optional[Session] = None
        self._subscriptions: List[Subscription] = []
        self._pending: Set[asyncio.Future] = set()
        self._refresh_lock = asyncio.Lock()

    # --- subscriptions -----------------------------------------------------

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Subscribe to session changes.

        The new subscriber immediately receives ``INITIAL_SESSION`` with the
        current session (possibly ``None``). Delivery is always scheduled on
        the running event loop, never made inline.
        """
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        self._schedule(subscription, AuthChangeEvent.INITIAL_SESSION, self._session)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _schedule(self, subscription: Subscription, event: AuthChangeEvent, session: Optional[Session]) -> None:
        loop = asyncio.get_running_loop()
        loop.call_soon(self._deliver, subscription, event, session)

    def _deliver(self, subscription: Subscription, event: AuthChangeEvent, session: Optional[Session]) -> None:
        if not subscription.active:
            return
        try:
            result = subscription.callback(event, session)
        except Exception:
            self.logger.exception(f"Session subscriber failed handling {event.value}")
            return
        if asyncio.iscoroutine(result):
            task = asyncio.ensure_future(result)
            self._pending.add(task)
            task.add_done_callback(self._finish_callback)

    def _finish_callback(self, task: asyncio.Future) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error("Async session subscriber failed", exc_info=task.exception())

    def _set_session(self, session: Optional[Session], event: AuthChangeEvent) -> None:
        self._session = session
        self._backend.set_access_token(session.access_token if session else None)
        self.logger.info(f"Session change: {event.value}")
        for subscription in list(self._subscriptions):
            self._schedule(subscription, event, session)

    # --- session lifecycle ---------------------------------------------------

    async def get_current_session(self) -> Optional[Session]:
        """Return the live session, refreshing it once if it has expired."""
        session = self._session
        if session is None or not session.is_expired(self._refresh_margin):
            return session

        async with self._refresh_lock:
            # A concurrent caller may have refreshed or cleared it meanwhile
            session = self._session
            if session is None or not session.is_expired(self._refresh_margin):
                return session

            if not session.refresh_token:
                self.logger.info("Session expired without refresh token")
                self._set_session(None, AuthChangeEvent.SIGNED_OUT)
                return None

            try:
                refreshed = await self._backend.auth.refresh_session(session.refresh_token)
            except AuthApiError as e:
                self.logger.warning(f"Session refresh rejected: {e.message}")
                if self._session is session:
                    self._set_session(None, AuthChangeEvent.SIGNED_OUT)
                return self._session

            if refreshed.user is None:
                refreshed.user = session.user
            if self._session is not session:
                # Signed in or out while the refresh was in flight
                self.logger.debug("Discarding refresh of a replaced session")
                return self._session
            self._set_session(refreshed, AuthChangeEvent.TOKEN_REFRESHED)
            return refreshed

    async def get_user(self) -> Optional[User]:
        session = await self.get_current_session()
        return session.user if session else None

    async def sign_in(self, email: str, password: str) -> Session:
        session = await self._backend.auth.sign_in_with_password(email, password)
        self._set_session(session, AuthChangeEvent.SIGNED_IN)
        return session

    async def sign_up(self, email: str, password: str) -> Session:
        """Create an account, then sign straight in with the same credentials.

        When the sign-in step fails its error propagates; the account has
        been created regardless.
        """
        await self._backend.auth.sign_up(email, password, data={"email": email})
        self.logger.info(f"Account created for {email}")
        return await self.sign_in(email, password)

    async def sign_out(self) -> None:
        """Drop the session locally even if the backend cannot revoke it."""
        session = self._session
        if session is not None:
            try:
                await self._backend.auth.sign_out(session.access_token)
            except BackendError as e:
                self.logger.warning(f"Backend sign-out failed, clearing local session anyway: {e.message}")
        self._set_session(None, AuthChangeEvent.SIGNED_OUT)

    async def recover_session_from_fragment(self, fragment: str) -> Optional[Session]:
        """Adopt the session carried by an e-mail confirmation redirect.

        A token the backend rejects means "no session"; transport failures
        propagate to the caller.
        """
        params = dict(parse_qsl(fragment.lstrip("#")))
        access_token = params.get("access_token")
        if not access_token:
            return None

        try:
            user = await self._backend.auth.get_user(access_token)
        except AuthApiError as e:
            self.logger.warning(f"Redirect token rejected: {e.message}")
            return None

        session = Session.from_token_payload({
            "access_token": access_token,
            "refresh_token": params.get("refresh_token"),
            "token_type": params.get("token_type", "bearer"),
            "expires_in": params.get("expires_in"),
            "expires_at": params.get("expires_at"),
            "user": user.model_dump(),
        })
        self._set_session(session, AuthChangeEvent.SIGNED_IN)
        return session
