"""
View-model base.

Every screen is a small state machine: ``IDLE -> LOADING -> READY | ERROR``.
A successful mutation goes back through ``load()``; a failed one only sets
the inline error. Each fetch carries a ``CancellationToken`` and a result
whose token was cancelled in the meantime is thrown away, so a slow
response can never overwrite a newer one or a view that has been left.
"""
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from ..core.messages import Messages
from ..utils.logging_config import get_logger


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class CancellationToken:
    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ViewModel:
    """Shared fetch/mutate/teardown plumbing for the list views."""

    name = "view"
    fetch_error_key = "error.generic"

    def __init__(self, messages: Messages):
        self.messages = messages
        self.state = ViewState.IDLE
        self.error: Optional[str] = None
        self.show_form = False
        self._token: Optional[CancellationToken] = None
        self.logger = get_logger(f"{__name__}.{self.name}")

    # --- fetching --------------------------------------------------------

    def _next_token(self) -> CancellationToken:
        if self._token is not None:
            self._token.cancel()
        self._token = CancellationToken()
        return self._token

    async def fetch(self, token: CancellationToken) -> Any:
        raise NotImplementedError

    def apply(self, result: Any) -> None:
        raise NotImplementedError

    async def load(self) -> None:
        """Fetch from scratch and, unless superseded, publish the result."""
        token = self._next_token()
        self.state = ViewState.LOADING
        self.error = None

        try:
            result = await self.fetch(token)
        except Exception as e:
            if token.cancelled:
                self.logger.debug(f"Discarding failed fetch of cancelled {self.name} load: {e}")
                return
            self.error = self.messages.for_error(e, self.fetch_error_key)
            self.state = ViewState.ERROR
            return

        if token.cancelled:
            self.logger.debug(f"Discarding stale {self.name} result")
            return
        self.apply(result)
        self.state = ViewState.READY

    # --- mutations -------------------------------------------------------

    async def _mutate(self, action: Callable[[], Awaitable[Any]], error_key: str) -> bool:
        """Run one user action; on success hide the form and reload."""
        self.error = None
        try:
            await action()
        except Exception as e:
            self.error = self.messages.for_error(e, error_key)
            return False

        self.show_form = False
        await self.load()
        return True

    def open_form(self) -> None:
        self.show_form = True

    def close_form(self) -> None:
        self.show_form = False

    # --- lifecycle -------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._token is not None and not self._token.cancelled

    def teardown(self) -> None:
        if self._token is not None:
            self._token.cancel()

    def data(self) -> Dict[str, Any]:
        return {}

    def snapshot(self) -> Dict[str, Any]:
        """Everything the page needs to render this view, as plain data."""
        snapshot = {
            "view": self.name,
            "state": self.state.value,
            "loading": self.state == ViewState.LOADING,
            "error": self.error,
            "show_form": self.show_form,
        }
        snapshot.update(self.data())
        return snapshot
