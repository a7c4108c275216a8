from typing import TYPE_CHECKING, Any, Dict, Optional
import logging

import httpx

from .models import AuthResponse, Session, User
from ..core.errors import AuthApiError

if TYPE_CHECKING:
    from .client import BackendClient

logger = logging.getLogger(__name__)


def _raise_for_auth_error(response: httpx.Response) -> None:
    if response.status_code < 400:
        return

    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    # Older deployments answer {"error", "error_description"}, newer ones {"error_code", "msg"}
    message = (
        payload.get("msg")
        or payload.get("error_description")
        or payload.get("message")
        or payload.get("error")
        or response.reason_phrase
        or "Authentication request failed"
    )
    code = payload.get("error_code") or payload.get("error")
    raise AuthApiError(str(message), status=response.status_code, code=str(code) if code else None)


class AuthAPI:
    """Auth surface of the hosted backend: sign-up, password grant, refresh, user lookup, logout."""

    def __init__(self, client: "BackendClient"):
        self._client = client

    @property
    def _url(self) -> str:
        return self._client.config.auth_url

    async def _post(self, path: str, body: Optional[Dict[str, Any]] = None, *,
                    params: Optional[Dict[str, str]] = None,
                    access_token: Optional[str] = None) -> httpx.Response:
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        response = await self._client.request(
            "POST", f"{self._url}{path}", params=params, json=body, headers=headers, authorize=False
        )
        _raise_for_auth_error(response)
        return response

    async def sign_up(self, email: str, password: str, data: Optional[Dict[str, Any]] = None) -> AuthResponse:
        """Register an account. A session is only returned when the backend auto-confirms e-mails."""
        response = await self._post("/signup", {"email": email, "password": password, "data": data or {}})
        payload = response.json()

        if "access_token" in payload:
            session = Session.from_token_payload(payload)
            return AuthResponse(user=session.user, session=session)
        # Unconfirmed sign-ups answer with the bare user object
        user_payload = payload.get("user", payload)
        return AuthResponse(user=User.model_validate(user_payload) if user_payload.get("id") else None)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await self._post(
            "/token", {"email": email, "password": password}, params={"grant_type": "password"}
        )
        return Session.from_token_payload(response.json())

    async def refresh_session(self, refresh_token: str) -> Session:
        response = await self._post(
            "/token", {"refresh_token": refresh_token}, params={"grant_type": "refresh_token"}
        )
        return Session.from_token_payload(response.json())

    async def get_user(self, access_token: str) -> User:
        response = await self._client.request(
            "GET",
            f"{self._url}/user",
            headers={"Authorization": f"Bearer {access_token}"},
            authorize=False,
        )
        _raise_for_auth_error(response)
        return User.model_validate(response.json())

    async def sign_out(self, access_token: str) -> None:
        await self._post("/logout", access_token=access_token)
        logger.debug("Backend session revoked")
