from typing import Any, Dict, Optional, Sequence, Tuple, Union
import logging

import httpx

from .auth_api import AuthAPI
from .models import APIResponse
from .query import QueryBuilder, raise_for_data_error
from ..core.config import AppConfig
from ..core.errors import BackendConnectionError

logger = logging.getLogger(__name__)

Params = Union[Dict[str, str], Sequence[Tuple[str, str]], None]


class BackendClient:
    """
    Client for the hosted backend.

    Wraps a shared ``httpx.AsyncClient`` and exposes the three surfaces the
    front end uses: ``auth`` (sessions), ``table()`` (data) and ``rpc()``.
    Data requests are authorized with the current session's access token,
    or with the anon key while signed out.
    """

    def __init__(self, config: AppConfig, http: httpx.AsyncClient):
        self.config = config
        self._http = http
        self._access_token: Optional[str] = None
        self.auth = AuthAPI(self)

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Called by the session store whenever the session changes."""
        self._access_token = access_token

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    def _headers(self, extra: Optional[Dict[str, str]], authorize: bool) -> Dict[str, str]:
        headers = dict(self.config.default_headers)
        if authorize:
            headers["Authorization"] = f"Bearer {self._access_token or self.config.backend_anon_key}"
        if extra:
            headers.update(extra)
        return headers

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Params = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        authorize: bool = True,
    ) -> httpx.Response:
        """Send one request; transport failures become ``BackendConnectionError``."""
        try:
            return await self._http.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(headers, authorize),
            )
        except httpx.HTTPError as e:
            logger.error(f"Backend request {method} {url} failed: {e}")
            raise BackendConnectionError(self.config.backend_url, reason=str(e) or type(e).__name__) from e

    def table(self, name: str) -> QueryBuilder:
        return QueryBuilder(self, name)

    async def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> APIResponse:
        """Invoke a remote procedure that performs its writes atomically on the backend."""
        response = await self.request("POST", f"{self.config.rest_url}/rpc/{name}", json=params or {})
        raise_for_data_error(response, f"rpc:{name}")
        return APIResponse(data=response.json() if response.content else None)
