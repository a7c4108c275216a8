"""
Fluent builder for the backend's data endpoints.

One builder produces exactly one HTTP request when ``execute()`` is awaited:

    await backend.table("products") \\
        .select("*, company:companies(id, name)") \\
        .eq("company_id", company_id) \\
        .order("created_at", desc=True) \\
        .execute()
"""
import re
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple, Union

import httpx

from .models import APIResponse
from ..core.errors import BackendPermissionError, NoRowsError, QueryError, UniqueViolationError
from ..core.errors.backend import NO_ROWS_CODE, UNIQUE_VIOLATION_CODE

if TYPE_CHECKING:
    from .client import BackendClient

_SINGLE_OBJECT = "application/vnd.pgrst.object+json"
_RESERVED = re.compile(r'[,()"\s]')


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quote(value: Any) -> str:
    text = _format_value(value)
    if _RESERVED.search(text):
        return '"' + text.replace('"', '\\"') + '"'
    return text


def _parse_count(content_range: Optional[str]) -> Optional[int]:
    # "0-24/25" or "*/0"
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


class QueryBuilder:
    def __init__(self, client: "BackendClient", table: str):
        self._client = client
        self._table = table
        self._method = "GET"
        self._params: List[Tuple[str, str]] = []
        self._headers: Dict[str, str] = {}
        self._prefer: List[str] = []
        self._body: Optional[Union[List[Dict[str, Any]], Dict[str, Any]]] = None
        self._single = False

    # --- verbs -----------------------------------------------------------

    def select(self, columns: str = "*", count: Optional[str] = None) -> "QueryBuilder":
        self._method = "GET"
        self._params.append(("select", re.sub(r"\s+", "", columns)))
        if count:
            self._prefer.append(f"count={count}")
        return self

    def insert(self, rows: Union[Dict[str, Any], List[Dict[str, Any]]]) -> "QueryBuilder":
        self._method = "POST"
        self._body = rows if isinstance(rows, list) else [rows]
        self._prefer.append("return=representation")
        return self

    def delete(self) -> "QueryBuilder":
        self._method = "DELETE"
        return self

    # --- filters and modifiers ------------------------------------------

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        self._params.append((column, f"eq.{_format_value(value)}"))
        return self

    def in_(self, column: str, values: Iterable[Any]) -> "QueryBuilder":
        joined = ",".join(_quote(v) for v in values)
        self._params.append((column, f"in.({joined})"))
        return self

    def order(self, column: str, desc: bool = False) -> "QueryBuilder":
        self._params.append(("order", f"{column}.{'desc' if desc else 'asc'}"))
        return self

    def single(self) -> "QueryBuilder":
        """Expect exactly one row; zero rows raises ``NoRowsError``."""
        self._single = True
        self._headers["Accept"] = _SINGLE_OBJECT
        return self

    # --- execution -------------------------------------------------------

    @property
    def url(self) -> str:
        return f"{self._client.config.rest_url}/{self._table}"

    async def execute(self) -> APIResponse:
        headers = dict(self._headers)
        if self._prefer:
            headers["Prefer"] = ",".join(self._prefer)

        response = await self._client.request(
            self._method,
            self.url,
            params=self._params,
            json=self._body,
            headers=headers,
        )
        raise_for_data_error(response, self._table)

        data = response.json() if response.content else None
        count = _parse_count(response.headers.get("Content-Range")) if any(
            p.startswith("count=") for p in self._prefer
        ) else None
        return APIResponse(data=data, count=count)


def raise_for_data_error(response: httpx.Response, table: Optional[str] = None) -> None:
    """Translate a failed data/RPC response into the matching ``QueryError``."""
    if response.status_code < 400:
        return

    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    code = payload.get("code")
    code = str(code) if code is not None else None
    message = payload.get("message") or response.reason_phrase or "Backend request failed"
    extra = {"status": response.status_code}
    if payload.get("details"):
        extra["backend_details"] = payload.get("details")

    if code == UNIQUE_VIOLATION_CODE:
        raise UniqueViolationError(message, table=table, details=extra)
    if code == NO_ROWS_CODE:
        raise NoRowsError(table=table, details=extra)
    if response.status_code in (401, 403):
        raise BackendPermissionError(message, table=table, status_code=response.status_code, details=extra)
    raise QueryError(message, code=code, table=table, hint=payload.get("hint"), details=extra)
