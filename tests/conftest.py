"""
Shared pytest fixtures for the TestLab tests.

The hosted backend is replaced by ``FakeBackend``, an ``httpx.MockTransport``
handler that answers canned JSON per (method, path) and records every
request so tests can assert on the query that was sent.
"""

import os
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from unittest.mock import AsyncMock

import httpx
import pytest

# Set test environment variables before importing app modules
os.environ["BACKEND_URL"] = "https://backend.test"
os.environ["BACKEND_ANON_KEY"] = "anon-key"
os.environ["LOCALE"] = "nb"
os.environ["LOG_LEVEL"] = "DEBUG"

from testlab.backend import BackendClient, User
from testlab.core.config import AppConfig
from testlab.core.messages import Messages
from testlab.services.session import SessionStore

REST = "/rest/v1"
AUTH = "/auth/v1"

USER_ID = "user-1"
USER_EMAIL = "ola@example.com"

Handler = Callable[[httpx.Request], httpx.Response]
Entry = Union[Tuple[int, Any, Dict[str, str]], Handler]


class FakeBackend:
    """Canned responses for the backend, keyed by HTTP method and URL path.

    Several responses queued on one route are served in order; the last
    one keeps answering after that.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], List[Entry]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "FakeBackend":
        self.routes.setdefault((method, path), []).append((status, json, headers or {}))
        return self

    def add_handler(self, method: str, path: str, handler: Handler) -> "FakeBackend":
        self.routes.setdefault((method, path), []).append(handler)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": f"no route for {request.method} {request.url.path}"})

        entry = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(entry):
            return entry(request)
        status, body, headers = entry
        if body is None:
            return httpx.Response(status, headers=headers)
        return httpx.Response(status, json=body, headers=headers)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


def token_payload(
    access_token: str = "access-1",
    user_id: str = USER_ID,
    email: str = USER_EMAIL,
    expires_in: int = 3600,
) -> Dict[str, Any]:
    return {
        "access_token": access_token,
        "refresh_token": f"refresh-{access_token}",
        "token_type": "bearer",
        "expires_in": expires_in,
        "user": {"id": user_id, "email": email},
    }


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config():
    """Provide test configuration."""
    return AppConfig(backend_url="https://backend.test", backend_anon_key="anon-key")


@pytest.fixture
def messages():
    return Messages("nb")


@pytest.fixture
def en_messages():
    return Messages("en")


# ============================================================================
# Backend Fixtures
# ============================================================================

@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def backend(test_config, fake_backend):
    """A real BackendClient whose transport is the fake backend."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_backend))
    return BackendClient(test_config, http)


@pytest.fixture
def session_store(backend):
    return SessionStore(backend, refresh_margin_seconds=10)


@pytest.fixture
def user():
    return User(id=USER_ID, email=USER_EMAIL)


# ============================================================================
# Service Mocks
# ============================================================================

@pytest.fixture
def company_service():
    service = AsyncMock()
    service.list_member_companies.return_value = []
    service.list_members.return_value = []
    return service


@pytest.fixture
def product_service():
    service = AsyncMock()
    service.list_products.return_value = []
    service.list_product_refs.return_value = []
    return service


@pytest.fixture
def product_test_service():
    service = AsyncMock()
    service.list_tests.return_value = []
    return service


@pytest.fixture
def tester_service():
    service = AsyncMock()
    service.list_testers.return_value = []
    return service


@pytest.fixture
def results_service():
    service = AsyncMock()
    service.list_results.return_value = []
    return service


@pytest.fixture
def sharing_service():
    return AsyncMock()


@pytest.fixture
def dashboard_service():
    return AsyncMock()
