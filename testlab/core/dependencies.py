"""
Dependency providers for the FastAPI routers.

Everything with state lives exactly once per process: the backend client,
the session store and the root controller that owns the dashboard. The
stateless services are cheap and built on demand around the cached
backend client.
"""
import logging
from functools import lru_cache

from fastapi import Depends, Request

from .config import AppConfig, get_config
from .errors import AuthenticationError
from .errors.handler import DefaultErrorHandler, ErrorHandler
from .http_client import get_client
from .messages import Messages, get_messages
from ..backend import BackendClient, User
from ..services.auth import AuthCallbackHandler
from ..services.catalog import ProductService, ProductTestService, TesterService
from ..services.companies import CompanyService
from ..services.dashboard import DashboardService
from ..services.results import ResultsService
from ..services.session import SessionStore
from ..services.sharing import SharingService
from ..views import DashboardShell, RootController


def get_error_handler(request: Request) -> ErrorHandler:
    """Provide a request-scoped error handler with structured context."""

    endpoint = request.scope.get("endpoint")
    module_name = getattr(endpoint, "__module__", "testlab") if endpoint else "testlab"
    logger_name = f"{module_name}.errors"
    base_context = {
        "path": request.url.path,
        "method": request.method,
    }
    return DefaultErrorHandler(lambda: logging.getLogger(logger_name), base_context=base_context)


# === Configuration ===
def get_app_config() -> AppConfig:
    return get_config()


@lru_cache()
def _build_messages() -> Messages:
    return get_messages()


def get_ui_messages() -> Messages:
    return _build_messages()


# === Backend ===
@lru_cache()
def _build_backend_client() -> BackendClient:
    config = get_config()
    return BackendClient(config, get_client(config.http_timeout_seconds))


@lru_cache()
def _build_session_store() -> SessionStore:
    return SessionStore(_build_backend_client(), get_config().session_refresh_margin_seconds)


def get_session_store() -> SessionStore:
    return _build_session_store()


def get_auth_callback_handler() -> AuthCallbackHandler:
    return AuthCallbackHandler(
        _build_session_store(),
        _build_messages(),
        get_config().confirmation_token_marker,
    )


def build_dashboard_shell(user: User) -> DashboardShell:
    """Assemble a dashboard for ``user`` around the shared backend client."""
    backend = _build_backend_client()
    companies = CompanyService(backend, get_config().company_rpc_name)
    return DashboardShell(
        messages=_build_messages(),
        user=user,
        dashboard=DashboardService(backend, companies),
        companies=companies,
        products=ProductService(backend),
        tests=ProductTestService(backend),
        testers=TesterService(backend),
        results=ResultsService(backend),
        sharing=SharingService(backend),
    )


# === Views ===
@lru_cache()
def _build_root_controller() -> RootController:
    return RootController(
        _build_session_store(),
        get_auth_callback_handler(),
        _build_messages(),
        build_dashboard_shell,
    )


def get_root_controller() -> RootController:
    """Get the process-wide root controller (mounted during app startup)."""
    return _build_root_controller()


async def require_dashboard(
    controller: RootController = Depends(get_root_controller),
    messages: Messages = Depends(get_ui_messages),
) -> DashboardShell:
    """Resolve the signed-in user's dashboard or fail with 401."""
    shell = await controller.sync_session()
    if shell is None:
        raise AuthenticationError(messages.get("auth.not_signed_in"))
    return shell


__all__ = [
    "build_dashboard_shell",
    "get_app_config",
    "get_auth_callback_handler",
    "get_error_handler",
    "get_root_controller",
    "get_session_store",
    "get_ui_messages",
    "require_dashboard",
    "reset_dependency_caches",
]


def reset_dependency_caches() -> None:
    """Clear cached dependency instances (useful for testing)."""
    _build_root_controller.cache_clear()
    _build_session_store.cache_clear()
    _build_backend_client.cache_clear()
    _build_messages.cache_clear()
