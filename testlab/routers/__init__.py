"""
HTTP routers exposing the view models to the browser page.
"""
from .app import router as app_router
from .auth import router as auth_router
from .companies import router as companies_router
from .dashboard import router as dashboard_router
from .products import router as products_router
from .testers import router as testers_router
from .tests import router as tests_router

all_routers = [
    app_router,
    auth_router,
    dashboard_router,
    companies_router,
    products_router,
    tests_router,
    testers_router,
]

__all__ = [
    "all_routers",
    "app_router",
    "auth_router",
    "companies_router",
    "dashboard_router",
    "products_router",
    "testers_router",
    "tests_router",
]
