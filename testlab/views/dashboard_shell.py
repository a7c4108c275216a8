"""
Dashboard shell.

Holds the signed-in user, the summary counts taken once on entry, and the
one list view currently on screen. Leaving a view cancels its in-flight
fetches and drops it; coming back builds a new one that loads from scratch.
"""
from enum import Enum
from typing import Any, Dict, Optional

from .base import ViewModel
from .companies_view import CompaniesView
from .products_view import ProductsView
from .testers_view import TesterListView
from .tests_view import ProductTestsView
from ..backend import User
from ..core.messages import Messages
from ..models import DashboardStats
from ..services.catalog import ProductService, ProductTestService, TesterService
from ..services.companies import CompanyService
from ..services.dashboard import DashboardService
from ..services.results import ResultsService
from ..services.sharing import SharingService
from ..utils.logging_config import get_logger


class DashboardView(str, Enum):
    OVERVIEW = "overview"
    COMPANIES = "companies"
    PRODUCTS = "products"
    TESTS = "tests"
    TESTERS = "testers"


class DashboardShell:
    def __init__(
        self,
        messages: Messages,
        user: User,
        dashboard: DashboardService,
        companies: CompanyService,
        products: ProductService,
        tests: ProductTestService,
        testers: TesterService,
        results: ResultsService,
        sharing: SharingService,
    ):
        self.messages = messages
        self.user = user
        self.dashboard = dashboard
        self.companies = companies
        self.products = products
        self.tests = tests
        self.testers = testers
        self.results = results
        self.sharing = sharing
        self.logger = get_logger(__name__)

        self.stats = DashboardStats()
        self.stats_loading = False
        self.stats_error: Optional[str] = None
        self.active_view = DashboardView.OVERVIEW
        self.view: Optional[ViewModel] = None

    async def enter(self) -> None:
        """Take the summary snapshot. Called once when the dashboard opens."""
        self.stats_loading = True
        self.stats_error = None
        try:
            self.stats = await self.dashboard.get_stats(self.user.id)
        except Exception as e:
            self.stats_error = self.messages.for_error(e, "dashboard.stats_failed")
        finally:
            self.stats_loading = False

    def _build(self, view: DashboardView) -> Optional[ViewModel]:
        if view == DashboardView.COMPANIES:
            return CompaniesView(self.messages, self.companies, self.user.id)
        if view == DashboardView.PRODUCTS:
            return ProductsView(self.messages, self.companies, self.products, self.user.id)
        if view == DashboardView.TESTS:
            return ProductTestsView(self.messages, self.tests, self.products, self.results, self.sharing)
        if view == DashboardView.TESTERS:
            return TesterListView(self.messages, self.testers)
        return None

    async def navigate(self, view: DashboardView) -> Optional[ViewModel]:
        """Switch to ``view``, always with a freshly loaded view model."""
        view = DashboardView(view)
        if self.view is not None:
            self.view.teardown()
        self.logger.debug(f"Navigating {self.active_view.value} -> {view.value}")

        self.active_view = view
        self.view = self._build(view)
        if self.view is not None:
            await self.view.load()
        return self.view

    async def show(self, view: DashboardView) -> Optional[ViewModel]:
        """The live model for ``view``, navigating there first if another view is on screen."""
        view = DashboardView(view)
        if self.active_view == view and (self.view is not None or view == DashboardView.OVERVIEW):
            return self.view
        return await self.navigate(view)

    def teardown(self) -> None:
        if self.view is not None:
            self.view.teardown()
        self.view = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "user": {"id": self.user.id, "email": self.user.email},
            "active_view": self.active_view.value,
            "stats": self.stats.model_dump(),
            "stats_loading": self.stats_loading,
            "stats_error": self.stats_error,
            "view": self.view.snapshot() if self.view is not None else None,
        }
