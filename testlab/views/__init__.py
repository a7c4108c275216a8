"""
View models behind the browser page.

Each one is plain state plus async operations, independent of how the page
is rendered; the routers expose their ``snapshot()`` as JSON.
"""

from .base import CancellationToken, ViewModel, ViewState
from .companies_view import CompaniesView
from .dashboard_shell import DashboardShell, DashboardView
from .products_view import ProductsView
from .results_view import ResultsView
from .root_controller import RootController, Screen
from .share_dialog import ShareDialog
from .testers_view import TesterListView
from .tests_view import ProductTestsView

__all__ = [
    "CancellationToken",
    "CompaniesView",
    "DashboardShell",
    "DashboardView",
    "ProductTestsView",
    "ProductsView",
    "ResultsView",
    "RootController",
    "Screen",
    "ShareDialog",
    "TesterListView",
    "ViewModel",
    "ViewState",
]
