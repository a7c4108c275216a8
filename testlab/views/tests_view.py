from typing import Any, Dict, List, Optional, Tuple

from .base import CancellationToken, ViewModel
from .results_view import ResultsView
from .share_dialog import ShareDialog
from ..core.messages import Messages
from ..models import ProductRef, ProductTest
from ..services.catalog import ProductService, ProductTestService
from ..services.results import ResultsService
from ..services.sharing import SharingService

ProductTestsResult = Tuple[List[ProductTest], List[ProductRef]]


class ProductTestsView(ViewModel):
    """
    Every test the backend lets the user see, newest first.

    Private tests are listed or hidden by backend policy alone. The product
    selector only feeds the creation form; it defaults to the first product.
    """

    name = "tests"
    fetch_error_key = "tests.fetch_failed"

    def __init__(
        self,
        messages: Messages,
        tests: ProductTestService,
        products: ProductService,
        results: ResultsService,
        sharing: SharingService,
    ):
        super().__init__(messages)
        self.test_service = tests
        self.product_service = products
        self.results_service = results
        self.sharing_service = sharing
        self.tests: List[ProductTest] = []
        self.products: List[ProductRef] = []
        self.selected_product_id: Optional[str] = None
        self.share_dialog: Optional[ShareDialog] = None
        self.results_view: Optional[ResultsView] = None

    async def fetch(self, token: CancellationToken) -> ProductTestsResult:
        tests = await self.test_service.list_tests()
        if token.cancelled:
            return tests, []
        products = await self.product_service.list_product_refs()
        return tests, products

    def apply(self, result: ProductTestsResult) -> None:
        self.tests, self.products = result
        if self.selected_product_id not in {product.id for product in self.products}:
            self.selected_product_id = self.products[0].id if self.products else None

    def select_product(self, product_id: str) -> None:
        self.selected_product_id = product_id

    async def create_test(
        self,
        title: str,
        description: Optional[str] = None,
        is_private: bool = False,
        product_id: Optional[str] = None,
    ) -> bool:
        product_id = product_id or self.selected_product_id
        if not product_id:
            self.error = self.messages.get("tests.create_failed")
            return False
        return await self._mutate(
            lambda: self.test_service.create_test(product_id, title, description, is_private),
            "tests.create_failed",
        )

    # --- dialogs ---------------------------------------------------------

    def open_share(self, test_id: str) -> ShareDialog:
        self.share_dialog = ShareDialog(self.messages, self.sharing_service, test_id)
        return self.share_dialog

    def close_share(self) -> None:
        if self.share_dialog is not None:
            self.share_dialog.close()
        self.share_dialog = None

    async def open_results(self, test_id: str) -> ResultsView:
        if self.results_view is not None:
            self.results_view.teardown()
        self.results_view = ResultsView(self.messages, self.results_service, test_id)
        await self.results_view.load()
        return self.results_view

    def close_results(self) -> None:
        if self.results_view is not None:
            self.results_view.teardown()
        self.results_view = None

    def teardown(self) -> None:
        super().teardown()
        self.close_results()
        self.close_share()

    def data(self) -> Dict[str, Any]:
        return {
            "tests": [test.model_dump(mode="json") for test in self.tests],
            "products": [product.model_dump(mode="json") for product in self.products],
            "selected_product_id": self.selected_product_id,
            "share_dialog": self.share_dialog.snapshot() if self.share_dialog else None,
            "results": self.results_view.snapshot() if self.results_view else None,
        }
