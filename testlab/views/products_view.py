from typing import Any, Dict, List, Optional, Tuple

from .base import CancellationToken, ViewModel
from ..core.messages import Messages
from ..models import Company, Product
from ..services.catalog import ProductService
from ..services.companies import CompanyService

ProductsResult = Tuple[List[Company], Optional[str], List[Product]]


class ProductsView(ViewModel):
    """Products of the selected company; companies come from the user's memberships."""

    name = "products"
    fetch_error_key = "products.fetch_failed"

    def __init__(self, messages: Messages, companies: CompanyService, products: ProductService, user_id: str):
        super().__init__(messages)
        self.company_service = companies
        self.product_service = products
        self.user_id = user_id
        self.companies: List[Company] = []
        self.products: List[Product] = []
        self.selected_company_id: Optional[str] = None

    async def fetch(self, token: CancellationToken) -> ProductsResult:
        companies = await self.company_service.list_member_companies(self.user_id)
        selected = self.selected_company_id
        if selected not in {company.id for company in companies}:
            selected = companies[0].id if companies else None

        if selected is None or token.cancelled:
            return companies, selected, []
        products = await self.product_service.list_products(selected)
        return companies, selected, products

    def apply(self, result: ProductsResult) -> None:
        self.companies, self.selected_company_id, self.products = result

    async def select_company(self, company_id: str) -> None:
        """Switch company: the old list is dropped before the new one is fetched."""
        self.selected_company_id = company_id
        self.products = []
        await self.load()

    async def create_product(self, name: str, description: Optional[str] = None) -> bool:
        if self.selected_company_id is None:
            self.error = self.messages.get("products.create_failed")
            return False
        company_id = self.selected_company_id
        return await self._mutate(
            lambda: self.product_service.create_product(company_id, name, description),
            "products.create_failed",
        )

    def data(self) -> Dict[str, Any]:
        return {
            "companies": [company.model_dump(mode="json") for company in self.companies],
            "selected_company_id": self.selected_company_id,
            "products": [product.model_dump(mode="json") for product in self.products],
        }
