from typing import List, Optional
import logging

from ...backend import BackendClient
from ...models import Product, ProductRef

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_products(self, company_id: str) -> List[Product]:
        """Products of one company, newest first, with the owning company embedded."""
        response = await self.backend.table("products") \
            .select("*, company:companies(id, name)") \
            .eq("company_id", company_id) \
            .order("created_at", desc=True) \
            .execute()
        return [Product.model_validate(row) for row in response.data or []]

    async def list_product_refs(self) -> List[ProductRef]:
        """Every product the backend lets the user see, by name, for selectors."""
        response = await self.backend.table("products") \
            .select("id, name") \
            .order("name") \
            .execute()
        return [ProductRef.model_validate(row) for row in response.data or []]

    async def create_product(self, company_id: str, name: str, description: Optional[str] = None) -> None:
        await self.backend.table("products").insert({
            "name": name,
            "description": description or None,
            "company_id": company_id,
        }).execute()
        logger.info(f"Product '{name}' created in company {company_id}")
