from typing import List, Optional
import logging

from ...backend import BackendClient
from ...models import ProductTest

logger = logging.getLogger(__name__)


class ProductTestService:
    """Product tests. Who may see a private test is decided by backend policy alone."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_tests(self) -> List[ProductTest]:
        response = await self.backend.table("tests") \
            .select("*, product:products(name)") \
            .order("created_at", desc=True) \
            .execute()
        return [ProductTest.model_validate(row) for row in response.data or []]

    async def create_test(
        self,
        product_id: str,
        title: str,
        description: Optional[str] = None,
        is_private: bool = False,
    ) -> None:
        await self.backend.table("tests").insert({
            "title": title,
            "description": description or None,
            "is_private": is_private,
            "product_id": product_id,
        }).execute()
        logger.info(f"Test '{title}' created for product {product_id} (private={is_private})")
