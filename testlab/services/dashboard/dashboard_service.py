"""
Dashboard summary counts.

Three independent, membership-scoped queries composed here rather than one
aggregate call on the backend. The numbers are a snapshot; nothing keeps
them live.
"""
from typing import List

from ..companies import CompanyService
from ...backend import BackendClient
from ...models import DashboardStats
from ...utils.logging_config import get_logger


class DashboardService:
    def __init__(self, backend: BackendClient, companies: CompanyService):
        self.backend = backend
        self.companies = companies
        self.logger = get_logger(__name__)

    async def _product_ids(self, company_ids: List[str]) -> List[str]:
        response = await self.backend.table("products") \
            .select("id") \
            .in_("company_id", company_ids) \
            .execute()
        return [row["id"] for row in response.data or []]

    async def _count_public_tests(self, product_ids: List[str]) -> int:
        response = await self.backend.table("tests") \
            .select("id", count="exact") \
            .in_("product_id", product_ids) \
            .eq("is_private", False) \
            .execute()
        if response.count is not None:
            return response.count
        return len(response.data or [])

    async def get_stats(self, user_id: str) -> DashboardStats:
        """Companies the user belongs to, their products, and the non-private tests of those products."""
        company_ids = await self.companies.list_member_company_ids(user_id)
        if not company_ids:
            return DashboardStats()

        product_ids = await self._product_ids(company_ids)
        active_tests = await self._count_public_tests(product_ids) if product_ids else 0

        stats = DashboardStats(
            companies=len(company_ids),
            products=len(product_ids),
            active_tests=active_tests,
        )
        self.logger.debug(f"Dashboard stats for {user_id}: {stats.model_dump()}")
        return stats
