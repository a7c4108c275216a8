import pytest

from testlab.services.companies import CompanyService
from testlab.services.dashboard import DashboardService

from conftest import REST


@pytest.fixture
def service(backend):
    return DashboardService(backend, CompanyService(backend))


class TestGetStats:
    @pytest.mark.asyncio
    async def test_three_scoped_counts(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/company_members", json=[{"company_id": "c1"}, {"company_id": "c2"}])
        fake_backend.add("GET", f"{REST}/products", json=[{"id": "p1"}, {"id": "p2"}, {"id": "p3"}])
        fake_backend.add("GET", f"{REST}/tests", json=[{"id": "t1"}], headers={"Content-Range": "0-0/4"})

        stats = await service.get_stats("user-1")

        assert (stats.companies, stats.products, stats.active_tests) == (2, 3, 4)
        products = fake_backend.calls("GET", f"{REST}/products")[0]
        assert products.url.params["company_id"] == "in.(c1,c2)"
        tests = fake_backend.calls("GET", f"{REST}/tests")[0]
        assert tests.url.params["product_id"] == "in.(p1,p2,p3)"
        assert tests.url.params["is_private"] == "eq.false"

    @pytest.mark.asyncio
    async def test_no_memberships(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/company_members", json=[])

        stats = await service.get_stats("user-1")

        assert (stats.companies, stats.products, stats.active_tests) == (0, 0, 0)
        assert fake_backend.calls("GET", f"{REST}/products") == []

    @pytest.mark.asyncio
    async def test_companies_without_products(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/company_members", json=[{"company_id": "c1"}])
        fake_backend.add("GET", f"{REST}/products", json=[])

        stats = await service.get_stats("user-1")

        assert (stats.companies, stats.products, stats.active_tests) == (1, 0, 0)
        assert fake_backend.calls("GET", f"{REST}/tests") == []
