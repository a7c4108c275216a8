import json

import pytest

from testlab.services import catalog

from conftest import REST


class TestProductService:
    @pytest.mark.asyncio
    async def test_products_of_one_company_newest_first(self, backend, fake_backend):
        fake_backend.add("GET", f"{REST}/products", json=[
            {"id": "p1", "name": "Kaffe", "company_id": "c1", "company": {"id": "c1", "name": "Acme"}},
        ])

        products = await catalog.ProductService(backend).list_products("c1")

        assert products[0].company.name == "Acme"
        request = fake_backend.calls("GET", f"{REST}/products")[0]
        assert request.url.params["company_id"] == "eq.c1"
        assert request.url.params["order"] == "created_at.desc"

    @pytest.mark.asyncio
    async def test_blank_description_stored_as_null(self, backend, fake_backend):
        fake_backend.add("POST", f"{REST}/products", status=201, json=[{"id": "p1"}])

        await catalog.ProductService(backend).create_product("c1", "Kaffe", "")

        insert = fake_backend.calls("POST", f"{REST}/products")[0]
        assert json.loads(insert.read()) == [{"name": "Kaffe", "description": None, "company_id": "c1"}]


class TestProductTestService:
    @pytest.mark.asyncio
    async def test_tests_carry_product_name(self, backend, fake_backend):
        fake_backend.add("GET", f"{REST}/tests", json=[
            {"id": "t1", "title": "Smak", "is_private": True, "product_id": "p1", "product": {"name": "Kaffe"}},
        ])

        tests = await catalog.ProductTestService(backend).list_tests()

        assert tests[0].product_name == "Kaffe"
        assert tests[0].is_private is True
        request = fake_backend.calls("GET", f"{REST}/tests")[0]
        assert request.url.params["order"] == "created_at.desc"
        assert "product_id" not in request.url.params

    @pytest.mark.asyncio
    async def test_private_flag_sent_as_given(self, backend, fake_backend):
        fake_backend.add("POST", f"{REST}/tests", status=201, json=[{"id": "t1"}])

        await catalog.ProductTestService(backend).create_test("p1", "Smak", None, is_private=True)

        insert = fake_backend.calls("POST", f"{REST}/tests")[0]
        assert json.loads(insert.read()) == [
            {"title": "Smak", "description": None, "is_private": True, "product_id": "p1"},
        ]


class TestParticipantService:
    @pytest.mark.asyncio
    async def test_listed_by_name(self, backend, fake_backend):
        fake_backend.add("GET", f"{REST}/testers", json=[{"id": "x1", "name": "Kari", "email": "kari@example.com"}])

        testers = await catalog.TesterService(backend).list_testers()

        assert testers[0].name == "Kari"
        assert fake_backend.calls("GET", f"{REST}/testers")[0].url.params["order"] == "name.asc"

    @pytest.mark.asyncio
    async def test_create_without_phone(self, backend, fake_backend):
        fake_backend.add("POST", f"{REST}/testers", status=201, json=[{"id": "x1"}])

        await catalog.TesterService(backend).create_tester("Kari", "kari@example.com")

        insert = fake_backend.calls("POST", f"{REST}/testers")[0]
        assert json.loads(insert.read()) == [{"name": "Kari", "email": "kari@example.com", "phone": None}]
