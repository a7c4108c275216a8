import json

import pytest

from testlab.core.errors import AlreadyMemberError, ApplicationError, UserNotFoundError
from testlab.models import MemberRole
from testlab.services.companies import CompanyService

from conftest import REST


@pytest.fixture
def service(backend):
    return CompanyService(backend)


class TestListMemberCompanies:
    @pytest.mark.asyncio
    async def test_two_step_fetch_by_membership(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/company_members", json=[{"company_id": "c1"}, {"company_id": "c2"}])
        fake_backend.add("GET", f"{REST}/companies", json=[
            {"id": "c1", "name": "Acme", "created_at": "2024-01-01T00:00:00Z"},
            {"id": "c2", "name": "Bravo", "created_at": "2024-02-01T00:00:00Z"},
        ])

        companies = await service.list_member_companies("user-1")

        assert [c.name for c in companies] == ["Acme", "Bravo"]
        membership = fake_backend.calls("GET", f"{REST}/company_members")[0]
        assert membership.url.params["user_id"] == "eq.user-1"
        request = fake_backend.calls("GET", f"{REST}/companies")[0]
        assert request.url.params["id"] == "in.(c1,c2)"
        assert request.url.params["order"] == "name.asc"

    @pytest.mark.asyncio
    async def test_no_memberships_skips_company_query(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/company_members", json=[])

        assert await service.list_member_companies("user-1") == []
        assert fake_backend.calls("GET", f"{REST}/companies") == []


class TestCreateCompany:
    @pytest.mark.asyncio
    async def test_uses_atomic_procedure(self, service, fake_backend):
        fake_backend.add("POST", f"{REST}/rpc/create_company_with_admin", json={"id": "c1", "name": "Acme"})

        company = await service.create_company("Acme", "user-1")

        assert company.id == "c1"
        request = fake_backend.calls("POST", f"{REST}/rpc/create_company_with_admin")[0]
        assert json.loads(request.read()) == {"company_name": "Acme", "admin_id": "user-1"}
        assert fake_backend.calls("POST", f"{REST}/companies") == []

    @pytest.mark.asyncio
    async def test_procedure_returning_id_only(self, service, fake_backend):
        fake_backend.add("POST", f"{REST}/rpc/create_company_with_admin", json="c9")

        company = await service.create_company("Acme", "user-1")

        assert company.id == "c9"
        assert company.name == "Acme"

    @pytest.mark.asyncio
    async def test_empty_procedure_result(self, service, fake_backend):
        fake_backend.add("POST", f"{REST}/rpc/create_company_with_admin", json=None, status=200)

        with pytest.raises(ApplicationError):
            await service.create_company("Acme", "user-1")


class TestMembers:
    @pytest.mark.asyncio
    async def test_members_carry_profile_email(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/company_members", json=[
            {"id": "m1", "user_id": "u1", "role": "admin", "profiles": {"email": "ola@example.com"}},
        ])

        members = await service.list_members("c1")

        assert members[0].email == "ola@example.com"
        assert members[0].role == MemberRole.ADMIN
        request = fake_backend.calls("GET", f"{REST}/company_members")[0]
        assert request.url.params["select"] == "id,user_id,role,profiles!inner(email)"

    @pytest.mark.asyncio
    async def test_unknown_email_fails_without_insert(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/profiles", status=406, json={"code": "PGRST116", "message": "no rows"})

        with pytest.raises(UserNotFoundError):
            await service.add_member("c1", "ukjent@example.com")

        assert fake_backend.calls("POST", f"{REST}/company_members") == []

    @pytest.mark.asyncio
    async def test_existing_member_fails_before_insert(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/profiles", json={"id": "u2"})
        fake_backend.add("GET", f"{REST}/company_members", json=[{"id": "m7"}])

        with pytest.raises(AlreadyMemberError):
            await service.add_member("c1", "kari@example.com")

        assert fake_backend.calls("POST", f"{REST}/company_members") == []
        check = fake_backend.calls("GET", f"{REST}/company_members")[0]
        assert check.url.params["company_id"] == "eq.c1"
        assert check.url.params["user_id"] == "eq.u2"

    @pytest.mark.asyncio
    async def test_adds_member_role(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/profiles", json={"id": "u2"})
        fake_backend.add("GET", f"{REST}/company_members", json=[])
        fake_backend.add("POST", f"{REST}/company_members", status=201, json=[{"id": "m8"}])

        await service.add_member("c1", "kari@example.com")

        insert = fake_backend.calls("POST", f"{REST}/company_members")[0]
        assert json.loads(insert.read()) == [{"company_id": "c1", "user_id": "u2", "role": "member"}]

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_becomes_already_member(self, service, fake_backend):
        fake_backend.add("GET", f"{REST}/profiles", json={"id": "u2"})
        fake_backend.add("GET", f"{REST}/company_members", json=[])
        fake_backend.add("POST", f"{REST}/company_members", status=409, json={"code": "23505", "message": "duplicate"})

        with pytest.raises(AlreadyMemberError):
            await service.add_member("c1", "kari@example.com")

    @pytest.mark.asyncio
    async def test_remove_by_membership_id(self, service, fake_backend):
        fake_backend.add("DELETE", f"{REST}/company_members", status=204)

        await service.remove_member("m1")

        request = fake_backend.calls("DELETE", f"{REST}/company_members")[0]
        assert request.url.params["id"] == "eq.m1"
