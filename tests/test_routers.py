from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from testlab.core.dependencies import get_root_controller, get_session_store
from testlab.core.errors import UserNotFoundError
from testlab.main import app
from testlab.models import Company, DashboardStats, ProductTestResult
from testlab.services.auth import AuthCallbackHandler
from testlab.views import DashboardShell, RootController

from conftest import AUTH, USER_EMAIL, token_payload


@pytest.fixture
def controller(
    session_store,
    messages,
    dashboard_service,
    company_service,
    product_service,
    product_test_service,
    tester_service,
    results_service,
    sharing_service,
):
    dashboard_service.get_stats.return_value = DashboardStats(companies=1, products=2, active_tests=3)
    company_service.list_member_companies.return_value = [
        Company(id="c1", name="Acme"),
        Company(id="c2", name="Bravo"),
    ]

    def build(user):
        return DashboardShell(
            messages, user, dashboard_service, company_service, product_service,
            product_test_service, tester_service, results_service, sharing_service,
        )

    return RootController(session_store, AuthCallbackHandler(session_store, messages), messages, Mock(side_effect=build))


@pytest.fixture
def client(controller, session_store):
    app.dependency_overrides[get_root_controller] = lambda: controller
    app.dependency_overrides[get_session_store] = lambda: session_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client, fake_backend):
    fake_backend.add("POST", f"{AUTH}/token", json=token_payload())
    response = client.post("/api/auth/sign-in", json={"email": USER_EMAIL, "password": "hemmelig"})
    assert response.json()["screen"] == "dashboard"
    return client


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestAuthRoutes:
    def test_app_before_session_is_known(self, client):
        body = client.get("/api/app").json()

        assert body["screen"] == "loading"
        assert body["app_name"] == "TestLab"

    def test_app_with_token_fragment(self, client):
        body = client.get("/api/app", params={"fragment": "access_token=abc&type=signup"}).json()

        assert body["screen"] == "confirm_email"

    def test_rejected_sign_in_is_form_error(self, client, fake_backend):
        fake_backend.add(
            "POST", f"{AUTH}/token", status=400,
            json={"error_code": "invalid_credentials", "msg": "Invalid login credentials"},
        )

        response = client.post("/api/auth/sign-in", json={"email": USER_EMAIL, "password": "feil"})

        assert response.status_code == 200
        assert response.json()["form_error"] == "Feil e-post eller passord"
        assert response.json()["screen"] == "sign_in"

    def test_sign_in_requires_fields(self, client):
        response = client.post("/api/auth/sign-in", json={"email": USER_EMAIL, "password": ""})

        assert response.status_code == 422

    def test_session_after_sign_in(self, signed_in):
        body = signed_in.get("/api/auth/session").json()

        assert body["authenticated"] is True
        assert body["user"]["email"] == USER_EMAIL

    def test_sign_out(self, signed_in, fake_backend):
        fake_backend.add("POST", f"{AUTH}/logout", status=204)

        body = signed_in.post("/api/auth/sign-out").json()

        assert body["screen"] == "sign_in"
        assert signed_in.get("/api/auth/session").json()["authenticated"] is False

    def test_callback_invalid_link(self, client):
        body = client.post("/api/auth/callback", json={"fragment": "type=signup"}).json()

        assert body["status"] == "invalid_link"
        assert body["message"] == "Ugyldig bekreftelseslenke."


class TestDashboardRoutes:
    def test_requires_session(self, client):
        response = client.get("/api/dashboard")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_001"

    def test_stats(self, signed_in):
        body = signed_in.get("/api/dashboard").json()

        assert body["stats"] == {"companies": 1, "products": 2, "active_tests": 3}
        assert body["active_view"] == "overview"

    def test_switch_view(self, signed_in):
        body = signed_in.post("/api/dashboard/view", json={"view": "testers"}).json()

        assert body["active_view"] == "testers"
        assert body["view"]["state"] == "ready"

    def test_unknown_view(self, signed_in):
        response = signed_in.post("/api/dashboard/view", json={"view": "settings"})

        assert response.status_code == 400

    def test_open_and_close_form(self, signed_in):
        signed_in.post("/api/dashboard/view", json={"view": "testers"})

        body = signed_in.post("/api/dashboard/form").json()
        assert body["view"]["show_form"] is True
        assert signed_in.get("/api/testers").json()["show_form"] is True

        body = signed_in.delete("/api/dashboard/form").json()
        assert body["view"]["show_form"] is False

    def test_overview_has_no_form(self, signed_in):
        response = signed_in.post("/api/dashboard/form")

        assert response.status_code == 400
        assert response.json() == {
            "message": "View 'overview' has no form",
            "error_code": "VAL_001",
            "details": {"field": "view"},
        }


class TestViewRoutes:
    def test_companies(self, signed_in):
        body = signed_in.get("/api/companies").json()

        assert [c["name"] for c in body["companies"]] == ["Acme", "Bravo"]
        assert body["selected_company_id"] == "c1"

    def test_unknown_invitee_is_inline_error(self, signed_in, company_service):
        company_service.add_member.side_effect = UserNotFoundError("ukjent@example.com")

        response = signed_in.post("/api/companies/c1/members", json={"email": "ukjent@example.com"})

        assert response.status_code == 200
        assert response.json()["error"] == "Bruker ikke funnet"

    def test_remove_member(self, signed_in, company_service):
        response = signed_in.delete("/api/companies/c2/members/m1")

        assert response.status_code == 200
        company_service.remove_member.assert_awaited_once_with("m1")
        assert response.json()["selected_company_id"] == "c2"

    def test_products_company_switch(self, signed_in, product_service):
        signed_in.get("/api/products")

        body = signed_in.post("/api/products/select", json={"company_id": "c2"}).json()

        product_service.list_products.assert_awaited_with("c2")
        assert body["selected_company_id"] == "c2"

    def test_create_product_requires_name(self, signed_in):
        response = signed_in.post("/api/products", json={"name": ""})

        assert response.status_code == 422

    def test_create_test(self, signed_in, product_test_service):
        body = signed_in.post(
            "/api/tests",
            json={"title": "Smak", "product_id": "p1", "is_private": True},
        ).json()

        product_test_service.create_test.assert_awaited_once_with("p1", "Smak", None, True)
        assert body["error"] is None

    def test_results(self, signed_in, results_service):
        results_service.list_results.return_value = [
            ProductTestResult(id="r1", rating=5),
            ProductTestResult(id="r2", rating=5),
            ProductTestResult(id="r3", rating=4),
        ]

        body = signed_in.get("/api/tests/t1/results").json()

        assert body["statistics"]["average_rating"] == 4.7
        assert body["statistics"]["distribution"]["5"] == 67

    def test_share(self, signed_in, sharing_service):
        body = signed_in.post("/api/tests/t1/shares", json={"email": "kari@example.com"}).json()

        sharing_service.share_test.assert_awaited_once_with("t1", "kari@example.com")
        assert body["success"] == "Testen er delt!"
        assert body["email"] == ""

    def test_close_share_dialog(self, signed_in, sharing_service):
        signed_in.post("/api/tests/t1/shares", json={"email": "kari@example.com"})
        assert signed_in.get("/api/tests").json()["share_dialog"]["open"] is True

        body = signed_in.delete("/api/tests/t1/shares/dialog").json()

        assert body["share_dialog"] is None
        assert signed_in.get("/api/tests").json()["share_dialog"] is None

    def test_closing_other_test_dialog_keeps_open_one(self, signed_in, sharing_service):
        signed_in.post("/api/tests/t1/shares", json={"email": "kari@example.com"})

        body = signed_in.delete("/api/tests/t2/shares/dialog").json()

        assert body["share_dialog"]["test_id"] == "t1"

    def test_create_participant(self, signed_in, tester_service):
        body = signed_in.post(
            "/api/testers",
            json={"name": "Kari", "email": "kari@example.com", "phone": ""},
        ).json()

        tester_service.create_tester.assert_awaited_once_with("Kari", "kari@example.com", None)
        assert body["show_form"] is False
