"""
HTTP API tests through FastAPI's TestClient.
"""
import base64
import json
from datetime import date

import pytest

API = "/api/v1"


def _bearer(profile_id):
    def segment(data):
        return base64.urlsafe_b64encode(json.dumps(data).encode()).decode().rstrip("=")

    token = f"{segment({'alg': 'none'})}.{segment({'sub': profile_id})}.signature"
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api_contract(client, investor):
    response = client.post(
        f"{API}/investors/contracts",
        json={
            "investor_id": investor.id,
            "investment_amount": "4500000",
            "profit_sharing_percentage": "70",
            "duration_months": 12,
            "start_date": date.today().isoformat(),
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:

    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestContractsApi:

    def test_create_and_get(self, client, api_contract, investor):
        assert api_contract["contract_number"].startswith("INV-")
        assert api_contract["status"] == "Active"
        assert api_contract["investor_name"] == investor.name
        assert float(api_contract["owner_sharing_percentage"]) == 30

        response = client.get(f"{API}/investors/contracts/{api_contract['id']}")
        assert response.status_code == 200
        assert response.json()["contract_number"] == api_contract["contract_number"]

    def test_missing_contract_is_404(self, client):
        response = client.get(f"{API}/investors/contracts/9999")
        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    def test_create_for_non_investor_is_422(self, client, staff):
        response = client.post(
            f"{API}/investors/contracts",
            json={"investor_id": staff.id, "investment_amount": "1000", "duration_months": 12},
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "validation_error"

    def test_my_contracts(self, client, api_contract, investor):
        response = client.get(f"{API}/investors/me/contracts", headers=_bearer(investor.id))
        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [api_contract["id"]]

    def test_my_contracts_is_for_investors_only(self, client, staff):
        response = client.get(f"{API}/investors/me/contracts", headers=_bearer(staff.id))
        assert response.status_code == 403

    def test_my_contracts_requires_token(self, client):
        response = client.get(f"{API}/investors/me/contracts", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

        response = client.get(f"{API}/investors/me/contracts")
        assert response.status_code == 401

    @pytest.mark.parametrize("token", ["not-a-jwt", "a.%%%.c", "a.bnVsbA.c"])
    def test_my_contracts_rejects_unreadable_token(self, client, token):
        response = client.get(f"{API}/investors/me/contracts", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_my_contracts_unknown_profile(self, client):
        response = client.get(
            f"{API}/investors/me/contracts",
            headers=_bearer("00000000-0000-0000-0000-000000000000"),
        )
        assert response.status_code == 401

    def test_list_filters_by_status(self, client, api_contract):
        client.post(f"{API}/investors/contracts/{api_contract['id']}/cancel")
        active = client.get(f"{API}/investors/contracts", params={"status": "Active"}).json()
        cancelled = client.get(f"{API}/investors/contracts", params={"status": "Cancelled"}).json()
        assert active == []
        assert [c["id"] for c in cancelled] == [api_contract["id"]]


class TestAllocationAndSettlementFlow:

    def test_full_flow(self, client, api_contract, sheep):
        contract_id = api_contract["id"]

        response = client.post(
            f"{API}/investors/contracts/{contract_id}/sheep",
            json={"sheep_id": sheep.id, "purchase_price": "4500000"},
        )
        assert response.status_code == 201, response.text
        assert response.json()["tag_id"] == sheep.tag_id

        response = client.post(
            f"{API}/investors/contracts/{contract_id}/expenses",
            json={"category": "Feed", "description": "Hay", "amount": "200000"},
        )
        assert response.status_code == 201, response.text

        summary = client.get(f"{API}/investors/contracts/{contract_id}/summary").json()
        assert float(summary["net_result"]) == 5000000
        assert float(summary["estimated_investor_profit"]) == 350000
        assert round(float(summary["estimated_roi"]), 2) == 11.11

        response = client.post(f"{API}/investors/contracts/{contract_id}/complete", json={"notes": "closing"})
        assert response.status_code == 200, response.text
        completed = response.json()
        assert completed["status"] == "Completed"
        # defaults to the live totals: no sales yet
        assert float(completed["total_revenue"]) == 0
        assert float(completed["total_expenses"]) == 200000

        response = client.post(
            f"{API}/investors/contracts/{contract_id}/complete",
            json={"total_revenue": "1", "total_expenses": "0"},
        )
        assert response.status_code == 409
        assert response.json()["error_type"] == "invalid_state"

    def test_double_allocation_is_409(self, client, api_contract, investor, sheep):
        other = client.post(
            f"{API}/investors/contracts",
            json={"investor_id": investor.id, "investment_amount": "1000000"},
        ).json()
        payload = {"sheep_id": sheep.id, "purchase_price": "4500000"}
        assert client.post(f"{API}/investors/contracts/{api_contract['id']}/sheep", json=payload).status_code == 201

        response = client.post(f"{API}/investors/contracts/{other['id']}/sheep", json=payload)
        assert response.status_code == 409
        assert response.json()["error_type"] == "conflict"

    def test_sold_and_deallocate(self, client, api_contract, make_sheep):
        contract_id = api_contract["id"]
        first, second = make_sheep(), make_sheep()
        for s in (first, second):
            client.post(
                f"{API}/investors/contracts/{contract_id}/sheep",
                json={"sheep_id": s.id, "purchase_price": "1000000"},
            )

        response = client.post(
            f"{API}/investors/contracts/{contract_id}/sheep/{first.id}/sold",
            json={"sale_price": "1500000"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Sold"

        response = client.delete(f"{API}/investors/contracts/{contract_id}/sheep/{second.id}")
        assert response.status_code == 204

        rows = client.get(f"{API}/investors/contracts/{contract_id}/sheep").json()
        assert [r["sheep_id"] for r in rows] == [first.id]

    def test_expense_before_start_is_422(self, client, api_contract):
        response = client.post(
            f"{API}/investors/contracts/{api_contract['id']}/expenses",
            json={"category": "Feed", "description": "Hay", "amount": "1000", "expense_date": "2000-01-01"},
        )
        assert response.status_code == 422

    def test_statement_pdf(self, client, api_contract, sheep):
        client.post(
            f"{API}/investors/contracts/{api_contract['id']}/sheep",
            json={"sheep_id": sheep.id, "purchase_price": "4500000"},
        )
        response = client.get(f"{API}/investors/contracts/{api_contract['id']}/statement.pdf")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")


class TestReportsApi:

    def test_create_and_publish(self, client, api_contract):
        response = client.post(
            f"{API}/investors/contracts/{api_contract['id']}/reports",
            json={"report_period": "2026-03", "highlights": "Good weight gain"},
        )
        assert response.status_code == 201, response.text
        report = response.json()
        assert report["status"] == "Draft"

        response = client.post(f"{API}/investors/reports/{report['id']}/publish")
        assert response.json()["status"] == "Published"
        assert client.post(f"{API}/investors/reports/{report['id']}/publish").status_code == 409

    def test_bad_period_rejected(self, client, api_contract):
        response = client.post(
            f"{API}/investors/contracts/{api_contract['id']}/reports",
            json={"report_period": "2026-13"},
        )
        assert response.status_code == 422


class TestSheepApi:

    def test_create_generates_tag(self, client):
        response = client.post(
            f"{API}/livestock/sheep",
            json={"breed": "Garut", "gender": "Male", "market_value": "3000000"},
        )
        assert response.status_code == 201, response.text
        assert response.json()["tag_id"] == "AF-001"

        second = client.post(f"{API}/livestock/sheep", json={"breed": "Garut", "gender": "Female"}).json()
        assert second["tag_id"] == "AF-002"

    def test_duplicate_tag_is_400(self, client):
        payload = {"tag_id": "AF-010", "breed": "Garut", "gender": "Male"}
        assert client.post(f"{API}/livestock/sheep", json=payload).status_code == 201
        assert client.post(f"{API}/livestock/sheep", json=payload).status_code == 400

    def test_available_excludes_allocated(self, client, api_contract, make_sheep):
        allocated, free, sick = make_sheep(), make_sheep(), make_sheep(status="Sick")
        client.post(
            f"{API}/investors/contracts/{api_contract['id']}/sheep",
            json={"sheep_id": allocated.id, "purchase_price": "1000000"},
        )
        ids = [s["id"] for s in client.get(f"{API}/livestock/sheep/available").json()]
        assert ids == [free.id]

    def test_update_market_value(self, client, sheep):
        response = client.put(f"{API}/livestock/sheep/{sheep.id}", json={"market_value": "6100000"})
        assert response.status_code == 200
        assert float(response.json()["market_value"]) == 6100000

    def test_missing_sheep_is_404(self, client):
        assert client.get(f"{API}/livestock/sheep/9999").status_code == 404
