"""HTTP tests for the routers, error mapping and role checks."""

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from sinkquote.core.db import get_db
from sinkquote.core.security import create_access_token
from sinkquote.utils.get_user import get_current_user

from helpers import insert_measurement, insert_sink


@pytest_asyncio.fixture
async def client_for(session_factory):
    """Build a client acting as the given user (or with real token auth when None)."""
    clients = []

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def make(user=None):
        app.dependency_overrides[get_db] = override_get_db
        if user is not None:
            app.dependency_overrides[get_current_user] = lambda: user
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield make

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


def _quote_payload(customer_id):
    return {
        "customer_id": customer_id,
        "tax_rate": "0.0825",
        "discount_amount": "50.00",
        "line_items": [
            {"name": "Undermount sink", "unit_price": "500.00"},
            {"name": "Faucet", "unit_price": "200.00", "quantity": 2, "discount_percent": "10"},
            {"name": "Installation", "unit_price": "250.00", "type": "labor"},
        ],
    }


class TestHealth:

    async def test_health(self, client_for):
        client = await client_for()
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestAuth:

    async def test_missing_token(self, client_for):
        client = await client_for()
        response = await client.get("/quotes/")
        assert response.status_code == 401

    async def test_bearer_token(self, client_for, salesperson):
        client = await client_for()
        token = create_access_token({"sub": salesperson.username}, token_version=salesperson.token_version)
        response = await client.get("/quotes/", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["total"] == 0

    async def test_stale_token_version(self, client_for, salesperson):
        client = await client_for()
        token = create_access_token({"sub": salesperson.username}, token_version=salesperson.token_version + 1)
        response = await client.get("/quotes/", headers={"token": token})
        assert response.status_code == 401


class TestQuoteEndpoints:

    async def test_create_quote(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        response = await client.post("/quotes/", json=_quote_payload(customer.id))
        assert response.status_code == 201
        data = response.json()["data"]
        assert Decimal(data["total"]) == Decimal("1147.45")
        assert data["status"] == "draft"

    async def test_empty_line_items_rejected(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        payload = {**_quote_payload(customer.id), "line_items": []}
        response = await client.post("/quotes/", json=payload)
        assert response.status_code == 422

    async def test_tax_rate_out_of_range(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        payload = {**_quote_payload(customer.id), "tax_rate": "8.25"}
        response = await client.post("/quotes/", json=payload)
        assert response.status_code == 422

    async def test_version_conflict_payload(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        quote_id = (await client.post("/quotes/", json=_quote_payload(customer.id))).json()["data"]["id"]

        first = await client.put(f"/quotes/{quote_id}", json={"version": 1, "notes": "first"})
        assert first.status_code == 200
        assert first.json()["data"]["version"] == 2

        second = await client.put(f"/quotes/{quote_id}", json={"version": 1, "notes": "second"})
        assert second.status_code == 409
        detail = second.json()["detail"]
        assert detail["server_version"] == 2
        assert detail["client_version"] == 1
        assert detail["server_data"]["notes"] == "first"

    async def test_invalid_transition(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        quote_id = (await client.post("/quotes/", json=_quote_payload(customer.id))).json()["data"]["id"]
        response = await client.patch(f"/quotes/{quote_id}/status", json={"status": "accepted"})
        assert response.status_code == 400
        assert "draft" in response.json()["detail"]

    async def test_line_item_round_trip(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        quote_id = (await client.post("/quotes/", json=_quote_payload(customer.id))).json()["data"]["id"]

        added = await client.post(
            f"/quotes/{quote_id}/line-items", json={"name": "Disposal", "unit_price": "140.00"}
        )
        assert added.status_code == 201
        item_id = added.json()["data"]["line_item"]["id"]

        removed = await client.delete(f"/quotes/{quote_id}/line-items/{item_id}")
        assert removed.status_code == 200
        assert Decimal(removed.json()["data"]["totals"]["total"]) == Decimal("1147.45")

    async def test_missing_quote(self, client_for, salesperson):
        client = await client_for(salesperson)
        response = await client.get("/quotes/9999")
        assert response.status_code == 404

    async def test_expire_requires_admin(self, client_for, salesperson):
        client = await client_for(salesperson)
        response = await client.post("/quotes/expire-stale")
        assert response.status_code == 403

    async def test_expire_as_admin(self, client_for, admin):
        client = await client_for(admin)
        response = await client.post("/quotes/expire-stale")
        assert response.status_code == 200
        assert response.json()["expired"] == 0


class TestSinkEndpoints:

    async def test_catalog_writes_require_admin(self, client_for, salesperson):
        client = await client_for(salesperson)
        response = await client.post(
            "/sinks/",
            json={
                "sku": "X-1", "name": "X", "material": "fireclay", "mounting_style": "farmhouse",
                "width_inches": "33", "depth_inches": "20", "height_inches": "10", "base_price": "900",
            },
        )
        assert response.status_code == 403

    async def test_duplicate_sku_conflict(self, client_for, admin):
        client = await client_for(admin)
        payload = {
            "sku": "X-1", "name": "X", "material": "fireclay", "mounting_style": "farmhouse",
            "width_inches": "33", "depth_inches": "20", "height_inches": "10", "base_price": "900",
        }
        assert (await client.post("/sinks/", json=payload)).status_code == 201
        assert (await client.post("/sinks/", json=payload)).status_code == 409

    async def test_match(self, client_for, db, company, customer, salesperson):
        measurement = await insert_measurement(db, company.id, customer.id)
        await insert_sink(db, company.id, sku="FITS")
        await insert_sink(db, company.id, sku="TOO-WIDE", width_inches=Decimal("40"))

        client = await client_for(salesperson)
        response = await client.post("/sinks/match", json={"measurement_id": measurement.id, "limit": 5})
        assert response.status_code == 200
        matches = response.json()["data"]["matches"]
        assert [m["sink"]["sku"] for m in matches] == ["FITS", "TOO-WIDE"]
        assert matches[1]["fit_rating"] == "no_go"
        assert matches[1]["hard_gate_failures"]

    @pytest.mark.parametrize("limit", [0, 51])
    async def test_match_limit_bounds(self, client_for, salesperson, limit):
        client = await client_for(salesperson)
        response = await client.post("/sinks/match", json={"measurement_id": 1, "limit": limit})
        assert response.status_code == 422

    async def test_null_required_field_is_422(self, client_for, admin):
        client = await client_for(admin)
        payload = {
            "sku": "X-2", "name": "X", "material": "fireclay", "mounting_style": "farmhouse",
            "width_inches": "33", "depth_inches": "20", "height_inches": "10", "base_price": "900",
        }
        sink_id = (await client.post("/sinks/", json=payload)).json()["data"]["id"]
        response = await client.put(f"/sinks/{sink_id}", json={"name": None})
        assert response.status_code == 422


class TestCustomerEndpoints:

    async def test_update_and_soft_delete(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        updated = await client.put(f"/customers/{customer.id}", json={"phone": "555-0100"})
        assert updated.status_code == 200
        assert updated.json()["data"]["phone"] == "555-0100"

        deleted = await client.delete(f"/customers/{customer.id}")
        assert deleted.status_code == 200
        assert (await client.get(f"/customers/{customer.id}")).status_code == 404

    async def test_other_salesperson_gets_404(self, client_for, customer, other_salesperson):
        client = await client_for(other_salesperson)
        response = await client.delete(f"/customers/{customer.id}")
        assert response.status_code == 404


class TestAnalyticsEndpoints:

    async def test_summary(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        await client.post("/quotes/", json=_quote_payload(customer.id))
        response = await client.get("/quotes/analytics/")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_quotes"] == 1
        assert data["by_status"]["draft"] == 1
        assert Decimal(data["total_value"]) == Decimal("1147.45")

    async def test_trends_requires_window(self, client_for, salesperson):
        client = await client_for(salesperson)
        response = await client.get("/quotes/analytics/trends")
        assert response.status_code == 422

    async def test_trends_by_month(self, client_for, customer, salesperson):
        client = await client_for(salesperson)
        await client.post("/quotes/", json=_quote_payload(customer.id))
        response = await client.get(
            "/quotes/analytics/trends",
            params={"start_date": "2000-01-01T00:00:00Z", "end_date": "2100-01-01T00:00:00Z", "group_by": "month"},
        )
        assert response.status_code == 200
        assert [point["quotes"] for point in response.json()["data"]] == [1]

    async def test_rep_performance_is_for_management(self, client_for, salesperson, manager):
        client = await client_for(salesperson)
        assert (await client.get("/quotes/analytics/reps")).status_code == 403

        client = await client_for(manager)
        response = await client.get("/quotes/analytics/reps")
        assert response.status_code == 200
        assert response.json()["data"] == []
