"""Unit tests for API endpoints."""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_liveness_check(self, client):
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    async def test_readiness_reports_database(self, client):
        with patch("src.api.routes.health.check_db_connection", new_callable=AsyncMock) as mock_db:
            mock_db.return_value = False

            response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "not_ready", "checks": {"database": False}}


@pytest.mark.asyncio
class TestStoreEndpoints:
    """Tests for /api/stores."""

    async def test_create_and_get(self, client, sample_store):
        response = await client.post("/api/stores", json=sample_store.to_wire())

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "store_abc123"
        assert data["apiKey"] == "store-key"
        assert data["feePercent"] == 0.99
        assert data["feeFixed"] == 0.50

        fetched = await client.get("/api/stores/store_abc123")
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Corner Bakery"

    async def test_duplicate_id_conflicts(self, client, sample_store):
        await client.post("/api/stores", json=sample_store.to_wire())
        response = await client.post("/api/stores", json=sample_store.to_wire())

        assert response.status_code == 409

    async def test_unknown_store(self, client):
        response = await client.get("/api/stores/store_missing")
        assert response.status_code == 404

    async def test_list_newest_first(self, client):
        await client.post(
            "/api/stores",
            json={"id": "old", "name": "Old", "createdAt": "2020-01-01T00:00:00Z"},
        )
        await client.post(
            "/api/stores",
            json={"id": "new", "name": "New", "createdAt": "2020-06-01T00:00:00Z"},
        )

        response = await client.get("/api/stores")

        assert [s["id"] for s in response.json()] == ["new", "old"]

    async def test_update_settings(self, client, sample_store):
        await client.post("/api/stores", json=sample_store.to_wire())

        response = await client.put(
            "/api/stores/store_abc123",
            json={"name": "Corner Bakery", "apiKey": "rotated", "feePercent": 1.5},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["apiKey"] == "rotated"
        assert data["feePercent"] == 1.5
        assert data["feeFixed"] == 0.50
        assert data["description"] == "Bread and cakes"

    async def test_update_unknown_store(self, client):
        response = await client.put("/api/stores/store_missing", json={"name": "Ghost"})
        assert response.status_code == 404


@pytest.mark.asyncio
class TestOrderEndpoints:
    """Tests for /api/orders."""

    async def test_save_creates(self, client, sample_orders):
        order = sample_orders[0]

        response = await client.post("/api/orders", json=order.to_wire())

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == order.id
        assert data["status"] == "completed"
        assert "createdAt" in data
        assert "updatedAt" in data

    async def test_save_is_upsert(self, client):
        await client.post("/api/orders", json={"id": "o1", "amount": 20, "description": "First"})
        await client.post(
            "/api/orders",
            json={"id": "o1", "amount": 20, "customer_name": "Ana"},
        )

        response = await client.get("/api/orders")
        orders = response.json()

        assert len(orders) == 1
        assert orders[0]["customer_name"] == "Ana"
        assert orders[0]["description"] == "First"

    async def test_rejects_non_positive_amount(self, client):
        response = await client.post("/api/orders", json={"amount": 0})
        assert response.status_code == 422

    async def test_list_filters_by_store(self, client):
        await client.post("/api/orders", json={"id": "a", "amount": 20, "store_id": "s1"})
        await client.post("/api/orders", json={"id": "b", "amount": 30, "store_id": "s2"})

        response = await client.get("/api/orders", params={"storeId": "s1"})

        assert [o["id"] for o in response.json()] == ["a"]

    async def test_unknown_order(self, client):
        response = await client.get("/api/orders/missing")
        assert response.status_code == 404

    async def test_update_status(self, client):
        created = await client.post("/api/orders", json={"id": "o1", "amount": 20})

        response = await client.patch("/api/orders/o1/status", json={"status": "completed"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert datetime.fromisoformat(data["updatedAt"]) >= datetime.fromisoformat(
            created.json()["updatedAt"]
        )

    async def test_update_status_unknown_value(self, client):
        await client.post("/api/orders", json={"id": "o1", "amount": 20})

        response = await client.patch("/api/orders/o1/status", json={"status": "shipped"})

        assert response.status_code == 422

    async def test_update_status_unknown_order(self, client):
        response = await client.patch("/api/orders/missing/status", json={"status": "completed"})
        assert response.status_code == 404


@pytest.mark.asyncio
class TestDashboardEndpoint:
    """Tests for /api/dashboard/metrics."""

    async def test_empty(self, client):
        response = await client.get("/api/dashboard/metrics")

        assert response.status_code == 200
        assert response.json() == {
            "totalOrders": 0,
            "totalRevenue": 0,
            "pendingOrders": 0,
            "conversionRate": "0.0",
        }

    async def test_global_and_scoped(self, client):
        for order in (
            {"id": "a", "amount": 100, "status": "completed", "store_id": "s1"},
            {"id": "b", "amount": 20, "status": "pending", "store_id": "s1"},
            {"id": "c", "amount": 5000, "status": "completed", "store_id": "s2"},
            {"id": "d", "amount": 70, "status": "refunded", "store_id": "s2"},
        ):
            await client.post("/api/orders", json=order)

        everything = (await client.get("/api/dashboard/metrics")).json()
        scoped = (await client.get("/api/dashboard/metrics", params={"storeId": "s1"})).json()

        assert everything == {
            "totalOrders": 4,
            "totalRevenue": 5100,
            "pendingOrders": 1,
            "conversionRate": "50.0",
        }
        assert scoped == {
            "totalOrders": 2,
            "totalRevenue": 100,
            "pendingOrders": 1,
            "conversionRate": "50.0",
        }

    async def test_conversion_rate_rounds_ties_up(self, client):
        await client.post("/api/orders", json={"id": "paid", "amount": 20, "status": "completed"})
        for i in range(15):
            await client.post("/api/orders", json={"id": f"open{i}", "amount": 20})

        response = await client.get("/api/dashboard/metrics")

        assert response.json()["conversionRate"] == "6.3"
