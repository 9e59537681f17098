"""Tests for domain entities and their wire format."""

from datetime import UTC, datetime

import pytest

from src.entities import CustomerData, MetricsSummary, Order, OrderStatus, Store


class TestOrderStatus:
    """Tests for the status lifecycle."""

    def test_only_pending_is_non_terminal(self):
        assert OrderStatus.PENDING.is_terminal is False
        terminal = [s for s in OrderStatus if s.is_terminal]
        assert set(terminal) == {
            OrderStatus.COMPLETED,
            OrderStatus.EXPIRED,
            OrderStatus.CANCELLED,
            OrderStatus.REFUNDED,
        }

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            OrderStatus("paid")


class TestWireFormat:
    """Tests for alias handling."""

    def test_store_uses_camel_case(self, sample_store):
        data = sample_store.to_wire()

        assert data["apiKey"] == "store-key"
        assert data["feePercent"] == 0.99
        assert data["feeFixed"] == 0.50
        assert "createdAt" in data
        assert "api_key" not in data

    def test_store_accepts_wire_and_field_names(self):
        by_alias = Store.model_validate({"id": "s1", "name": "A", "feePercent": 2})
        by_name = Store(id="s1", name="A", fee_percent=2)
        assert by_alias.fee_percent == by_name.fee_percent == 2

    def test_order_keys(self):
        data = Order(amount=15, description="Test").to_wire()

        assert data["status"] == "pending"
        assert data["store_id"] is None
        assert "createdAt" in data and "updatedAt" in data

    def test_generated_ids_are_unique(self):
        ids = {Order(amount=15).id for _ in range(100)}
        assert len(ids) == 100
        assert Store(name="x").id.startswith("store_")

    def test_naive_timestamps_are_utc(self):
        order = Order.model_validate(
            {"amount": 15, "createdAt": "2026-01-02T10:00:00", "updatedAt": "2026-01-02T10:00:00"}
        )
        assert order.created_at == datetime(2026, 1, 2, 10, 0, tzinfo=UTC)

    def test_amount_must_be_positive(self):
        with pytest.raises(ValueError):
            Order(amount=0)

    def test_merged_validates(self):
        order = Order(amount=15)
        updated = order.merged({"status": "completed", "customer_name": "Ana"})

        assert updated.status == OrderStatus.COMPLETED
        assert updated.customer_name == "Ana"
        assert updated.id == order.id
        assert order.status == OrderStatus.PENDING


class TestMetricsSummary:
    def test_defaults_are_empty_scope(self):
        summary = MetricsSummary()
        assert summary.model_dump(by_alias=True) == {
            "totalOrders": 0,
            "totalRevenue": 0,
            "pendingOrders": 0,
            "conversionRate": "0.0",
        }


def test_customer_data_excludes_unset():
    data = CustomerData(customer_name="Ana", customer_email="ana@example.com")
    assert data.model_dump(exclude_none=True) == {
        "customer_name": "Ana",
        "customer_email": "ana@example.com",
    }
