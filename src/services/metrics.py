"""Dashboard figures derived from a set of orders."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from src.entities import AdminSettings, MetricsSummary, Order, OrderStatus, Store
from src.services.store_settings import resolve_store_settings

ONE_DECIMAL = Decimal("0.1")


def format_conversion_rate(completed: int, total: int) -> str:
    """
    Completed share as a percentage with one decimal; "0.0" for an empty scope.

    Ties round up on the exact float value, so 1 of 16 gives "6.3".
    """
    if total == 0:
        return "0.0"
    rate = Decimal(completed / total * 100).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return str(rate)


def compute_metrics(orders: Iterable[Order]) -> MetricsSummary:
    """
    Summarize orders already filtered to one scope.

    Revenue only counts completed orders.
    """
    total = 0
    completed = 0
    pending = 0
    revenue = 0
    for order in orders:
        total += 1
        if order.status == OrderStatus.COMPLETED:
            completed += 1
            revenue += order.amount
        elif order.status == OrderStatus.PENDING:
            pending += 1

    return MetricsSummary(
        total_orders=total,
        total_revenue=revenue,
        pending_orders=pending,
        conversion_rate=format_conversion_rate(completed, total),
    )


@dataclass(frozen=True)
class FinancialEstimate:
    """Fees and net revenue estimated from a store's fee settings."""

    estimated_fees: float
    estimated_net: float


def estimate_financials(summary: MetricsSummary, store: Store | None) -> FinancialEstimate:
    """
    Estimate fees charged on the completed revenue of a scope.

    Fees are only estimated inside a store with revenue; the global scope
    reports the gross revenue as net.
    """
    if store is None or summary.total_revenue <= 0:
        return FinancialEstimate(
            estimated_fees=0,
            estimated_net=summary.total_revenue,
        )

    # Fee resolution does not depend on the global credentials
    effective = resolve_store_settings(store, AdminSettings())
    fees = (
        summary.total_revenue * effective.fee_percent / 100
        + summary.total_orders * effective.fee_fixed
    )
    return FinancialEstimate(
        estimated_fees=fees,
        estimated_net=summary.total_revenue - fees,
    )
