"""Order lifecycle: creation, status transitions and customer data."""

import structlog

from src.entities import CustomerData, Order, OrderStatus, Store, utcnow
from src.exceptions import AmountOutOfRange, InvalidTransition, NotFound
from src.services import fees
from src.services.persistence import EntityKind, GatewayResult, PersistenceGateway

logger = structlog.get_logger()

DEFAULT_DESCRIPTION = "Quick link"


def checkout_link(order_id: str, base_url: str) -> str:
    """Shareable checkout URL for an order, e.g. ``https://host/#/checkout/<id>``."""
    base = base_url.split("#")[0]
    return f"{base}#/checkout/{order_id}"


class OrderLifecycleManager:
    """Creates orders and moves them through their payment lifecycle."""

    def __init__(self, gateway: PersistenceGateway, strict_transitions: bool = False):
        """
        Args:
            gateway: Persistence gateway
            strict_transitions: Refuse transitions out of terminal states
        """
        self.gateway = gateway
        self.strict_transitions = strict_transitions

    async def create_order(
        self,
        amount: float,
        description: str = "",
        store: Store | None = None,
    ) -> Order:
        """
        Validate the amount and persist a new pending order.

        Args:
            amount: Amount to collect
            description: Free text shown to the payer
            store: Optional store the order belongs to (name is snapshotted)

        Returns:
            The stored order

        Raises:
            AmountOutOfRange: If the amount is outside the accepted bounds
        """
        evaluation = fees.evaluate(amount)
        if not evaluation.valid:
            logger.info("order_rejected", amount=amount, reason=evaluation.reason)
            raise AmountOutOfRange(evaluation.reason, amount)

        now = utcnow()
        order = Order(
            amount=amount,
            description=description.strip() or DEFAULT_DESCRIPTION,
            status=OrderStatus.PENDING,
            store_id=store.id if store else None,
            store_name=store.name if store else None,
            created_at=now,
            updated_at=now,
        )
        result = await self.gateway.create(order)

        logger.info(
            "order_created",
            order_id=order.id,
            amount=amount,
            store_id=order.store_id,
            source=result.source.value,
        )
        return result.value

    async def get_order(self, order_id: str) -> Order:
        """Fetch an order or raise NotFound."""
        result = await self.gateway.get(EntityKind.ORDER, order_id)
        if result.value is None:
            raise NotFound("order", order_id)
        return result.value

    async def list_orders(self, store_id: str | None = None) -> GatewayResult[list[Order]]:
        """Orders of a store (or all), newest first."""
        return await self.gateway.list_entities(EntityKind.ORDER, store_id)

    def _check_transition(self, order: Order, new_status: OrderStatus) -> None:
        if not self.strict_transitions:
            return
        if order.status.is_terminal or new_status == OrderStatus.PENDING:
            raise InvalidTransition(order.id, order.status.value, new_status.value)

    async def transition(self, order_id: str, new_status: OrderStatus) -> Order:
        """
        Set an order's status.

        By default any status may overwrite any other, including terminal
        ones. With strict transitions only pending orders can move, and only
        to a terminal status.

        Raises:
            NotFound: If the order does not exist
            InvalidTransition: If refused by the strict policy
        """
        new_status = OrderStatus(new_status)
        order = await self.get_order(order_id)
        self._check_transition(order, new_status)

        result = await self.gateway.update_status(order_id, new_status)
        if result.value is None:
            # The answering target did not have it
            raise NotFound("order", order_id)

        logger.info(
            "order_status_changed",
            order_id=order_id,
            previous=order.status.value,
            status=new_status.value,
            source=result.source.value,
        )
        return result.value

    async def attach_customer_data(self, order_id: str, customer: CustomerData) -> Order:
        """
        Merge payer identification into an order without touching its status.

        Only fields that are set on ``customer`` are written.

        Raises:
            NotFound: If the order does not exist
        """
        fields = customer.model_dump(exclude_none=True)
        result = await self.gateway.update_fields(EntityKind.ORDER, order_id, fields)
        if result.value is None:
            raise NotFound("order", order_id)

        logger.info(
            "order_customer_attached",
            order_id=order_id,
            fields=sorted(fields),
            source=result.source.value,
        )
        return result.value
