"""Error taxonomy for the payment links core."""


class PaymentLinksError(Exception):
    """Base class for all errors raised by the core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(PaymentLinksError):
    """Caller input was rejected; nothing was persisted."""


class AmountOutOfRange(ValidationFailure):
    """Order amount is outside the accepted transaction bounds."""

    def __init__(self, reason: str, amount: float):
        super().__init__(reason)
        self.reason = reason
        self.amount = amount


class InvalidStore(ValidationFailure):
    """Store record failed validation (e.g. blank name)."""


class AlreadyExists(ValidationFailure):
    """The remote service already holds a record with this id (409)."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"Cannot {operation.replace('_', ' ')}: a record with this id already exists")
        self.operation = operation
        self.detail = detail


class InvalidTransition(ValidationFailure):
    """Status change refused by the strict transition policy."""

    def __init__(self, order_id: str, current: str, requested: str):
        super().__init__(
            f"Order {order_id} cannot move from {current} to {requested}"
        )
        self.order_id = order_id
        self.current = current
        self.requested = requested


class NotFound(PaymentLinksError):
    """Unknown order or store id."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind.capitalize()} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class MissingCredentials(PaymentLinksError):
    """No API key resolvable for a store (neither its own nor the global one)."""

    def __init__(self, store_id: str | None):
        scope = f"store {store_id}" if store_id else "the global scope"
        super().__init__(f"No API key configured for {scope}")
        self.store_id = store_id


class LocalCacheError(PaymentLinksError):
    """The local fallback cache could not be read or written."""
