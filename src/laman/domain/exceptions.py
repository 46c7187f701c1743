"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly.  Each subclass carries the
structured data a transport needs, so callers never inspect message text.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """An ordered product is missing from the catalog."""

    def __init__(self, product_id) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class ProductUnavailableError(ValidationError):
    """An ordered product exists but cannot be sold right now."""

    def __init__(self, product_id, product_name: str) -> None:
        self.product_id = product_id
        self.product_name = product_name
        super().__init__(f"Product is unavailable: {product_name} ({product_id})")


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class InvalidTransitionError(ValidationError):
    """The requested status is not reachable from the current one."""

    def __init__(self, current, requested) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move order from {current.value} to {requested.value}"
        )


class UnknownOrderTransitionError(InvalidTransitionError, OrderNotFoundError):
    """A transition was requested for an order that does not exist.

    There is no current status to move from, so ``current`` is None.
    """

    def __init__(self, order_id, requested) -> None:
        self.order_id = order_id
        self.current = None
        self.requested = requested
        DomainException.__init__(
            self,
            f"Cannot move order {order_id} to {requested.value}: order not found",
        )


class ConcurrentModificationError(DomainException):
    """The order changed between the status read and the conditional write.

    Callers may re-read the order and reissue the request.
    """

    def __init__(self, order_id, expected, actual) -> None:
        self.order_id = order_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Order {order_id} status changed concurrently "
            f"(expected {expected.value}, found {actual.value})"
        )


class PersistenceError(DomainException):
    """A write to the store did not complete; nothing was committed."""


class UnavailableError(DomainException):
    """The store could not be read or did not answer in time."""


class NotificationError(DomainException):
    """An outbound notification could not be delivered."""
