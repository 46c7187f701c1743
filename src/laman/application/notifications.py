"""Outbound port: new-order notifications.

Notifications are best effort.  Implementations raise NotificationError
on failure and the create-order use case logs it and carries on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from laman.domain.model.order import OrderWithItems


@dataclass(frozen=True)
class NewOrderNotice:
    """What staff need to see about a fresh order."""

    order: OrderWithItems
    customer: str | None
    phone: str | None
    comment: str | None
    address: str | None
    items: str  # e.g. "Milk × 2, Bread × 1"


class OrderNotifier(ABC):

    @abstractmethod
    def notify_order_created(self, notice: NewOrderNotice) -> None:
        """Deliver the notice or raise NotificationError."""


class NullNotifier(OrderNotifier):
    """Used when no notification channel is configured."""

    def notify_order_created(self, notice: NewOrderNotice) -> None:
        return None
