"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from laman.application.notifications import NullNotifier, OrderNotifier
from laman.domain.model.value_objects import Money
from laman.domain.service.order_pricing_service import OrderPricingService
from laman.infrastructure.config import Settings
from laman.infrastructure.notification.telegram_notifier import TelegramNotifier
from laman.infrastructure.persistence.json_delivery_repository import (
    JsonDeliveryRepository,
)
from laman.infrastructure.persistence.json_order_repository import (
    COLLECTIONS,
    JsonOrderRepository,
)
from laman.infrastructure.persistence.json_payment_repository import (
    JsonPaymentRepository,
)
from laman.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from laman.infrastructure.persistence.json_store import JsonDocumentStore


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def order_store() -> JsonDocumentStore:
    cfg = settings()
    return JsonDocumentStore(
        cfg.data_dir / "orders.json", COLLECTIONS, timeout=cfg.store_timeout
    )


def product_repository() -> JsonProductRepository:
    cfg = settings()
    return JsonProductRepository(cfg.data_dir / "products.json", timeout=cfg.store_timeout)


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(order_store())


def delivery_repository() -> JsonDeliveryRepository:
    return JsonDeliveryRepository(order_store())


def payment_repository() -> JsonPaymentRepository:
    return JsonPaymentRepository(order_store())


def order_pricer() -> OrderPricingService:
    cfg = settings()
    return OrderPricingService(
        service_fee_percent=cfg.service_fee_percent,
        delivery_fee=Money(cfg.delivery_fee),
    )


def order_notifier() -> OrderNotifier:
    cfg = settings()
    if cfg.telegram_enabled:
        return TelegramNotifier(cfg.telegram_bot_token, cfg.telegram_chat_id)
    return NullNotifier()


def reset() -> None:
    """Forget cached settings and stores (the environment changed)."""
    settings.cache_clear()
    order_store.cache_clear()
