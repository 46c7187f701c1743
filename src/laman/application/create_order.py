"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain services:

    resolve products -> price -> build aggregate -> persist -> notify

Nothing is written unless every item was priced, and the four records are
handed to the repository as one unit.  Notification runs after the commit
and can never fail the order.
"""

from __future__ import annotations

import structlog

from laman.application.dto import OrderDTO
from laman.application.notifications import NewOrderNotice, NullNotifier, OrderNotifier
from laman.domain.exceptions import NotificationError
from laman.domain.model.order import OrderAggregate
from laman.domain.model.order_request import OrderRequest
from laman.domain.model.product import Product
from laman.domain.repository.order_repository import OrderRepository
from laman.domain.repository.product_repository import ProductRepository
from laman.domain.service.order_aggregate_builder import OrderAggregateBuilder
from laman.domain.service.order_pricing_service import OrderPricingService
from laman.domain.service.product_snapshot_resolver import ProductSnapshotResolver

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        pricer: OrderPricingService,
        builder: OrderAggregateBuilder | None = None,
        notifier: OrderNotifier | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._resolver = ProductSnapshotResolver(product_repo)
        self._pricer = pricer
        self._builder = builder or OrderAggregateBuilder()
        self._notifier = notifier or NullNotifier()

    def handle(self, request: OrderRequest) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Validate identity, address and payment method (no I/O).
        2. Resolve all requested products in one batch.
        3. Price the items with *current* prices (snapshot).
        4. Build the order, items, delivery and payment.
        5. Persist them as one unit and notify staff.
        """
        self._builder.check(request)

        catalog = self._resolver.resolve(request.product_ids)
        pricing = self._pricer.price(request.items, catalog)
        aggregate = self._builder.build(request, pricing)

        self._order_repo.add(aggregate)
        logger.info(
            "Order created",
            order_id=str(aggregate.order.id),
            items=len(aggregate.items),
            final_total=str(aggregate.order.final_total.amount),
            guest=aggregate.order.is_guest,
        )

        self._notify(aggregate, catalog)
        return OrderDTO.from_domain(aggregate.with_items())

    # --- Notification ---------------------------------------------------------

    def _notify(self, aggregate: OrderAggregate, catalog: dict) -> None:
        try:
            self._notifier.notify_order_created(self._notice(aggregate, catalog))
        except NotificationError as exc:
            logger.warning(
                "New order notification failed",
                order_id=str(aggregate.order.id),
                error=str(exc),
            )

    @staticmethod
    def _notice(aggregate: OrderAggregate, catalog: dict) -> NewOrderNotice:
        order = aggregate.order
        customer = order.customer
        items = ", ".join(
            f"{_product_name(catalog, item.product_id)} × {item.quantity}"
            for item in aggregate.items
        )
        return NewOrderNotice(
            order=aggregate.with_items(),
            customer=customer.display_name,
            phone=customer.contact_phone,
            comment=order.comment,
            address=aggregate.delivery.address,
            items=items,
        )


def _product_name(catalog: dict, product_id) -> str:
    product: Product | None = catalog.get(product_id)
    return product.name if product is not None else str(product_id)
