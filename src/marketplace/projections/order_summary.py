"""Order summary: listing view for customers and the admin order desk.

Product names and the customer's email are copied from OrderPlaced, so
listings read one row per order. `search_text` holds the lowercased order id,
customer id and payment id for substring search.
"""

import json

from protean.core.projector import on
from protean.fields import Date, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ordering.events import OrderDelivered, OrderFailed, OrderPlaced, OrderShipped
from marketplace.ordering.order import Order, OrderStatus
from marketplace.shared.search import search_text


@marketplace.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    product_ids = Text()  # JSON list
    product_names = Text()  # JSON list
    item_count = Integer(default=0)
    amount = Float()
    status = String(required=True, max_length=20)
    payment_status = String(max_length=30)
    payment_id = String(max_length=255)
    image = String(max_length=500)
    delivery_boy_id = Identifier()
    placed_at = DateTime()
    expected_delivery_date = Date()
    search_text = Text()
    updated_at = DateTime()


@marketplace.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        lines = json.loads(event.lines) if isinstance(event.lines, str) else []
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                customer_id=event.customer_id,
                customer_email=event.customer_email,
                product_ids=json.dumps([line["product_id"] for line in lines]),
                product_names=json.dumps([line["name"] for line in lines]),
                item_count=len(lines),
                amount=event.amount,
                status=event.status,
                payment_status=event.payment_status,
                payment_id=event.payment_id,
                image=event.image,
                placed_at=event.placed_at,
                expected_delivery_date=event.expected_delivery_date,
                search_text=search_text(str(event.order_id), str(event.customer_id), event.payment_id),
                updated_at=event.placed_at,
            )
        )

    @on(OrderShipped)
    def on_order_shipped(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = OrderStatus.SHIPPED.value
        summary.delivery_boy_id = event.delivery_boy_id
        summary.updated_at = event.shipped_at
        repo.add(summary)

    @on(OrderDelivered)
    def on_order_delivered(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = OrderStatus.DELIVERED.value
        summary.updated_at = event.delivered_at
        repo.add(summary)

    @on(OrderFailed)
    def on_order_failed(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = OrderStatus.FAILED.value
        summary.updated_at = event.failed_at
        repo.add(summary)
