"""Order aggregate: a purchase from placement to delivery.

State machine:
    Pending → Shipped → Delivered | Failed

Lines and amount are a snapshot taken when the order is placed; later price
changes on the products never touch them.
"""

import json
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, Float, HasMany, Identifier, String

from marketplace.domain import marketplace
from marketplace.ordering.events import OrderDelivered, OrderFailed, OrderPlaced, OrderShipped
from marketplace.shared.roles import Role
from marketplace.shared.workflow import Workflow


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    FAILED = "Failed"


ORDER_WORKFLOW = Workflow(
    "order",
    OrderStatus,
    {
        (OrderStatus.PENDING, OrderStatus.SHIPPED): {Role.ADMIN},
        (OrderStatus.SHIPPED, OrderStatus.DELIVERED): {Role.ADMIN, Role.DELIVERY_BOY},
        (OrderStatus.SHIPPED, OrderStatus.FAILED): {Role.ADMIN, Role.DELIVERY_BOY},
    },
)


@marketplace.entity(part_of="Order")
class OrderLine:
    """One product in an order, quantity is always 1. Name and price are copied at placement."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)


@marketplace.aggregate
class Order:
    customer_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address_id = Identifier(required=True)
    payment_status = String(required=True, max_length=30)
    payment_id = String(max_length=255)
    image = String(max_length=500)
    placed_at = DateTime(required=True)
    expected_delivery_date = Date(required=True)
    delivery_boy_id = Identifier()
    idempotency_key = String(max_length=100)

    @invariant.post
    def amount_is_the_sum_of_line_prices(self):
        if self.lines and abs(self.amount - sum(line.price for line in self.lines)) > 0.005:
            raise ValidationError({"amount": ["Order amount must equal the sum of its line prices"]})

    @invariant.post
    def dispatched_orders_have_a_delivery_boy(self):
        if self.status != OrderStatus.PENDING.value and not self.delivery_boy_id:
            raise ValidationError({"delivery_boy": [f"A {self.status} order must have a delivery boy"]})

    @classmethod
    def place(
        cls,
        customer_id,
        products,
        shipping_address_id,
        payment_status,
        placed_at,
        delivery_window_days,
        placeholder_image,
        payment_id=None,
        idempotency_key=None,
        customer_email=None,
    ):
        """Snapshot `products` (Product aggregates, in order) into a Pending order."""
        if not products:
            raise ValidationError({"products": ["At least one product is required"]})

        lines = [OrderLine(product_id=product.id, name=product.name, price=product.current_price) for product in products]
        amount = round(sum(line.price for line in lines), 2)

        order = cls(
            customer_id=customer_id,
            lines=lines,
            amount=amount,
            shipping_address_id=shipping_address_id,
            payment_status=payment_status,
            payment_id=payment_id,
            image=products[0].primary_image_url or placeholder_image,
            placed_at=placed_at,
            expected_delivery_date=(placed_at + timedelta(days=delivery_window_days)).date(),
            idempotency_key=idempotency_key,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                customer_id=customer_id,
                customer_email=customer_email,
                lines=json.dumps(
                    [{"product_id": str(line.product_id), "name": line.name, "price": line.price} for line in lines]
                ),
                amount=amount,
                status=order.status,
                payment_status=payment_status,
                payment_id=payment_id,
                image=order.image,
                shipping_address_id=shipping_address_id,
                placed_at=placed_at,
                expected_delivery_date=order.expected_delivery_date,
            )
        )
        return order

    @property
    def product_ids(self) -> list[str]:
        return [str(line.product_id) for line in self.lines]

    def authorize(self, target, role: Role) -> None:
        ORDER_WORKFLOW.assert_allowed(self.status, target, role)

    def move_to(self, target, role: Role, delivery_boy=None, now=None):
        """Apply a fulfillment step. Shipping needs a delivery boy assigned."""
        target = ORDER_WORKFLOW.status(target)
        self.authorize(target, role)
        now = now or datetime.now(UTC)

        if target == OrderStatus.SHIPPED:
            if delivery_boy is None:
                raise ValidationError({"delivery_boy": ["A delivery boy is required to ship an order"]})
            if delivery_boy.role != Role.DELIVERY_BOY:
                raise ValidationError({"delivery_boy": [f"User {delivery_boy.id} is not a delivery boy"]})

            with atomic_change(self):
                self.delivery_boy_id = delivery_boy.id
                self.status = target.value
            self.raise_(
                OrderShipped(
                    order_id=self.id,
                    delivery_boy_id=self.delivery_boy_id,
                    changed_by_role=role.value,
                    shipped_at=now,
                )
            )
            return

        self.status = target.value
        if target == OrderStatus.DELIVERED:
            self.raise_(OrderDelivered(order_id=self.id, changed_by_role=role.value, delivered_at=now))
        else:
            self.raise_(OrderFailed(order_id=self.id, changed_by_role=role.value, failed_at=now))

    def as_view(self) -> dict:
        return {
            "order_id": str(self.id),
            "customer_id": str(self.customer_id),
            "products": [
                {"product_id": str(line.product_id), "name": line.name, "price": line.price} for line in self.lines
            ],
            "amount": self.amount,
            "status": self.status,
            "shipping_address_id": str(self.shipping_address_id),
            "payment_status": self.payment_status,
            "payment_id": self.payment_id,
            "image": self.image,
            "placed_at": self.placed_at.isoformat() if self.placed_at else None,
            "expected_delivery_date": self.expected_delivery_date.isoformat() if self.expected_delivery_date else None,
            "delivery_boy_id": str(self.delivery_boy_id) if self.delivery_boy_id else None,
        }


@marketplace.repository(part_of=Order)
class OrderRepository:
    def find_by_idempotency_key(self, customer_id, idempotency_key) -> Order | None:
        return (
            self._dao.query.filter(customer_id=str(customer_id), idempotency_key=idempotency_key).all().first
        )
