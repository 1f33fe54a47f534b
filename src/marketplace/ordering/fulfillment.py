"""Order fulfillment: role-gated status changes.

Shipping is an admin step that assigns a delivery boy; delivery and failure
are recorded by an admin or a delivery boy. Delivered and Failed orders accept
no further changes.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.identity.queries import resolve_delivery_boy
from marketplace.ordering.order import ORDER_WORKFLOW, Order, OrderStatus
from marketplace.shared.roles import Role
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)
    actor_role = String(required=True, choices=Role)
    delivery_boy_id = Identifier()


@marketplace.command_handler(part_of=Order)
class FulfillOrderHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        target = ORDER_WORKFLOW.status(command.status)
        role = Role(command.actor_role)
        order.authorize(target, role)

        delivery_boy = None
        if target == OrderStatus.SHIPPED:
            delivery_boy = resolve_delivery_boy(command.delivery_boy_id, "delivery_boy")

        order.move_to(target, role, delivery_boy=delivery_boy)
        repo.add(order)

        logger.info("order_status_changed", order_id=str(order.id), status=order.status, actor_role=role.value)
        return order.status
