"""Product moderation: role-gated status changes.

Checks run in order: the step must exist for the current status, the caller's
role must be allowed, then a pickup guy is resolved for approvals.
"""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product import PRODUCT_WORKFLOW, Product, ProductStatus
from marketplace.domain import marketplace
from marketplace.identity.queries import resolve_delivery_boy
from marketplace.shared.roles import Role
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Product")
class ChangeProductStatus:
    product_id: Identifier(required=True)
    status: String(required=True, choices=ProductStatus)
    actor_role: String(required=True, choices=Role)
    pickup_guy_id: Identifier()
    price: Float()


@marketplace.command_handler(part_of=Product)
class ModerateProductHandler:
    @handle(ChangeProductStatus)
    def change_product_status(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        target = PRODUCT_WORKFLOW.status(command.status)
        role = Role(command.actor_role)
        product.authorize(target, role)

        pickup_guy = None
        if target == ProductStatus.READY_TO_PICK:
            pickup_guy = resolve_delivery_boy(command.pickup_guy_id, "pickup_guy")

        product.move_to(target, role, pickup_guy=pickup_guy, price=command.price)
        repo.add(product)

        logger.info(
            "product_status_changed",
            product_id=str(product.id),
            status=product.status,
            actor_role=role.value,
        )
        return product.status
