"""Cart add/remove: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.cart.cart_item import CartItem
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.shared.errors import ConflictError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="CartItem")
class AddToCart:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


@marketplace.command(part_of="CartItem")
class RemoveFromCart:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


@marketplace.command_handler(part_of=CartItem)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(CartItem)
        if repo.find_for(command.user_id, command.product_id) is not None:
            raise ConflictError("Product already exists in cart")

        item = CartItem.add(user_id=command.user_id, product_id=command.product_id)
        repo.add(item)
        return str(item.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.find_for(command.user_id, command.product_id)
        if item is None:
            raise ObjectNotFoundError(f"Product {command.product_id} is not in the cart")

        item.remove()
        repo._dao.delete(item)
        logger.debug("cart_item_removed", user_id=str(command.user_id), product_id=str(command.product_id))
