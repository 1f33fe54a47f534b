"""Order placement: command and handler.

Placement is one idempotent operation inside the handler's unit of work:
every product is checked before anything is written, then the order is
recorded, each product is marked sold through its conditional write, and the
customer's cart rows for those products are cleared.
"""

import json
from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.address.address import Address
from marketplace.cart.cart_item import CartItem
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.identity.user import User
from marketplace.ordering.order import Order
from marketplace.shared import settings
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    product_ids = Text(required=True)  # JSON: list of product ids
    shipping_address_id = Identifier(required=True)
    payment_status = String(required=True, max_length=30)
    payment_id = String(max_length=255)
    idempotency_key = String(max_length=100)


def _parse_product_ids(raw) -> list[str]:
    product_ids = json.loads(raw) if isinstance(raw, str) else list(raw or [])
    if not product_ids:
        raise ValidationError({"products": ["At least one product is required"]})
    if len(set(product_ids)) != len(product_ids):
        raise ValidationError({"products": ["A product can appear only once in an order"]})
    return [str(product_id) for product_id in product_ids]


def _load_products(product_ids) -> list[Product]:
    repo = current_domain.repository_for(Product)
    products = []
    for product_id in product_ids:
        try:
            products.append(repo.get(product_id))
        except ObjectNotFoundError:
            raise ObjectNotFoundError(f"Product {product_id} not found") from None
    return products


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        orders = current_domain.repository_for(Order)

        if command.idempotency_key:
            existing = orders.find_by_idempotency_key(command.customer_id, command.idempotency_key)
            if existing is not None:
                logger.info(
                    "order_placement_replayed",
                    order_id=str(existing.id),
                    idempotency_key=command.idempotency_key,
                )
                return str(existing.id)

        product_ids = _parse_product_ids(command.product_ids)
        customer = current_domain.repository_for(User).get(command.customer_id)
        products = _load_products(product_ids)

        try:
            current_domain.repository_for(Address).get(command.shipping_address_id)
        except ObjectNotFoundError:
            raise ValidationError({"shipping_address": ["Invalid shipping address"]}) from None

        unavailable = [str(product.id) for product in products if not product.is_purchasable]
        if unavailable:
            raise ValidationError(
                {"products": [f"Product {product_id} is not available for purchase" for product_id in unavailable]}
            )

        order = Order.place(
            customer_id=customer.id,
            products=products,
            shipping_address_id=command.shipping_address_id,
            payment_status=command.payment_status,
            payment_id=command.payment_id,
            idempotency_key=command.idempotency_key,
            customer_email=customer.email_address,
            placed_at=datetime.now(UTC),
            delivery_window_days=settings.delivery_window_days(),
            placeholder_image=settings.placeholder_image(),
        )
        orders.add(order)

        product_repo = current_domain.repository_for(Product)
        for product in products:
            product.mark_sold(order.id)
            product_repo.add(product)

        cart = current_domain.repository_for(CartItem)
        for product in products:
            row = cart.find_for(customer.id, product.id)
            if row is None:
                # Bought without being carted ("buy now")
                logger.info("cart_row_absent_at_checkout", customer_id=str(customer.id), product_id=str(product.id))
                continue
            row.remove()
            cart._dao.delete(row)

        logger.info("order_placed", order_id=str(order.id), amount=order.amount, items=len(products))
        return str(order.id)
