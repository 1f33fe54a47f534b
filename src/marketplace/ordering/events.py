"""Domain events for the Order aggregate."""

from protean.fields import Date, DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A customer bought one or more products.

    Carries the line snapshot and the customer's email so read models never
    fan out to products or users.
    """

    __version__ = 1

    order_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    customer_email: String()
    lines: Text(required=True)  # JSON: [{product_id, name, price}]
    amount: Float(required=True)
    status: String(required=True)
    payment_status: String(required=True)
    payment_id: String()
    image: String()
    shipping_address_id: Identifier(required=True)
    placed_at: DateTime(required=True)
    expected_delivery_date: Date(required=True)


@marketplace.event(part_of="Order")
class OrderShipped:
    __version__ = 1

    order_id: Identifier(required=True)
    delivery_boy_id: Identifier(required=True)
    changed_by_role: String(required=True)
    shipped_at: DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id: Identifier(required=True)
    changed_by_role: String(required=True)
    delivered_at: DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderFailed:
    """Delivery was attempted and did not succeed."""

    __version__ = 1

    order_id: Identifier(required=True)
    changed_by_role: String(required=True)
    failed_at: DateTime(required=True)
