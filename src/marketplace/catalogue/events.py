"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductSubmitted:
    """A seller listed an item; it waits for moderation in Pending."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    name: String(required=True)
    description: Text()
    category: String(required=True)
    age_group: String()
    condition: String(required=True)
    sell_type: String(required=True)
    original_price: Float(required=True)
    current_price: Float(required=True)
    status: String(required=True)
    image_url: String()
    created_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductStatusChanged:
    """An admin or delivery boy moved the listing one step through moderation."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    changed_by_role: String(required=True)
    pickup_guy_id: Identifier()
    current_price: Float()
    changed_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductSoldOut:
    """The product was bought as part of an order and is no longer available."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    sold_at: DateTime(required=True)
