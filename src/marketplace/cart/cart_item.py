"""Cart rows. One CartItem per (user, product) addition, deleted by its own id."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier

from marketplace.domain import marketplace


@marketplace.event(part_of="CartItem")
class ProductAddedToCart:
    __version__ = 1

    cart_item_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    added_at: DateTime(required=True)


@marketplace.event(part_of="CartItem")
class ProductRemovedFromCart:
    __version__ = 1

    cart_item_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    removed_at: DateTime(required=True)


@marketplace.aggregate
class CartItem:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    added_at: DateTime()

    @classmethod
    def add(cls, user_id, product_id):
        item = cls(user_id=user_id, product_id=product_id, added_at=datetime.now(UTC))
        item.raise_(
            ProductAddedToCart(
                cart_item_id=item.id,
                user_id=user_id,
                product_id=product_id,
                added_at=item.added_at,
            )
        )
        return item

    def remove(self):
        """Record that the row is leaving the cart; the repository drops it."""
        self.raise_(
            ProductRemovedFromCart(
                cart_item_id=self.id,
                user_id=self.user_id,
                product_id=self.product_id,
                removed_at=datetime.now(UTC),
            )
        )


@marketplace.repository(part_of=CartItem)
class CartItemRepository:
    def find_for(self, user_id, product_id) -> CartItem | None:
        """The row for a (user, product) pair, if any."""
        return self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().first

    def for_user(self, user_id) -> list[CartItem]:
        """A user's rows, newest addition first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-added_at").all().items
