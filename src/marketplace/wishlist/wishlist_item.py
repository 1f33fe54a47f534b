"""Wishlist rows. One WishlistItem per (user, product) addition, deleted by its own id."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier

from marketplace.domain import marketplace


@marketplace.event(part_of="WishlistItem")
class ProductAddedToWishlist:
    __version__ = 1

    wishlist_item_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    added_at: DateTime(required=True)


@marketplace.event(part_of="WishlistItem")
class ProductRemovedFromWishlist:
    __version__ = 1

    wishlist_item_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    removed_at: DateTime(required=True)


@marketplace.aggregate
class WishlistItem:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    added_at: DateTime()

    @classmethod
    def add(cls, user_id, product_id):
        item = cls(user_id=user_id, product_id=product_id, added_at=datetime.now(UTC))
        item.raise_(
            ProductAddedToWishlist(
                wishlist_item_id=item.id,
                user_id=user_id,
                product_id=product_id,
                added_at=item.added_at,
            )
        )
        return item

    def remove(self):
        """Record that the row is leaving the wishlist; the repository drops it."""
        self.raise_(
            ProductRemovedFromWishlist(
                wishlist_item_id=self.id,
                user_id=self.user_id,
                product_id=self.product_id,
                removed_at=datetime.now(UTC),
            )
        )


@marketplace.repository(part_of=WishlistItem)
class WishlistItemRepository:
    def find_for(self, user_id, product_id) -> WishlistItem | None:
        """The row for a (user, product) pair, if any."""
        return self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().first

    def for_user(self, user_id) -> list[WishlistItem]:
        """A user's rows, newest addition first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-added_at").all().items
