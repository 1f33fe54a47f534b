"""Domain tests for wishlist rows."""

from marketplace.wishlist.wishlist_item import ProductAddedToWishlist, ProductRemovedFromWishlist, WishlistItem


class TestWishlistItem:
    def test_add_raises_added_event(self):
        item = WishlistItem.add(user_id="user-1", product_id="p-1")

        event = item._events[-1]
        assert isinstance(event, ProductAddedToWishlist)
        assert event.wishlist_item_id == item.id
        assert item.added_at is not None

    def test_remove_raises_removed_event(self):
        item = WishlistItem.add(user_id="user-1", product_id="p-1")
        item._events.clear()

        item.remove()

        event = item._events[-1]
        assert isinstance(event, ProductRemovedFromWishlist)
        assert event.wishlist_item_id == item.id
        assert event.user_id == "user-1"
        assert event.product_id == "p-1"
