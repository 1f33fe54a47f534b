"""Domain tests for cart rows."""

from marketplace.cart.cart_item import CartItem, ProductAddedToCart, ProductRemovedFromCart


class TestCartItem:
    def test_add_raises_added_event(self):
        item = CartItem.add(user_id="user-1", product_id="p-1")

        event = item._events[-1]
        assert isinstance(event, ProductAddedToCart)
        assert event.cart_item_id == item.id
        assert item.added_at is not None

    def test_remove_raises_removed_event(self):
        item = CartItem.add(user_id="user-1", product_id="p-1")
        item._events.clear()

        item.remove()

        event = item._events[-1]
        assert isinstance(event, ProductRemovedFromCart)
        assert event.cart_item_id == item.id
        assert event.user_id == "user-1"
        assert event.product_id == "p-1"
