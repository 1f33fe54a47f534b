"""Application tests for the wishlist handlers and listing."""

import pytest
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.shared.errors import ConflictError
from marketplace.wishlist.management import AddToWishlist, RemoveFromWishlist
from marketplace.wishlist.queries import wishlist_products
from marketplace.wishlist.wishlist_item import WishlistItem


def _add(user_id, product_id):
    return current_domain.process(AddToWishlist(user_id=user_id, product_id=product_id), asynchronous=False)


class TestWishlist:
    def test_add_and_list(self, completed_product):
        product_id = completed_product()
        item_id = _add("user-1", product_id)

        assert current_domain.repository_for(WishlistItem).get(item_id).product_id == product_id
        assert [product["product_id"] for product in wishlist_products("user-1")] == [product_id]

    def test_duplicate_is_a_conflict(self, completed_product):
        product_id = completed_product()
        _add("user-1", product_id)
        with pytest.raises(ConflictError):
            _add("user-1", product_id)
        assert len(current_domain.repository_for(WishlistItem).for_user("user-1")) == 1

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _add("user-1", "missing")

    def test_remove(self, completed_product):
        product_id = completed_product()
        _add("user-1", product_id)

        current_domain.process(RemoveFromWishlist(user_id="user-1", product_id=product_id), asynchronous=False)

        assert wishlist_products("user-1") == []

    def test_remove_absent(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveFromWishlist(user_id="user-1", product_id="missing"), asynchronous=False)

    def test_wishlist_is_separate_from_cart(self, completed_product):
        from marketplace.cart.queries import cart_products

        _add("user-1", completed_product())
        assert cart_products("user-1") == []
