"""Wishlist listing."""

from protean.utils.globals import current_domain

from marketplace.cart.queries import products_for_rows
from marketplace.wishlist.wishlist_item import WishlistItem


def wishlist_products(user_id: str) -> list[dict]:
    return products_for_rows(current_domain.repository_for(WishlistItem).for_user(user_id))
