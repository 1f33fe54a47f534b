"""Cart listing: the products behind a user's cart rows."""

from protean.utils.globals import current_domain

from marketplace.cart.cart_item import CartItem
from marketplace.catalogue.queries import card_view
from marketplace.projections.product_card import ProductCard


def products_for_rows(rows) -> list[dict]:
    """Resolve the rows' products in one query, keep row order, skip products that no longer resolve."""
    if not rows:
        return []

    product_ids = [str(row.product_id) for row in rows]
    cards = current_domain.repository_for(ProductCard)._dao.query.filter(product_id__in=product_ids).all().items
    by_id = {str(card.product_id): card for card in cards}
    return [card_view(by_id[product_id]) for product_id in product_ids if product_id in by_id]


def cart_products(user_id: str) -> list[dict]:
    return products_for_rows(current_domain.repository_for(CartItem).for_user(user_id))
