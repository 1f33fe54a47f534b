"""Every router the marketplace app mounts, in mount order."""

from marketplace.api.addresses import address_router
from marketplace.api.cart import cart_router
from marketplace.api.contacts import contact_router
from marketplace.api.orders import order_router
from marketplace.api.products import product_router
from marketplace.api.users import user_router
from marketplace.api.wishlist import wishlist_router

routers = [
    user_router,
    address_router,
    product_router,
    cart_router,
    wishlist_router,
    order_router,
    contact_router,
]
