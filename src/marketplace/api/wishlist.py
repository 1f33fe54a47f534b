"""Wishlist endpoints."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.deps import Caller, current_caller
from marketplace.api.schemas import CollectionItemRequest, StatusResponse, WishlistItemResponse
from marketplace.wishlist.management import AddToWishlist, RemoveFromWishlist
from marketplace.wishlist.queries import wishlist_products

wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@wishlist_router.post("", status_code=201, response_model=WishlistItemResponse)
async def add_to_wishlist(
    body: CollectionItemRequest,
    caller: Caller = Depends(current_caller),
) -> WishlistItemResponse:
    command = AddToWishlist(user_id=caller.user_id, product_id=body.product_id)
    result = current_domain.process(command, asynchronous=False)
    return WishlistItemResponse(wishlist_item_id=result)


@wishlist_router.get("")
async def view_wishlist(caller: Caller = Depends(current_caller)) -> dict:
    return {"products": wishlist_products(caller.user_id)}


@wishlist_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_from_wishlist(product_id: str, caller: Caller = Depends(current_caller)) -> StatusResponse:
    current_domain.process(RemoveFromWishlist(user_id=caller.user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()
