"""Cart endpoints."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.deps import Caller, current_caller
from marketplace.api.schemas import CartItemResponse, CollectionItemRequest, StatusResponse
from marketplace.cart.management import AddToCart, RemoveFromCart
from marketplace.cart.queries import cart_products

cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.post("", status_code=201, response_model=CartItemResponse)
async def add_to_cart(body: CollectionItemRequest, caller: Caller = Depends(current_caller)) -> CartItemResponse:
    result = current_domain.process(AddToCart(user_id=caller.user_id, product_id=body.product_id), asynchronous=False)
    return CartItemResponse(cart_item_id=result)


@cart_router.get("")
async def view_cart(caller: Caller = Depends(current_caller)) -> dict:
    return {"products": cart_products(caller.user_id)}


@cart_router.delete("", response_model=StatusResponse)
async def remove_from_cart(product_id: str, caller: Caller = Depends(current_caller)) -> StatusResponse:
    current_domain.process(RemoveFromCart(user_id=caller.user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()
