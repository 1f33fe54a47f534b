"""Order placement, history and fulfillment endpoints.

Clients may send an `Idempotency-Key` header with POST /order; retrying with
the same key returns the order created by the first attempt.
"""

import json
from datetime import date

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from marketplace.api.deps import Caller, current_caller, require_admin
from marketplace.api.schemas import OrderIdResponse, OrderStatusResponse, PlaceOrderRequest, UpdateOrderStatusRequest
from marketplace.ordering.fulfillment import UpdateOrderStatus
from marketplace.ordering.placement import PlaceOrder
from marketplace.ordering.queries import (
    OrderFilters,
    admin_order_detail,
    admin_orders,
    customer_orders,
    get_order,
)
from marketplace.shared.paging import PageRequest

order_router = APIRouter(prefix="/order", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(
    body: PlaceOrderRequest,
    caller: Caller = Depends(current_caller),
    idempotency_key: str | None = Header(default=None, max_length=100),
) -> OrderIdResponse:
    command = PlaceOrder(
        customer_id=caller.user_id,
        product_ids=json.dumps(body.product_ids),
        shipping_address_id=body.shipping_address_id,
        payment_status=body.payment_status,
        payment_id=body.payment_id,
        idempotency_key=idempotency_key,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.get("")
async def my_orders(page: int = 1, limit: int = 20, caller: Caller = Depends(current_caller)) -> dict:
    return customer_orders(caller.user_id, PageRequest(page=page, limit=limit))


@order_router.get("/admin")
async def all_orders(
    search: str | None = None,
    status: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    sort: str = "newest",
    page: int = 1,
    limit: int = 20,
    caller: Caller = Depends(require_admin),
) -> dict:
    filters = OrderFilters(search=search, status=status, start_date=start_date, end_date=end_date, sort=sort)
    return admin_orders(filters, PageRequest(page=page, limit=limit))


@order_router.get("/admin/{order_id}")
async def order_detail_for_admin(order_id: str, caller: Caller = Depends(require_admin)) -> dict:
    return admin_order_detail(order_id)


@order_router.get("/{order_id}")
async def order_detail(order_id: str, caller: Caller = Depends(current_caller)) -> dict:
    return get_order(order_id, caller.user_id, caller.role)


@order_router.patch("/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    caller: Caller = Depends(current_caller),
) -> OrderStatusResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        actor_role=caller.role.value,
        delivery_boy_id=body.delivery_boy_id,
    )
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)
