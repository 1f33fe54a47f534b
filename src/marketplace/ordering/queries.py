"""Order reads.

Listings come from the OrderSummary projection with filtering, sorting and
pagination done by the store. Single-order views load the aggregate and join
the few rows they need.
"""

import json
from dataclasses import dataclass
from datetime import UTC, date, datetime, time

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.address.address import Address
from marketplace.cart.queries import products_for_rows
from marketplace.identity.user import User
from marketplace.ordering.order import Order, OrderStatus
from marketplace.projections.order_summary import OrderSummary
from marketplace.shared.errors import AuthorizationError
from marketplace.shared.paging import PageRequest, pagination, scan
from marketplace.shared.roles import Role

ORDER_SORTS = {
    "newest": "-placed_at",
    "oldest": "placed_at",
    "amount-high-to-low": "-amount",
    "amount-low-to-high": "amount",
}


@dataclass(frozen=True)
class OrderFilters:
    search: str | None = None
    status: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    customer_id: str | None = None
    sort: str = "newest"

    def __post_init__(self):
        if self.sort not in ORDER_SORTS:
            raise ValidationError({"sort": [f"Unknown sort '{self.sort}'"]})
        if self.status and self.status not in {status.value for status in OrderStatus}:
            raise ValidationError({"status": [f"Unknown order status '{self.status}'"]})
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError({"start_date": ["start_date cannot be after end_date"]})

    def apply(self, queryset):
        if self.customer_id:
            queryset = queryset.filter(customer_id=self.customer_id)
        if self.search and self.search.strip():
            queryset = queryset.filter(search_text__contains=self.search.strip().lower())
        if self.status:
            queryset = queryset.filter(status=self.status)
        if self.start_date:
            queryset = queryset.filter(placed_at__gte=datetime.combine(self.start_date, time.min, tzinfo=UTC))
        if self.end_date:
            queryset = queryset.filter(placed_at__lte=datetime.combine(self.end_date, time.max, tzinfo=UTC))
        return queryset.order_by(ORDER_SORTS[self.sort])


def summary_view(summary: OrderSummary) -> dict:
    return {
        "order_id": str(summary.order_id),
        "customer_id": str(summary.customer_id),
        "customer_email": summary.customer_email,
        "product_ids": json.loads(summary.product_ids) if summary.product_ids else [],
        "product_names": json.loads(summary.product_names) if summary.product_names else [],
        "amount": summary.amount,
        "status": summary.status,
        "payment_status": summary.payment_status,
        "payment_id": summary.payment_id,
        "image": summary.image,
        "delivery_boy_id": str(summary.delivery_boy_id) if summary.delivery_boy_id else None,
        "placed_at": summary.placed_at.isoformat() if summary.placed_at else None,
        "expected_delivery_date": (
            summary.expected_delivery_date.isoformat() if summary.expected_delivery_date else None
        ),
    }


def _summaries():
    return current_domain.repository_for(OrderSummary)._dao.query


def customer_orders(customer_id: str, page_request: PageRequest | None = None) -> dict:
    """A customer's orders, newest first, with product names."""
    page_request = page_request or PageRequest()
    result = page_request.apply(OrderFilters(customer_id=customer_id).apply(_summaries()))
    return {
        "orders": [summary_view(summary) for summary in result.items],
        "pagination": pagination(result, page_request),
    }


def admin_orders(filters: OrderFilters | None = None, page_request: PageRequest | None = None) -> dict:
    """Filtered, sorted page of all orders plus the total amount of the whole filtered set."""
    filters = filters or OrderFilters()
    page_request = page_request or PageRequest()

    queryset = filters.apply(_summaries())
    result = page_request.apply(queryset)
    total_amount = round(sum(summary.amount or 0.0 for summary in scan(queryset)), 2)
    return {
        "orders": [summary_view(summary) for summary in result.items],
        "pagination": pagination(result, page_request),
        "total_amount": total_amount,
    }


def get_order(order_id: str, caller_id: str, caller_role: Role) -> dict:
    """An order as seen by its owner or an admin."""
    order = current_domain.repository_for(Order).get(order_id)
    if caller_role != Role.ADMIN and str(order.customer_id) != str(caller_id):
        raise AuthorizationError("Order belongs to another customer")
    return order.as_view()


def admin_order_detail(order_id: str) -> dict:
    """Order with its products, the customer's email and the shipping address."""
    order = current_domain.repository_for(Order).get(order_id)
    view = order.as_view()

    try:
        view["username"] = current_domain.repository_for(User).get(order.customer_id).email_address
    except ObjectNotFoundError:
        view["username"] = None

    try:
        view["address"] = current_domain.repository_for(Address).get(order.shipping_address_id).as_view()
    except ObjectNotFoundError:
        # Addresses may be deleted after the order was placed
        view["address"] = None

    view["products_detail"] = products_for_rows(order.lines)
    return view
