"""Shared BDD fixtures and step definitions for the order lifecycle."""

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from marketplace.identity.user import User
from marketplace.ordering.events import OrderDelivered, OrderFailed, OrderPlaced, OrderShipped
from marketplace.ordering.order import Order
from marketplace.shared.errors import AuthorizationError
from marketplace.shared.roles import Role

# Map event name strings to classes for dynamic lookup
_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderShipped": OrderShipped,
    "OrderDelivered": OrderDelivered,
    "OrderFailed": OrderFailed,
}


def _new_order():
    order = Order.place(
        customer_id="cust-1",
        products=[SimpleNamespace(id="p-1", name="Cot", current_price=5000.0, primary_image_url="/u/p-1/image-1.jpg")],
        shipping_address_id="addr-1",
        payment_status="Paid",
        placed_at=datetime.now(UTC),
        delivery_window_days=5,
        placeholder_image="defaultImage.png",
    )
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def delivery_boy():
    return User.register(name="Raju", email="raju@example.com", password_hash="h", user_type="DeliveryBoy")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending order", target_fixture="order")
def pending_order():
    return _new_order()


@given("a shipped order", target_fixture="order")
def shipped_order(delivery_boy):
    order = _new_order()
    order.move_to("Shipped", Role.ADMIN, delivery_boy=delivery_boy)
    order._events.clear()
    return order


@given("a delivered order", target_fixture="order")
def delivered_order(delivery_boy):
    order = _new_order()
    order.move_to("Shipped", Role.ADMIN, delivery_boy=delivery_boy)
    order.move_to("Delivered", Role.DELIVERY_BOY)
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the action is not authorized")
def action_is_not_authorized(error):
    assert isinstance(error["exc"], AuthorizationError)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse("an {event_type} order event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"
