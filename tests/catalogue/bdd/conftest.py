"""Shared BDD fixtures and step definitions for product moderation."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from marketplace.catalogue.events import ProductSoldOut, ProductStatusChanged, ProductSubmitted
from marketplace.catalogue.product import Product
from marketplace.identity.user import User
from marketplace.shared.errors import AuthorizationError
from marketplace.shared.roles import Role

# Map event name strings to classes for dynamic lookup
_PRODUCT_EVENT_CLASSES = {
    "ProductSubmitted": ProductSubmitted,
    "ProductStatusChanged": ProductStatusChanged,
    "ProductSoldOut": ProductSoldOut,
}


def _new_product():
    product = Product.submit(
        seller_id="seller-1",
        name="Wooden Rocking Horse",
        description="Solid beech rocking horse",
        original_price=2500.0,
        current_price=900.0,
        category="Toys",
        condition="Good",
        sell_type="Sell with us",
        pickup_address_id="addr-1",
        images=[{"filename": "image-1.jpg", "url": "/uploads/p/image-1.jpg"}],
    )
    product._events.clear()
    return product


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
@given("a pending product", target_fixture="product")
def pending_product():
    return _new_product()


@given("a product ready to pick", target_fixture="product")
def product_ready_to_pick(delivery_boy):
    product = _new_product()
    product.move_to("Ready to pick", Role.ADMIN, pickup_guy=delivery_boy)
    product._events.clear()
    return product


@given("a completed product", target_fixture="product")
def completed_product(delivery_boy):
    product = _new_product()
    product.move_to("Ready to pick", Role.ADMIN, pickup_guy=delivery_boy)
    product.move_to("Picked", Role.DELIVERY_BOY)
    product.move_to("Completed", Role.DELIVERY_BOY)
    product._events.clear()
    return product


@given("a rejected product", target_fixture="product")
def rejected_product():
    product = _new_product()
    product.move_to("Rejected", Role.ADMIN)
    product._events.clear()
    return product


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


@then(parsers.cfparse('the product status is "{status}"'))
def product_status_is(product, status):
    assert product.status == status


@then(parsers.cfparse("a {event_type} product event is raised"))
def product_event_raised(product, event_type):
    event_cls = _PRODUCT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"
