import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported anywhere."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    with marketplace_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Shared builders. Each returns ids so tests can reload through repositories.
# ---------------------------------------------------------------------------
@pytest.fixture()
def register():
    from protean.utils.globals import current_domain

    from marketplace.identity.registration import RegisterUser

    counter = {"n": 0}

    def _register(user_type="Customer", name=None, email=None):
        counter["n"] += 1
        command = RegisterUser(
            name=name or f"{user_type} {counter['n']}",
            email=email or f"{user_type.lower()}{counter['n']}@example.com",
            password_hash="$2b$12$hashed",
            user_type=user_type,
        )
        return current_domain.process(command, asynchronous=False)

    return _register


@pytest.fixture()
def add_address():
    from protean.utils.globals import current_domain

    from marketplace.address.management import AddAddress

    def _add_address(user_id, **overrides):
        fields = {
            "user_id": user_id,
            "full_name": "Asha Rao",
            "phone_number": "9876543210",
            "address_line1": "12 Lake View Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pin_code": "560001",
        }
        fields.update(overrides)
        return current_domain.process(AddAddress(**fields), asynchronous=False)

    return _add_address


@pytest.fixture()
def submit_product():
    import json

    from protean.utils.globals import current_domain

    from marketplace.catalogue.submission import SubmitProduct

    def _submit_product(seller_id, pickup_address_id, **overrides):
        fields = {
            "seller_id": seller_id,
            "name": "Wooden Rocking Horse",
            "description": "Solid beech rocking horse, lightly used",
            "original_price": 2500.0,
            "current_price": 900.0,
            "category": "Toys",
            "age_group": "2-4 years",
            "condition": "Good",
            "sell_type": "Sell with us",
            "pickup_address_id": pickup_address_id,
            "images": json.dumps([{"filename": "image-1.jpg", "url": "/uploads/p/image-1.jpg"}]),
        }
        fields.update(overrides)
        return current_domain.process(SubmitProduct(**fields), asynchronous=False)

    return _submit_product


@pytest.fixture()
def change_status():
    from protean.utils.globals import current_domain

    from marketplace.catalogue.moderation import ChangeProductStatus

    def _change_status(product_id, status, actor_role="Admin", **extra):
        command = ChangeProductStatus(product_id=product_id, status=status, actor_role=actor_role, **extra)
        return current_domain.process(command, asynchronous=False)

    return _change_status


@pytest.fixture()
def seller(register, add_address):
    """A seller with a pickup address: {"id", "address_id"}."""
    seller_id = register("Seller")
    return {"id": seller_id, "address_id": add_address(seller_id)}


@pytest.fixture()
def delivery_boy_id(register):
    return register("DeliveryBoy")


@pytest.fixture()
def completed_product(seller, delivery_boy_id, submit_product, change_status):
    """Submit a listing and walk it through moderation to Completed. Returns the product id."""

    def _completed_product(**overrides):
        product_id = submit_product(seller["id"], seller["address_id"], **overrides)
        change_status(product_id, "Ready to pick", pickup_guy_id=delivery_boy_id)
        change_status(product_id, "Picked", actor_role="DeliveryBoy")
        change_status(product_id, "Completed", actor_role="DeliveryBoy")
        return product_id

    return _completed_product


@pytest.fixture()
def customer(register, add_address):
    """A customer with a shipping address: {"id", "address_id"}."""
    customer_id = register("Customer")
    return {"id": customer_id, "address_id": add_address(customer_id, full_name="Ravi Kumar")}


@pytest.fixture()
def place_order(customer):
    import json

    from protean.utils.globals import current_domain

    from marketplace.ordering.placement import PlaceOrder

    def _place_order(product_ids, customer_id=None, address_id=None, **overrides):
        fields = {
            "customer_id": customer_id or customer["id"],
            "product_ids": json.dumps(list(product_ids)),
            "shipping_address_id": address_id or customer["address_id"],
            "payment_status": "Paid",
            "payment_id": "pay_001",
        }
        fields.update(overrides)
        return current_domain.process(PlaceOrder(**fields), asynchronous=False)

    return _place_order


@pytest.fixture()
def api_app():
    """A FastAPI app with every router, the error envelope and an in-memory image store."""
    from fastapi import FastAPI

    from marketplace.api.errors import register_exception_handlers
    from marketplace.api.middleware import request_context_middleware
    from marketplace.api.routing import routers
    from marketplace.catalogue.storage import InMemoryImageStore

    app = FastAPI()
    register_exception_handlers(app)
    app.middleware("http")(request_context_middleware)
    for router in routers:
        app.include_router(router)
    app.state.image_store = InMemoryImageStore()
    return app


@pytest.fixture()
def client(api_app):
    from fastapi.testclient import TestClient

    return TestClient(api_app)


def headers_for(user_id, role):
    return {"X-User-Id": str(user_id), "X-User-Role": role}


@pytest.fixture()
def as_user():
    return headers_for
