"""Domain tests for the Product aggregate: submission, invariants and the sold-out write."""

import pytest
from protean.exceptions import ValidationError

from marketplace.catalogue.events import ProductSoldOut, ProductSubmitted
from marketplace.catalogue.product import Product, ProductStatus
from marketplace.identity.user import User
from marketplace.shared.roles import Role

IMAGES = [
    {"filename": "image-1.jpg", "url": "/uploads/p/image-1.jpg"},
    {"filename": "image-2.png", "url": "/uploads/p/image-2.png"},
]


def _product(**overrides):
    fields = {
        "seller_id": "seller-1",
        "name": "Baby Stroller",
        "description": "Foldable stroller with rain cover",
        "original_price": 8000.0,
        "current_price": 3500.0,
        "category": "Gear",
        "condition": "Like New",
        "sell_type": "Sell to us",
        "pickup_address_id": "addr-1",
        "images": IMAGES,
    }
    fields.update(overrides)
    return Product.submit(**fields)


def _delivery_boy():
    return User.register(name="Raju", email="raju@example.com", password_hash="h", user_type="DeliveryBoy")


def _completed():
    product = _product()
    product.move_to(ProductStatus.READY_TO_PICK, Role.ADMIN, pickup_guy=_delivery_boy())
    product.move_to(ProductStatus.PICKED, Role.DELIVERY_BOY)
    product.move_to(ProductStatus.COMPLETED, Role.DELIVERY_BOY)
    product._events.clear()
    return product


class TestSubmit:
    def test_starts_pending_and_available(self):
        product = _product()
        assert product.status == ProductStatus.PENDING.value
        assert product.available is True
        assert product.pickup_guy_id is None

    def test_images_keep_their_order(self):
        product = _product()
        assert product.primary_image_url == "/uploads/p/image-1.jpg"
        assert [image["filename"] for image in product.as_view()["images"]] == ["image-1.jpg", "image-2.png"]

    def test_requires_an_image(self):
        with pytest.raises(ValidationError) as exc:
            _product(images=[])
        assert "images" in exc.value.messages

    def test_uses_given_identity(self):
        assert str(_product(product_id="p-123").id) == "p-123"

    def test_unknown_condition_rejected(self):
        with pytest.raises(ValidationError):
            _product(condition="Broken")

    def test_raises_product_submitted(self):
        event = _product()._events[-1]
        assert isinstance(event, ProductSubmitted)
        assert event.status == "Pending"
        assert event.image_url == "/uploads/p/image-1.jpg"


class TestInvariants:
    def test_assigned_status_needs_pickup_guy(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.status = ProductStatus.PICKED.value

    def test_sold_out_product_cannot_be_available(self):
        product = _completed()
        with pytest.raises(ValidationError):
            product.status = ProductStatus.SOLD_OUT.value


class TestMarkSold:
    def test_completed_product_sells_out(self):
        product = _completed()

        product.mark_sold("order-1")

        assert product.status == ProductStatus.SOLD_OUT.value
        assert product.available is False
        event = product._events[-1]
        assert isinstance(event, ProductSoldOut)
        assert event.order_id == "order-1"

    def test_second_sale_fails(self):
        product = _completed()
        product.mark_sold("order-1")

        with pytest.raises(ValidationError) as exc:
            product.mark_sold("order-2")
        assert "not available for purchase" in str(exc.value.messages)

    def test_pending_product_cannot_be_sold(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.mark_sold("order-1")
        assert product.status == ProductStatus.PENDING.value

    def test_is_purchasable_only_when_completed(self):
        assert not _product().is_purchasable
        assert _completed().is_purchasable
