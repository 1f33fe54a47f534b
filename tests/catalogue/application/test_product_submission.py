"""Application tests for product submission and the upload-then-submit service."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.catalogue.storage import ImageUploadError, InMemoryImageStore
from marketplace.catalogue.submission import ImageUpload, image_filename, submit_listing
from marketplace.projections.product_card import ProductCard

LISTING = {
    "name": "Wooden Rocking Horse",
    "description": "Solid beech rocking horse",
    "original_price": 2500.0,
    "current_price": 900.0,
    "category": "Toys",
    "condition": "Good",
    "sell_type": "Sell with us",
}


@pytest.fixture()
def store():
    return InMemoryImageStore()


@pytest.fixture()
def uploads():
    return [
        ImageUpload(original_filename="Front.JPG", content=b"front", content_type="image/jpeg"),
        ImageUpload(original_filename="side.png", content=b"side", content_type="image/png"),
    ]


def _listing(seller, **overrides):
    fields = dict(LISTING, seller_id=seller["id"], pickup_address_id=seller["address_id"])
    fields.update(overrides)
    return fields


class TestImageFilename:
    def test_numbered_with_lowercased_extension(self):
        assert image_filename(1, "Front.JPG") == "image-1.jpg"

    def test_missing_name_has_no_extension(self):
        assert image_filename(3, None) == "image-3"


class TestSubmitListing:
    def test_uploads_then_creates_pending_product(self, seller, store, uploads):
        product_id = submit_listing(store, uploads, **_listing(seller))

        product = current_domain.repository_for(Product).get(product_id)
        assert product.status == "Pending"
        assert [image.filename for image in product.images] == ["image-1.jpg", "image-2.png"]
        assert set(store.objects) == {(product_id, "image-1.jpg"), (product_id, "image-2.png")}
        assert product.primary_image_url == f"memory://images/{product_id}/image-1.jpg"

    def test_card_projection_is_current(self, seller, store, uploads):
        product_id = submit_listing(store, uploads, **_listing(seller))

        card = current_domain.repository_for(ProductCard).get(product_id)
        assert card.status == "Pending"
        assert card.search_text == "wooden rocking horse solid beech rocking horse toys"

    def test_requires_images(self, seller, store):
        with pytest.raises(ValidationError):
            submit_listing(store, [], **_listing(seller))
        assert store.calls == []

    def test_invalid_pickup_address_uploads_nothing(self, seller, store, uploads):
        with pytest.raises(ValidationError) as exc:
            submit_listing(store, uploads, **_listing(seller, pickup_address_id="missing"))
        assert exc.value.messages == {"pickup_address": ["Invalid pickup address"]}
        assert store.calls == []

    def test_upload_failure_aborts_creation(self, seller, store, uploads):
        store.configure(should_succeed=False)

        with pytest.raises(ImageUploadError):
            submit_listing(store, uploads, **_listing(seller))

        assert current_domain.repository_for(Product)._dao.query.all().total == 0
