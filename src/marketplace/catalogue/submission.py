"""Product submission and the upload-then-submit service.

Photos go to the image store first, named `image-<n><ext>` inside a folder
named by the product id, so the id is generated before the command is
processed. An upload failure aborts the submission before anything is written.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.address.address import Address
from marketplace.catalogue.product import Product
from marketplace.catalogue.storage import ImageStore
from marketplace.domain import marketplace
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Product")
class SubmitProduct:
    product_id: Identifier()
    seller_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    description: Text(required=True)
    original_price: Float(required=True, min_value=0.0)
    current_price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=50)
    age_group: String(max_length=50)
    condition: String(required=True, max_length=20)
    sell_type: String(required=True, max_length=20)
    item_url: String(max_length=500)
    pickup_address_id: Identifier(required=True)
    images: Text()  # JSON: [{filename, url}]


def ensure_pickup_address(address_id) -> Address:
    try:
        return current_domain.repository_for(Address).get(address_id)
    except ObjectNotFoundError:
        raise ValidationError({"pickup_address": ["Invalid pickup address"]}) from None


@marketplace.command_handler(part_of=Product)
class SubmitProductHandler:
    @handle(SubmitProduct)
    def submit_product(self, command):
        ensure_pickup_address(command.pickup_address_id)
        images = json.loads(command.images) if command.images else []

        product = Product.submit(
            product_id=command.product_id,
            seller_id=command.seller_id,
            name=command.name,
            description=command.description,
            original_price=command.original_price,
            current_price=command.current_price,
            category=command.category,
            age_group=command.age_group,
            condition=command.condition,
            sell_type=command.sell_type,
            item_url=command.item_url,
            pickup_address_id=command.pickup_address_id,
            images=images,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_submitted", product_id=str(product.id), seller_id=str(product.seller_id))
        return str(product.id)


@dataclass(frozen=True)
class ImageUpload:
    original_filename: str
    content: bytes
    content_type: str | None = None


def image_filename(position: int, original_filename: str | None) -> str:
    return f"image-{position}{Path(original_filename or '').suffix.lower()}"


def submit_listing(image_store: ImageStore, uploads: list[ImageUpload], **fields) -> str:
    """Upload the photos, then process SubmitProduct with their URLs. Returns the product id."""
    if not uploads:
        raise ValidationError({"images": ["At least one image is required"]})
    ensure_pickup_address(fields["pickup_address_id"])

    product_id = str(uuid4())
    images = []
    for position, upload in enumerate(uploads, start=1):
        filename = image_filename(position, upload.original_filename)
        url = image_store.upload(product_id, filename, upload.content, upload.content_type)
        images.append({"filename": filename, "url": url})

    command = SubmitProduct(product_id=product_id, images=json.dumps(images), **fields)
    return current_domain.process(command, asynchronous=False)
