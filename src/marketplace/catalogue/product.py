"""Product aggregate root with the ProductImage entity and the moderation workflow.

A listing is submitted as Pending, approved for pickup by an admin who assigns
a delivery boy, picked up, and completed once it reaches the warehouse. Only
Completed and available products can be bought; buying one moves it to
Sold out. Rejected and Sold out are terminal and products are never deleted.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from marketplace.catalogue.events import ProductSoldOut, ProductStatusChanged, ProductSubmitted
from marketplace.domain import marketplace
from marketplace.shared.roles import Role
from marketplace.shared.workflow import Workflow


class ProductStatus(Enum):
    PENDING = "Pending"
    READY_TO_PICK = "Ready to pick"
    PICKED = "Picked"
    COMPLETED = "Completed"
    REJECTED = "Rejected"
    SOLD_OUT = "Sold out"


class SellType(Enum):
    SELL_WITH_US = "Sell with us"
    SELL_TO_US = "Sell to us"


class Condition(Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


PRODUCT_WORKFLOW = Workflow(
    "product",
    ProductStatus,
    {
        (ProductStatus.PENDING, ProductStatus.READY_TO_PICK): {Role.ADMIN},
        (ProductStatus.READY_TO_PICK, ProductStatus.PICKED): {Role.ADMIN, Role.DELIVERY_BOY},
        (ProductStatus.PICKED, ProductStatus.COMPLETED): {Role.ADMIN, Role.DELIVERY_BOY},
        (ProductStatus.PENDING, ProductStatus.REJECTED): {Role.ADMIN},
        # Taken by order placement only
        (ProductStatus.COMPLETED, ProductStatus.SOLD_OUT): set(),
    },
)

_ASSIGNED_STATUSES = {
    ProductStatus.READY_TO_PICK.value,
    ProductStatus.PICKED.value,
    ProductStatus.COMPLETED.value,
    ProductStatus.SOLD_OUT.value,
}


@marketplace.entity(part_of="Product")
class ProductImage:
    filename: String(required=True, max_length=100)
    url: String(required=True, max_length=500)
    display_order: Integer(default=0)


@marketplace.aggregate
class Product:
    seller_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    description: Text(required=True)
    original_price: Float(required=True, min_value=0.0)
    current_price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=50)
    age_group: String(max_length=50)
    condition: String(choices=Condition, required=True)
    sell_type: String(choices=SellType, required=True)
    item_url: String(max_length=500)
    status: String(choices=ProductStatus, default=ProductStatus.PENDING.value)
    available: Boolean(default=True)
    pickup_address_id: Identifier(required=True)
    pickup_guy_id: Identifier()
    images: HasMany(ProductImage)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def collected_products_have_a_pickup_guy(self):
        if self.status in _ASSIGNED_STATUSES and not self.pickup_guy_id:
            raise ValidationError({"pickup_guy": [f"A {self.status} product must have a pickup guy"]})

    @invariant.post
    def sold_out_products_are_unavailable(self):
        if self.status == ProductStatus.SOLD_OUT.value and self.available:
            raise ValidationError({"available": ["A sold out product cannot be available"]})

    @classmethod
    def submit(
        cls,
        seller_id,
        name,
        description,
        original_price,
        current_price,
        category,
        condition,
        sell_type,
        pickup_address_id,
        images,
        age_group=None,
        item_url=None,
        product_id=None,
    ):
        """Create a Pending listing. `images` is an ordered list of {filename, url} dicts."""
        if not images:
            raise ValidationError({"images": ["At least one image is required"]})

        now = datetime.now(UTC)
        identity = {"id": product_id} if product_id else {}
        product = cls(
            **identity,
            seller_id=seller_id,
            name=name,
            description=description,
            original_price=original_price,
            current_price=current_price,
            category=category,
            age_group=age_group,
            condition=condition,
            sell_type=sell_type,
            item_url=item_url,
            pickup_address_id=pickup_address_id,
            images=[
                ProductImage(filename=image["filename"], url=image["url"], display_order=position)
                for position, image in enumerate(images)
            ],
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductSubmitted(
                product_id=product.id,
                seller_id=seller_id,
                name=name,
                description=description,
                category=category,
                age_group=age_group,
                condition=condition,
                sell_type=sell_type,
                original_price=original_price,
                current_price=current_price,
                status=product.status,
                image_url=product.primary_image_url,
                created_at=now,
            )
        )
        return product

    @property
    def primary_image_url(self) -> str | None:
        if not self.images:
            return None
        return sorted(self.images, key=lambda image: image.display_order)[0].url

    @property
    def is_purchasable(self) -> bool:
        return self.status == ProductStatus.COMPLETED.value and bool(self.available)

    def authorize(self, target, role: Role) -> None:
        """Raise unless `role` may request the step from the current status to `target`."""
        PRODUCT_WORKFLOW.assert_allowed(self.status, target, role)

    def move_to(self, target, role: Role, pickup_guy=None, price=None):
        """Apply a caller-requested moderation step.

        Approving for pickup (Pending to Ready to pick) needs a delivery boy as
        `pickup_guy` and optionally revises `current_price`.
        """
        target = PRODUCT_WORKFLOW.status(target)
        self.authorize(target, role)

        if price is not None and target != ProductStatus.READY_TO_PICK:
            raise ValidationError({"price": ["The price can only be revised when approving for pickup"]})

        if target == ProductStatus.READY_TO_PICK:
            if pickup_guy is None:
                raise ValidationError({"pickup_guy": ["A pickup guy is required to mark a product Ready to pick"]})
            if pickup_guy.role != Role.DELIVERY_BOY:
                raise ValidationError({"pickup_guy": [f"User {pickup_guy.id} is not a delivery boy"]})
            if price is not None and price <= 0:
                raise ValidationError({"price": ["Price must be greater than zero"]})

        previous = self.status
        with atomic_change(self):
            if target == ProductStatus.READY_TO_PICK:
                self.pickup_guy_id = pickup_guy.id
                if price is not None:
                    self.current_price = price

            self.status = target.value
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductStatusChanged(
                product_id=self.id,
                previous_status=previous,
                status=self.status,
                changed_by_role=role.value,
                pickup_guy_id=self.pickup_guy_id,
                current_price=self.current_price,
                changed_at=self.updated_at,
            )
        )

    def mark_sold(self, order_id):
        """Conditional write used by order placement: succeeds only for a Completed, available product."""
        if not self.is_purchasable:
            raise ValidationError({"products": [f"Product {self.id} is not available for purchase"]})
        PRODUCT_WORKFLOW.assert_step_exists(self.status, ProductStatus.SOLD_OUT)

        with atomic_change(self):
            self.status = ProductStatus.SOLD_OUT.value
            self.available = False
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductSoldOut(
                product_id=self.id,
                order_id=order_id,
                sold_at=self.updated_at,
            )
        )

    def as_view(self) -> dict:
        return {
            "product_id": str(self.id),
            "seller_id": str(self.seller_id),
            "name": self.name,
            "description": self.description,
            "original_price": self.original_price,
            "current_price": self.current_price,
            "category": self.category,
            "age_group": self.age_group,
            "condition": self.condition,
            "sell_type": self.sell_type,
            "item_url": self.item_url,
            "status": self.status,
            "available": self.available,
            "pickup_address_id": str(self.pickup_address_id),
            "pickup_guy_id": str(self.pickup_guy_id) if self.pickup_guy_id else None,
            "images": [
                {"filename": image.filename, "url": image.url}
                for image in sorted(self.images, key=lambda image: image.display_order)
            ],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
