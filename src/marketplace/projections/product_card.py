"""Product card: listing and search projection.

`search_text` holds the lowercased name, description and category so the
shop search runs as a single store-side substring filter.
"""

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.events import ProductSoldOut, ProductStatusChanged, ProductSubmitted
from marketplace.catalogue.product import Product, ProductStatus
from marketplace.domain import marketplace
from marketplace.shared.search import search_text


@marketplace.projection
class ProductCard:
    product_id: Identifier(identifier=True, required=True)
    seller_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    description: Text()
    category: String(max_length=50)
    age_group: String(max_length=50)
    condition: String(max_length=20)
    sell_type: String(max_length=20)
    original_price: Float()
    current_price: Float()
    status: String(required=True, max_length=20)
    available: Boolean(default=True)
    image_url: String(max_length=500)
    search_text: Text()
    created_at: DateTime()
    updated_at: DateTime()


@marketplace.projector(projector_for=ProductCard, aggregates=[Product])
class ProductCardProjector:
    @on(ProductSubmitted)
    def on_product_submitted(self, event):
        current_domain.repository_for(ProductCard).add(
            ProductCard(
                product_id=event.product_id,
                seller_id=event.seller_id,
                name=event.name,
                description=event.description,
                category=event.category,
                age_group=event.age_group,
                condition=event.condition,
                sell_type=event.sell_type,
                original_price=event.original_price,
                current_price=event.current_price,
                status=event.status,
                available=True,
                image_url=event.image_url,
                search_text=search_text(event.name, event.description, event.category),
                created_at=event.created_at,
                updated_at=event.created_at,
            )
        )

    @on(ProductStatusChanged)
    def on_product_status_changed(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.status = event.status
        if event.current_price is not None:
            card.current_price = event.current_price
        card.updated_at = event.changed_at
        repo.add(card)

    @on(ProductSoldOut)
    def on_product_sold_out(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.status = ProductStatus.SOLD_OUT.value
        card.available = False
        card.updated_at = event.sold_at
        repo.add(card)
