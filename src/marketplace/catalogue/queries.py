"""Product reads: detail from the aggregate, listings from the ProductCard projection."""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product, ProductStatus
from marketplace.projections.product_card import ProductCard
from marketplace.shared.paging import PageRequest, pagination

PRODUCT_SORTS = {
    "newest": "-created_at",
    "oldest": "created_at",
    "price-low-to-high": "current_price",
    "price-high-to-low": "-current_price",
    "name-a-to-z": "name",
    "name-z-to-a": "-name",
}

_UNAPPROVED = [status.value for status in ProductStatus if status != ProductStatus.COMPLETED]


@dataclass(frozen=True)
class ProductFilters:
    status: str | None = None
    search: str | None = None
    category: str | None = None
    condition: str | None = None
    age_group: str | None = None
    sell_type: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    seller_id: str | None = None
    sort: str = "newest"

    def __post_init__(self):
        if self.sort not in PRODUCT_SORTS:
            raise ValidationError({"sort": [f"Unknown sort '{self.sort}'"]})
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValidationError({"min_price": ["min_price cannot exceed max_price"]})

    def apply(self, queryset):
        if self.status:
            queryset = queryset.filter(status=self.status)
        if self.search and self.search.strip():
            queryset = queryset.filter(search_text__contains=self.search.strip().lower())
        if self.category:
            queryset = queryset.filter(category__iexact=self.category)
        if self.condition:
            queryset = queryset.filter(condition__iexact=self.condition)
        if self.age_group:
            queryset = queryset.filter(age_group__iexact=self.age_group)
        if self.sell_type:
            queryset = queryset.filter(sell_type=self.sell_type)
        if self.min_price is not None:
            queryset = queryset.filter(current_price__gte=self.min_price)
        if self.max_price is not None:
            queryset = queryset.filter(current_price__lte=self.max_price)
        if self.seller_id:
            queryset = queryset.filter(seller_id=self.seller_id)
        return queryset.order_by(PRODUCT_SORTS[self.sort])


def card_view(card: ProductCard) -> dict:
    return {
        "product_id": str(card.product_id),
        "seller_id": str(card.seller_id),
        "name": card.name,
        "description": card.description,
        "category": card.category,
        "age_group": card.age_group,
        "condition": card.condition,
        "sell_type": card.sell_type,
        "original_price": card.original_price,
        "current_price": card.current_price,
        "status": card.status,
        "available": card.available,
        "image_url": card.image_url,
        "created_at": card.created_at.isoformat() if card.created_at else None,
    }


def get_product(product_id: str) -> dict:
    return current_domain.repository_for(Product).get(product_id).as_view()


def list_products(filters: ProductFilters | None = None, page_request: PageRequest | None = None) -> dict:
    filters = filters or ProductFilters()
    page_request = page_request or PageRequest()

    queryset = filters.apply(current_domain.repository_for(ProductCard)._dao.query)
    result = page_request.apply(queryset)
    return {
        "products": [card_view(card) for card in result.items],
        "pagination": pagination(result, page_request),
    }


def list_unapproved_products(page_request: PageRequest | None = None) -> dict:
    """Every product whose status is not Completed, newest first."""
    page_request = page_request or PageRequest()
    queryset = (
        current_domain.repository_for(ProductCard)
        ._dao.query.filter(status__in=_UNAPPROVED)
        .order_by(PRODUCT_SORTS["newest"])
    )
    result = page_request.apply(queryset)
    return {
        "products": [card_view(card) for card in result.items],
        "pagination": pagination(result, page_request),
    }
