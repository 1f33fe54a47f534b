"""Product listing and moderation endpoints."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from protean.utils.globals import current_domain

from marketplace.api.deps import Caller, current_caller, get_image_store, require_admin
from marketplace.api.schemas import ChangeProductStatusRequest, ProductIdResponse, ProductStatusResponse
from marketplace.catalogue.moderation import ChangeProductStatus
from marketplace.catalogue.queries import (
    ProductFilters,
    get_product,
    list_products,
    list_unapproved_products,
)
from marketplace.catalogue.storage import ImageStore
from marketplace.catalogue.submission import ImageUpload, submit_listing
from marketplace.shared.paging import PageRequest

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    name: str = Form(..., max_length=200),
    description: str = Form(...),
    original_price: float = Form(..., ge=0),
    current_price: float = Form(..., ge=0),
    category: str = Form(..., max_length=50),
    condition: str = Form(..., max_length=20),
    sell_type: str = Form(..., max_length=20),
    pickup_address_id: str = Form(...),
    age_group: str | None = Form(None, max_length=50),
    item_url: str | None = Form(None, max_length=500),
    images: list[UploadFile] | None = File(None),
    caller: Caller = Depends(current_caller),
    image_store: ImageStore = Depends(get_image_store),
) -> ProductIdResponse:
    uploads = [
        ImageUpload(original_filename=image.filename, content=await image.read(), content_type=image.content_type)
        for image in images or []
    ]
    product_id = submit_listing(
        image_store,
        uploads,
        seller_id=caller.user_id,
        name=name,
        description=description,
        original_price=original_price,
        current_price=current_price,
        category=category,
        condition=condition,
        sell_type=sell_type,
        pickup_address_id=pickup_address_id,
        age_group=age_group,
        item_url=item_url,
    )
    return ProductIdResponse(product_id=product_id)


@product_router.get("")
async def browse_products(
    status: str | None = None,
    search: str | None = None,
    category: str | None = None,
    condition: str | None = None,
    age_group: str | None = None,
    sell_type: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    sort: str = "newest",
    page: int = 1,
    limit: int = 20,
) -> dict:
    filters = ProductFilters(
        status=status,
        search=search,
        category=category,
        condition=condition,
        age_group=age_group,
        sell_type=sell_type,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
    )
    return list_products(filters, PageRequest(page=page, limit=limit))


@product_router.get("/mine")
async def my_products(
    sort: str = "newest",
    page: int = 1,
    limit: int = 20,
    caller: Caller = Depends(current_caller),
) -> dict:
    return list_products(ProductFilters(seller_id=caller.user_id, sort=sort), PageRequest(page=page, limit=limit))


@product_router.get("/unapproved")
async def unapproved_products(page: int = 1, limit: int = 20, caller: Caller = Depends(require_admin)) -> dict:
    return list_unapproved_products(PageRequest(page=page, limit=limit))


@product_router.get("/{product_id}")
async def product_detail(product_id: str) -> dict:
    return get_product(product_id)


@product_router.patch("/{product_id}/status", response_model=ProductStatusResponse)
async def change_product_status(
    product_id: str,
    body: ChangeProductStatusRequest,
    caller: Caller = Depends(current_caller),
) -> ProductStatusResponse:
    command = ChangeProductStatus(
        product_id=product_id,
        status=body.status,
        actor_role=caller.role.value,
        pickup_guy_id=body.pickup_guy_id,
        price=body.price,
    )
    status = current_domain.process(command, asynchronous=False)
    return ProductStatusResponse(product_id=product_id, status=status)
