"""Pydantic request/response schemas for the marketplace API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Users ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "password_hash": "$2b$12$Q9n6sZ0yq1K3ozQ6Vh2n0u",
                    "user_type": "Seller",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password_hash: str = Field(..., max_length=255)
    user_type: str = Field("Customer", max_length=20)


class ChangePasswordRequest(BaseModel):
    password_hash: str = Field(..., max_length=255)


class UserIdResponse(BaseModel):
    user_id: str


# --- Addresses ---


class AddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Asha Rao",
                    "phone_number": "9876543210",
                    "address_line1": "12 Lake View Road",
                    "address_line2": "Flat 3B",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "pin_code": "560001",
                }
            ]
        }
    }

    full_name: str = Field(..., max_length=100)
    phone_number: str = Field(..., max_length=20)
    address_line1: str = Field(..., max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    pin_code: str = Field(..., max_length=12)


class UpdateAddressRequest(BaseModel):
    full_name: str | None = Field(None, max_length=100)
    phone_number: str | None = Field(None, max_length=20)
    address_line1: str | None = Field(None, max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    pin_code: str | None = Field(None, max_length=12)


class AddressIdResponse(BaseModel):
    address_id: str


# --- Products ---


class ChangeProductStatusRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": "Ready to pick", "pickup_guy_id": "3f0c7a52-1a55-4c2e-9d1f-5e1f0b6a9c11", "price": 450.0},
                {"status": "Picked"},
            ]
        }
    }

    status: str = Field(..., max_length=20)
    pickup_guy_id: str | None = None
    price: float | None = Field(None, gt=0)


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductStatusResponse(BaseModel):
    product_id: str
    status: str


# --- Cart / Wishlist ---


class CollectionItemRequest(BaseModel):
    product_id: str


class CartItemResponse(BaseModel):
    cart_item_id: str


class WishlistItemResponse(BaseModel):
    wishlist_item_id: str


# --- Orders ---


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_ids": ["b3c0...-p1", "b3c0...-p2"],
                    "shipping_address_id": "a9d1...-addr",
                    "payment_status": "Paid",
                    "payment_id": "pay_Nx81Kd",
                }
            ]
        }
    }

    product_ids: list[str] = Field(..., min_length=1)
    shipping_address_id: str
    payment_status: str = Field(..., max_length=30)
    payment_id: str | None = Field(None, max_length=255)


class OrderIdResponse(BaseModel):
    order_id: str


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)
    delivery_boy_id: str | None = None


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


# --- Contacts ---


class SubmitInquiryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ravi Kumar",
                    "email": "ravi@example.com",
                    "phone": "9123456780",
                    "subject": "Pickup not scheduled",
                    "message": "My stroller listing was approved three days ago but nobody came to collect it.",
                    "category": "support",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    phone: str | None = Field(None, max_length=20)
    subject: str = Field(..., max_length=200)
    message: str
    category: str | None = None
    source: str | None = None
    priority: str | None = None


class ContactIdResponse(BaseModel):
    contact_id: str


class UpdateInquiryStatusRequest(BaseModel):
    status: str
    priority: str | None = None
    assigned_to: str | None = None
    response: str | None = None


class RespondToInquiryRequest(BaseModel):
    response: str
    status: str = "resolved"


class BulkInquiryRequest(BaseModel):
    contact_ids: list[str] = Field(..., min_length=1)
    action: str
    status: str | None = None
    assigned_to: str | None = None
