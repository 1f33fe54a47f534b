"""Caller roles. A flat tag on every user, not a hierarchy."""

from enum import Enum


class Role(Enum):
    CUSTOMER = "Customer"
    SELLER = "Seller"
    ADMIN = "Admin"
    DELIVERY_BOY = "DeliveryBoy"


def parse_role(value: "str | Role") -> Role:
    """Return the Role for a tag, raising ValueError for anything unknown."""
    if isinstance(value, Role):
        return value
    return Role(value)
