"""Repository for the Address aggregate."""

from marketplace.address.address import Address
from marketplace.domain import marketplace


@marketplace.repository(part_of=Address)
class AddressRepository:
    def for_user(self, user_id: str) -> list[Address]:
        """A user's addresses, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items
