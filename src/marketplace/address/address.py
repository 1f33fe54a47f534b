"""Address aggregate: pickup and shipping addresses owned by a user.

Products and orders refer to an address by id only. Deleting an address is
neither blocked by nor cascaded to those references.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from marketplace.address.events import AddressAdded, AddressDeleted, AddressUpdated
from marketplace.domain import marketplace
from marketplace.shared.errors import AuthorizationError

_EDITABLE = ("full_name", "phone_number", "address_line1", "address_line2", "city", "state", "pin_code")


@marketplace.aggregate
class Address:
    user_id: Identifier(required=True)
    full_name: String(required=True, max_length=100)
    phone_number: String(required=True, max_length=20)
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    pin_code: String(required=True, max_length=12)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def add(cls, user_id, **fields):
        now = datetime.now(UTC)
        address = cls(user_id=user_id, created_at=now, updated_at=now, **fields)
        address.raise_(
            AddressAdded(
                address_id=address.id,
                user_id=user_id,
                city=address.city,
                state=address.state,
                pin_code=address.pin_code,
                added_at=now,
            )
        )
        return address

    def assert_owned_by(self, user_id):
        if str(self.user_id) != str(user_id):
            raise AuthorizationError("Address belongs to another user")

    def update(self, **changes):
        unknown = set(changes) - set(_EDITABLE)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})

        changed = sorted(field for field, value in changes.items() if value is not None and value != getattr(self, field))
        if not changed:
            return

        for field in changed:
            setattr(self, field, changes[field])
        self.updated_at = datetime.now(UTC)
        self.raise_(
            AddressUpdated(
                address_id=self.id,
                user_id=self.user_id,
                changed_fields=json.dumps(changed),
                updated_at=self.updated_at,
            )
        )

    def remove(self):
        """Record the deletion; the repository drops the row."""
        self.raise_(AddressDeleted(address_id=self.id, user_id=self.user_id, deleted_at=datetime.now(UTC)))

    def as_view(self) -> dict:
        view = {field: getattr(self, field) for field in _EDITABLE}
        view["address_id"] = str(self.id)
        view["user_id"] = str(self.user_id)
        return view
