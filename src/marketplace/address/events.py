"""Domain events for the Address aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Address")
class AddressAdded:
    __version__ = 1

    address_id: Identifier(required=True)
    user_id: Identifier(required=True)
    city: String(required=True)
    state: String(required=True)
    pin_code: String(required=True)
    added_at: DateTime(required=True)


@marketplace.event(part_of="Address")
class AddressUpdated:
    """The owner edited one or more fields of a saved address."""

    __version__ = 1

    address_id: Identifier(required=True)
    user_id: Identifier(required=True)
    changed_fields: Text()  # JSON list of field names
    updated_at: DateTime(required=True)


@marketplace.event(part_of="Address")
class AddressDeleted:
    __version__ = 1

    address_id: Identifier(required=True)
    user_id: Identifier(required=True)
    deleted_at: DateTime(required=True)
