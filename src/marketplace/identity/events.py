"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A person signed up with a role tag."""

    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    user_type: String(required=True)
    registered_at: DateTime(required=True)


@marketplace.event(part_of="User")
class PasswordChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    changed_at: DateTime(required=True)
