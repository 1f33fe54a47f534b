"""User aggregate. Authentication lives outside; this record holds the role tag
and an already-hashed password supplied by the auth collaborator."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, ValueObject

from marketplace.domain import marketplace
from marketplace.identity.events import PasswordChanged, UserRegistered
from marketplace.shared.email import EmailAddress, normalize_email
from marketplace.shared.roles import Role


@marketplace.aggregate
class User:
    name: String(required=True, max_length=100)
    email: ValueObject(EmailAddress, required=True)
    password_hash: String(required=True, max_length=255)
    user_type: String(choices=Role, default=Role.CUSTOMER.value)
    created_at: DateTime()

    @property
    def role(self) -> Role:
        return Role(self.user_type)

    @property
    def email_address(self) -> str:
        return self.email.address

    @classmethod
    def register(cls, name, email, password_hash, user_type=Role.CUSTOMER.value):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=EmailAddress(address=normalize_email(email)),
            password_hash=password_hash,
            user_type=user_type.value if isinstance(user_type, Role) else user_type,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email_address,
                user_type=user.user_type,
                registered_at=now,
            )
        )
        return user

    def change_password_hash(self, password_hash):
        self.password_hash = password_hash
        self.raise_(PasswordChanged(user_id=self.id, changed_at=datetime.now(UTC)))
