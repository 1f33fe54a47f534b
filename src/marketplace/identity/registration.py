"""User registration and password changes: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.identity.lookup import email_taken
from marketplace.identity.user import User
from marketplace.shared.errors import ConflictError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="User")
class RegisterUser:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    user_type: String(max_length=20, default="Customer")


@marketplace.command(part_of="User")
class ChangePasswordHash:
    user_id: Identifier(required=True)
    password_hash: String(required=True, max_length=255)


@marketplace.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if email_taken(command.email):
            raise ConflictError("Email already registered")

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            user_type=command.user_type,
        )
        current_domain.repository_for(User).add(user)
        logger.info("user_registered", user_id=str(user.id), user_type=user.user_type)
        return str(user.id)

    @handle(ChangePasswordHash)
    def change_password_hash(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_password_hash(command.password_hash)
        repo.add(user)
