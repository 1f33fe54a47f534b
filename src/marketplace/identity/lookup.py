"""User lookup: find a user id by (normalized) email."""

from protean.core.projector import on
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.identity.events import UserRegistered
from marketplace.identity.user import User
from marketplace.shared.email import normalize_email


@marketplace.projection
class UserLookup:
    email: Identifier(identifier=True, required=True)
    user_id: String(required=True)


@marketplace.projector(projector_for=UserLookup, aggregates=[User])
class UserLookupProjector:
    @on(UserRegistered)
    def on_user_registered(self, event):
        current_domain.repository_for(UserLookup).add(
            UserLookup(
                email=normalize_email(event.email),
                user_id=event.user_id,
            )
        )


def email_taken(email: str) -> bool:
    found = current_domain.repository_for(UserLookup)._dao.query.filter(email=normalize_email(email)).all()
    return bool(found.items)
