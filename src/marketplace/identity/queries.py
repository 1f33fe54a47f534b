"""Read helpers over the User aggregate."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.identity.user import User
from marketplace.shared.paging import PageRequest, pagination
from marketplace.shared.roles import Role


def user_view(user: User) -> dict:
    return {
        "user_id": str(user.id),
        "name": user.name,
        "email": user.email_address,
        "user_type": user.user_type,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def get_user(user_id: str) -> User:
    return current_domain.repository_for(User).get(user_id)


def resolve_delivery_boy(user_id: str | None, field: str) -> User | None:
    """Resolve an assignee id. None stays None; an unknown id is NotFound; another role is invalid."""
    if not user_id:
        return None

    try:
        user = get_user(user_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError(f"User {user_id} not found") from None

    if user.role != Role.DELIVERY_BOY:
        raise ValidationError({field: [f"User {user_id} is not a delivery boy"]})
    return user


def list_users(role: Role | None = None, page_request: PageRequest | None = None) -> dict:
    page_request = page_request or PageRequest(page=1, limit=50)
    queryset = current_domain.repository_for(User)._dao.query
    if role is not None:
        queryset = queryset.filter(user_type=role.value)

    result = page_request.apply(queryset.order_by("-created_at"))
    return {
        "users": [user_view(user) for user in result.items],
        "pagination": pagination(result, page_request),
    }
