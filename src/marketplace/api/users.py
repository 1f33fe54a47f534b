"""User directory endpoints."""

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.api.deps import Caller, current_caller, require_admin, require_self_or_admin
from marketplace.api.schemas import ChangePasswordRequest, RegisterUserRequest, StatusResponse, UserIdResponse
from marketplace.identity.queries import get_user, list_users, user_view
from marketplace.identity.registration import ChangePasswordHash, RegisterUser
from marketplace.shared.paging import PageRequest
from marketplace.shared.roles import parse_role

user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=body.password_hash,
        user_type=body.user_type,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.get("")
async def get_users(
    role: str | None = None,
    page: int = 1,
    limit: int = 50,
    caller: Caller = Depends(require_admin),
) -> dict:
    try:
        role_filter = parse_role(role) if role else None
    except ValueError:
        raise ValidationError({"role": [f"Unknown role '{role}'"]}) from None
    return list_users(role=role_filter, page_request=PageRequest(page=page, limit=limit))


@user_router.get("/{user_id}")
async def get_user_detail(user_id: str, caller: Caller = Depends(current_caller)) -> dict:
    require_self_or_admin(user_id, caller)
    return user_view(get_user(user_id))


@user_router.put("/{user_id}/password", response_model=StatusResponse)
async def change_password(
    user_id: str,
    body: ChangePasswordRequest,
    caller: Caller = Depends(current_caller),
) -> StatusResponse:
    require_self_or_admin(user_id, caller)
    current_domain.process(ChangePasswordHash(user_id=user_id, password_hash=body.password_hash), asynchronous=False)
    return StatusResponse()
