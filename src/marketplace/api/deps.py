"""Request dependencies: the authenticated caller and process-wide collaborators.

The gateway in front of this service authenticates the user and forwards
`X-User-Id` and `X-User-Role`. Collaborators such as the image store are
built once at start-up and hung on `app.state`.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, Request

from marketplace.catalogue.storage import ImageStore
from marketplace.shared.roles import Role, parse_role


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def current_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        role = parse_role(x_user_role)
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role '{x_user_role}'") from None
    return Caller(user_id=x_user_id, role=role)


def require_admin(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return caller


def require_self_or_admin(user_id: str, caller: Caller) -> None:
    if not caller.is_admin and caller.user_id != user_id:
        raise HTTPException(status_code=403, detail="Not allowed to access another user's account")


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store
