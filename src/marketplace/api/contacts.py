"""Contact inquiry endpoints. Submitting is public, the inquiry desk is admin-only."""

import json
from datetime import date

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from marketplace.api.deps import Caller, require_admin
from marketplace.api.schemas import (
    BulkInquiryRequest,
    ContactIdResponse,
    RespondToInquiryRequest,
    StatusResponse,
    SubmitInquiryRequest,
    UpdateInquiryStatusRequest,
)
from marketplace.shared.paging import PageRequest
from marketplace.support.inquiries import (
    BulkInquiryOperation,
    CloseInquiry,
    MarkInquiryRead,
    RespondToInquiry,
    SubmitInquiry,
    UpdateInquiryStatus,
)
from marketplace.support.queries import InquiryFilters, get_inquiry, inquiry_stats, list_inquiries

contact_router = APIRouter(prefix="/contacts", tags=["contacts"])


@contact_router.post("", status_code=201, response_model=ContactIdResponse)
async def submit_inquiry(body: SubmitInquiryRequest, request: Request) -> ContactIdResponse:
    command = SubmitInquiry(
        **body.model_dump(exclude_none=True),
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
    )
    result = current_domain.process(command, asynchronous=False)
    return ContactIdResponse(contact_id=result)


@contact_router.get("")
async def inquiries(
    status: str | None = None,
    priority: str | None = None,
    category: str | None = None,
    assigned_to: str | None = None,
    search: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    page: int = 1,
    limit: int = 10,
    caller: Caller = Depends(require_admin),
) -> dict:
    filters = InquiryFilters(
        status=status,
        priority=priority,
        category=category,
        assigned_to=assigned_to,
        search=search,
        start_date=start_date,
        end_date=end_date,
    )
    return list_inquiries(filters, PageRequest(page=page, limit=limit))


@contact_router.get("/stats")
async def stats(caller: Caller = Depends(require_admin)) -> dict:
    return inquiry_stats()


@contact_router.post("/bulk")
async def bulk(body: BulkInquiryRequest, caller: Caller = Depends(require_admin)) -> dict:
    command = BulkInquiryOperation(
        contact_ids=json.dumps(body.contact_ids),
        action=body.action,
        status=body.status,
        assigned_to=body.assigned_to,
        actor_role=caller.role.value,
    )
    return current_domain.process(command, asynchronous=False)


@contact_router.get("/{contact_id}")
async def inquiry(contact_id: str, caller: Caller = Depends(require_admin)) -> dict:
    return get_inquiry(contact_id)


@contact_router.patch("/{contact_id}/status", response_model=StatusResponse)
async def update_status(
    contact_id: str,
    body: UpdateInquiryStatusRequest,
    caller: Caller = Depends(require_admin),
) -> StatusResponse:
    command = UpdateInquiryStatus(
        contact_id=contact_id,
        status=body.status,
        priority=body.priority,
        assigned_to=body.assigned_to,
        response=body.response,
        actor_id=caller.user_id,
        actor_role=caller.role.value,
    )
    return StatusResponse(status=current_domain.process(command, asynchronous=False))


@contact_router.post("/{contact_id}/respond", response_model=StatusResponse)
async def respond(
    contact_id: str,
    body: RespondToInquiryRequest,
    caller: Caller = Depends(require_admin),
) -> StatusResponse:
    command = RespondToInquiry(
        contact_id=contact_id,
        response=body.response,
        status=body.status,
        actor_id=caller.user_id,
        actor_role=caller.role.value,
    )
    return StatusResponse(status=current_domain.process(command, asynchronous=False))


@contact_router.patch("/{contact_id}/read", response_model=StatusResponse)
async def mark_read(contact_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    current_domain.process(MarkInquiryRead(contact_id=contact_id, actor_role=caller.role.value), asynchronous=False)
    return StatusResponse()


@contact_router.delete("/{contact_id}", response_model=StatusResponse)
async def close(contact_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    current_domain.process(CloseInquiry(contact_id=contact_id, actor_role=caller.role.value), asynchronous=False)
    return StatusResponse(status="closed")
