"""Address book endpoints. Every route acts on the caller's own addresses."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.address.address import Address
from marketplace.address.management import AddAddress, DeleteAddress, UpdateAddress
from marketplace.api.deps import Caller, current_caller
from marketplace.api.schemas import AddressIdResponse, AddressRequest, StatusResponse, UpdateAddressRequest

address_router = APIRouter(prefix="/addresses", tags=["addresses"])


@address_router.post("", status_code=201, response_model=AddressIdResponse)
async def add_address(body: AddressRequest, caller: Caller = Depends(current_caller)) -> AddressIdResponse:
    command = AddAddress(user_id=caller.user_id, **body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


@address_router.get("")
async def list_addresses(caller: Caller = Depends(current_caller)) -> dict:
    addresses = current_domain.repository_for(Address).for_user(caller.user_id)
    return {"addresses": [address.as_view() for address in addresses]}


@address_router.get("/{address_id}")
async def get_address(address_id: str, caller: Caller = Depends(current_caller)) -> dict:
    address = current_domain.repository_for(Address).get(address_id)
    if not caller.is_admin:
        address.assert_owned_by(caller.user_id)
    return address.as_view()


@address_router.put("/{address_id}", response_model=StatusResponse)
async def update_address(
    address_id: str,
    body: UpdateAddressRequest,
    caller: Caller = Depends(current_caller),
) -> StatusResponse:
    command = UpdateAddress(address_id=address_id, user_id=caller.user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@address_router.delete("/{address_id}", response_model=StatusResponse)
async def delete_address(address_id: str, caller: Caller = Depends(current_caller)) -> StatusResponse:
    current_domain.process(DeleteAddress(address_id=address_id, user_id=caller.user_id), asynchronous=False)
    return StatusResponse()
