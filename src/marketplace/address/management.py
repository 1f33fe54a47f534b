"""Address book: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.address.address import Address
from marketplace.domain import marketplace


@marketplace.command(part_of="Address")
class AddAddress:
    user_id: Identifier(required=True)
    full_name: String(required=True, max_length=100)
    phone_number: String(required=True, max_length=20)
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    pin_code: String(required=True, max_length=12)


@marketplace.command(part_of="Address")
class UpdateAddress:
    address_id: Identifier(required=True)
    user_id: Identifier(required=True)
    full_name: String(max_length=100)
    phone_number: String(max_length=20)
    address_line1: String(max_length=255)
    address_line2: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=100)
    pin_code: String(max_length=12)


@marketplace.command(part_of="Address")
class DeleteAddress:
    address_id: Identifier(required=True)
    user_id: Identifier(required=True)


@marketplace.command_handler(part_of=Address)
class AddressBookHandler:
    @handle(AddAddress)
    def add_address(self, command):
        address = Address.add(
            user_id=command.user_id,
            full_name=command.full_name,
            phone_number=command.phone_number,
            address_line1=command.address_line1,
            address_line2=command.address_line2,
            city=command.city,
            state=command.state,
            pin_code=command.pin_code,
        )
        current_domain.repository_for(Address).add(address)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(Address)
        address = repo.get(command.address_id)
        address.assert_owned_by(command.user_id)
        address.update(
            full_name=command.full_name,
            phone_number=command.phone_number,
            address_line1=command.address_line1,
            address_line2=command.address_line2,
            city=command.city,
            state=command.state,
            pin_code=command.pin_code,
        )
        repo.add(address)

    @handle(DeleteAddress)
    def delete_address(self, command):
        repo = current_domain.repository_for(Address)
        address = repo.get(command.address_id)
        address.assert_owned_by(command.user_id)
        address.remove()
        repo._dao.delete(address)
