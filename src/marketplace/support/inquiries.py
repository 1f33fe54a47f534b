"""Contact inquiries: commands and handler.

Anyone may submit an inquiry. Every other operation is for admins.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.shared.errors import AuthorizationError
from marketplace.shared.roles import Role
from marketplace.support.contact import (
    Contact,
    ContactCategory,
    ContactPriority,
    ContactSource,
    ContactStatus,
)
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

BULK_ACTIONS = ("mark_read", "change_status", "assign", "delete")


@marketplace.command(part_of="Contact")
class SubmitInquiry:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(max_length=20)
    subject = String(required=True, max_length=200)
    message = Text(required=True)
    category = String(choices=ContactCategory)
    source = String(choices=ContactSource)
    priority = String(choices=ContactPriority)
    user_agent = String(max_length=500)
    ip_address = String(max_length=45)


@marketplace.command(part_of="Contact")
class UpdateInquiryStatus:
    contact_id = Identifier(required=True)
    status = String(required=True, choices=ContactStatus)
    priority = String(choices=ContactPriority)
    assigned_to = Identifier()
    response = Text()
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


@marketplace.command(part_of="Contact")
class RespondToInquiry:
    contact_id = Identifier(required=True)
    response = Text(required=True)
    status = String(choices=ContactStatus, default=ContactStatus.RESOLVED.value)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


@marketplace.command(part_of="Contact")
class MarkInquiryRead:
    contact_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


@marketplace.command(part_of="Contact")
class CloseInquiry:
    contact_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


@marketplace.command(part_of="Contact")
class BulkInquiryOperation:
    contact_ids = Text(required=True)  # JSON: list of contact ids
    action = String(required=True, max_length=20)
    status = String(choices=ContactStatus)
    assigned_to = Identifier()
    actor_role = String(required=True, choices=Role)


def _require_admin(actor_role):
    if Role(actor_role) != Role.ADMIN:
        raise AuthorizationError("Only admins can manage inquiries")


def _apply_bulk_action(contact, action, status=None, assigned_to=None):
    if action == "mark_read":
        contact.mark_read()
    elif action == "change_status":
        contact.update_status(status)
    elif action == "assign":
        contact.assign(assigned_to)
    else:
        contact.close()


@marketplace.command_handler(part_of=Contact)
class InquiryDeskHandler:
    @handle(SubmitInquiry)
    def submit_inquiry(self, command):
        contact = Contact.submit(
            name=command.name,
            email=command.email,
            phone=command.phone,
            subject=command.subject,
            message=command.message,
            category=command.category,
            source=command.source,
            priority=command.priority,
            user_agent=command.user_agent,
            ip_address=command.ip_address,
        )
        current_domain.repository_for(Contact).add(contact)
        logger.info("inquiry_submitted", contact_id=str(contact.id), category=contact.category)
        return str(contact.id)

    @handle(UpdateInquiryStatus)
    def update_inquiry_status(self, command):
        _require_admin(command.actor_role)
        repo = current_domain.repository_for(Contact)
        contact = repo.get(command.contact_id)
        contact.update_status(
            command.status,
            priority=command.priority,
            assigned_to=command.assigned_to,
            response=command.response,
            responded_by=command.actor_id,
        )
        repo.add(contact)
        return contact.status

    @handle(RespondToInquiry)
    def respond_to_inquiry(self, command):
        _require_admin(command.actor_role)
        repo = current_domain.repository_for(Contact)
        contact = repo.get(command.contact_id)
        contact.respond(command.response, responded_by=command.actor_id, status=command.status)
        repo.add(contact)
        logger.info("inquiry_responded", contact_id=str(contact.id), status=contact.status)
        return contact.status

    @handle(MarkInquiryRead)
    def mark_inquiry_read(self, command):
        _require_admin(command.actor_role)
        repo = current_domain.repository_for(Contact)
        contact = repo.get(command.contact_id)
        contact.mark_read()
        repo.add(contact)

    @handle(CloseInquiry)
    def close_inquiry(self, command):
        _require_admin(command.actor_role)
        repo = current_domain.repository_for(Contact)
        contact = repo.get(command.contact_id)
        contact.close()
        repo.add(contact)

    @handle(BulkInquiryOperation)
    def bulk_operation(self, command):
        """Apply one action to many inquiries. Failures are reported per id, not raised."""
        _require_admin(command.actor_role)

        if command.action not in BULK_ACTIONS:
            raise ValidationError({"action": [f"Unknown bulk action '{command.action}'"]})
        if command.action == "change_status" and not command.status:
            raise ValidationError({"status": ["A status is required to change status in bulk"]})
        if command.action == "assign" and not command.assigned_to:
            raise ValidationError({"assigned_to": ["An assignee is required to assign in bulk"]})

        contact_ids = json.loads(command.contact_ids)
        if not contact_ids:
            raise ValidationError({"contact_ids": ["At least one inquiry id is required"]})

        repo = current_domain.repository_for(Contact)
        results = []
        for contact_id in contact_ids:
            try:
                contact = repo.get(contact_id)
                _apply_bulk_action(contact, command.action, command.status, command.assigned_to)
            except (ObjectNotFoundError, ValidationError) as exc:
                results.append({"contact_id": contact_id, "success": False, "error": str(exc)})
                continue
            repo.add(contact)
            results.append({"contact_id": contact_id, "success": True, "error": None})

        processed = sum(1 for result in results if result["success"])
        logger.info("inquiry_bulk_operation", action=command.action, requested=len(contact_ids), processed=processed)
        return {"processed": processed, "results": results}
