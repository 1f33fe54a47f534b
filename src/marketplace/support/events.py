"""Domain events for the Contact aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Contact")
class InquirySubmitted:
    __version__ = 1

    contact_id: Identifier(required=True)
    email: String(required=True)
    subject: String(required=True)
    category: String(required=True)
    priority: String(required=True)
    source: String(required=True)
    submitted_at: DateTime(required=True)


@marketplace.event(part_of="Contact")
class InquiryStatusChanged:
    __version__ = 1

    contact_id: Identifier(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    priority: String()
    assigned_to: String()
    changed_at: DateTime(required=True)


@marketplace.event(part_of="Contact")
class InquiryResponded:
    """An admin replied to the person who raised the inquiry."""

    __version__ = 1

    contact_id: Identifier(required=True)
    responded_by: Identifier(required=True)
    status: String(required=True)
    responded_at: DateTime(required=True)


@marketplace.event(part_of="Contact")
class InquiryRead:
    __version__ = 1

    contact_id: Identifier(required=True)
    read_at: DateTime(required=True)
