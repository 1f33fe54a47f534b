"""Contact aggregate: a support inquiry and its triage workflow.

    pending → in_progress | resolved | closed
    in_progress → resolved | closed
    resolved → in_progress | closed
    closed is terminal

Staying in the same status is allowed so admins can change priority or
assignee without moving the inquiry.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text, ValueObject

from marketplace.domain import marketplace
from marketplace.shared.email import EmailAddress, normalize_email
from marketplace.shared.search import search_text
from marketplace.support.events import InquiryRead, InquiryResponded, InquiryStatusChanged, InquirySubmitted


class ContactStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ContactPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ContactCategory(Enum):
    GENERAL = "general"
    SUPPORT = "support"
    COMPLAINT = "complaint"
    SUGGESTION = "suggestion"
    BUSINESS = "business"


class ContactSource(Enum):
    WEBSITE = "website"
    MOBILE_APP = "mobile_app"
    PHONE = "phone"
    EMAIL = "email"


def _choice(enum, value, field):
    try:
        return enum(value)
    except ValueError:
        raise ValidationError({field: [f"Unknown {field} '{value}'"]}) from None


_VALID_TRANSITIONS = {
    ContactStatus.PENDING: {ContactStatus.IN_PROGRESS, ContactStatus.RESOLVED, ContactStatus.CLOSED},
    ContactStatus.IN_PROGRESS: {ContactStatus.RESOLVED, ContactStatus.CLOSED},
    ContactStatus.RESOLVED: {ContactStatus.IN_PROGRESS, ContactStatus.CLOSED},
    ContactStatus.CLOSED: set(),  # Terminal
}


@marketplace.aggregate
class Contact:
    name: String(required=True, max_length=100)
    email: ValueObject(EmailAddress, required=True)
    phone: String(max_length=20)
    subject: String(required=True, max_length=200)
    message: Text(required=True)
    status: String(choices=ContactStatus, default=ContactStatus.PENDING.value)
    priority: String(choices=ContactPriority, default=ContactPriority.MEDIUM.value)
    category: String(choices=ContactCategory, default=ContactCategory.GENERAL.value)
    source: String(choices=ContactSource, default=ContactSource.WEBSITE.value)
    assigned_to: Identifier()
    response: Text()
    responded_at: DateTime()
    responded_by: Identifier()
    is_read: Boolean(default=False)
    user_agent: String(max_length=500)
    ip_address: String(max_length=45)
    # Plain copies for filtering and search
    email_text: String(max_length=254)
    search_text: Text()
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def submit(
        cls,
        name,
        email,
        subject,
        message,
        phone=None,
        category=None,
        source=None,
        priority=None,
        user_agent=None,
        ip_address=None,
    ):
        now = datetime.now(UTC)
        contact = cls(
            name=name,
            email=EmailAddress(address=normalize_email(email)),
            email_text=normalize_email(email),
            search_text=search_text(name, email, subject, message),
            phone=phone,
            subject=subject,
            message=message,
            category=category or ContactCategory.GENERAL.value,
            source=source or ContactSource.WEBSITE.value,
            priority=priority or ContactPriority.MEDIUM.value,
            user_agent=user_agent,
            ip_address=ip_address,
            created_at=now,
            updated_at=now,
        )
        contact.raise_(
            InquirySubmitted(
                contact_id=contact.id,
                email=contact.email_text,
                subject=subject,
                category=contact.category,
                priority=contact.priority,
                source=contact.source,
                submitted_at=now,
            )
        )
        return contact

    def _assert_can_transition(self, target_status):
        current = ContactStatus(self.status)
        if target_status != current and target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot move inquiry from {current.value} to {target_status.value}"]})

    def update_status(self, status, priority=None, assigned_to=None, response=None, responded_by=None):
        target = _choice(ContactStatus, status, "status")
        self._assert_can_transition(target)
        if priority is not None:
            _choice(ContactPriority, priority, "priority")

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        if priority is not None:
            self.priority = priority
        if assigned_to is not None:
            self.assigned_to = assigned_to
        if response is not None:
            self.response = response
            self.responded_at = now
            self.responded_by = responded_by
        self.updated_at = now

        self.raise_(
            InquiryStatusChanged(
                contact_id=self.id,
                previous_status=previous,
                status=self.status,
                priority=self.priority,
                assigned_to=self.assigned_to,
                changed_at=now,
            )
        )

    def respond(self, response, responded_by, status=ContactStatus.RESOLVED.value):
        if not response or not response.strip():
            raise ValidationError({"response": ["Response cannot be empty"]})

        target = _choice(ContactStatus, status, "status")
        self._assert_can_transition(target)

        now = datetime.now(UTC)
        self.response = response
        self.responded_by = responded_by
        self.responded_at = now
        self.status = target.value
        self.is_read = True
        self.updated_at = now

        self.raise_(
            InquiryResponded(
                contact_id=self.id,
                responded_by=responded_by,
                status=self.status,
                responded_at=now,
            )
        )

    def mark_read(self):
        if self.is_read:
            return
        self.is_read = True
        self.updated_at = datetime.now(UTC)
        self.raise_(InquiryRead(contact_id=self.id, read_at=self.updated_at))

    def assign(self, assignee):
        self.update_status(ContactStatus.IN_PROGRESS.value, assigned_to=assignee)

    def close(self):
        """Soft delete."""
        self.update_status(ContactStatus.CLOSED.value)

    def as_view(self) -> dict:
        return {
            "contact_id": str(self.id),
            "name": self.name,
            "email": self.email_text,
            "phone": self.phone,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "priority": self.priority,
            "category": self.category,
            "source": self.source,
            "assigned_to": str(self.assigned_to) if self.assigned_to else None,
            "response": self.response,
            "responded_at": self.responded_at.isoformat() if self.responded_at else None,
            "responded_by": str(self.responded_by) if self.responded_by else None,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
