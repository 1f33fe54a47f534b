"""Inquiry desk reads: filtered listing and statistics, both computed by the store."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time

from protean.utils.globals import current_domain

from marketplace.shared.paging import PageRequest, pagination
from marketplace.support.contact import Contact, ContactCategory, ContactPriority, ContactStatus


@dataclass(frozen=True)
class InquiryFilters:
    status: str | None = None
    priority: str | None = None
    category: str | None = None
    assigned_to: str | None = None
    search: str | None = None
    start_date: date | None = None
    end_date: date | None = None

    def apply(self, queryset):
        for field in ("status", "priority", "category", "assigned_to"):
            value = getattr(self, field)
            if value:
                queryset = queryset.filter(**{field: value})
        if self.search and self.search.strip():
            queryset = queryset.filter(search_text__contains=self.search.strip().lower())
        if self.start_date:
            queryset = queryset.filter(created_at__gte=datetime.combine(self.start_date, time.min, tzinfo=UTC))
        if self.end_date:
            queryset = queryset.filter(created_at__lte=datetime.combine(self.end_date, time.max, tzinfo=UTC))
        return queryset.order_by("-created_at")


def _contacts():
    return current_domain.repository_for(Contact)._dao.query


def get_inquiry(contact_id: str) -> dict:
    return current_domain.repository_for(Contact).get(contact_id).as_view()


def list_inquiries(filters: InquiryFilters | None = None, page_request: PageRequest | None = None) -> dict:
    filters = filters or InquiryFilters()
    page_request = page_request or PageRequest(page=1, limit=10)
    result = page_request.apply(filters.apply(_contacts()))
    return {
        "contacts": [contact.as_view() for contact in result.items],
        "pagination": pagination(result, page_request),
    }


def _count(**criteria) -> int:
    queryset = _contacts()
    if criteria:
        queryset = queryset.filter(**criteria)
    return queryset.all().total


def inquiry_stats() -> dict:
    return {
        "total": _count(),
        "by_status": {status.value: _count(status=status.value) for status in ContactStatus},
        "unread": _count(is_read=False),
        "by_category": {category.value: _count(category=category.value) for category in ContactCategory},
        "by_priority": {priority.value: _count(priority=priority.value) for priority in ContactPriority},
    }
