"""Application tests for the inquiry desk handlers, listing and statistics."""

import json

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.shared.errors import AuthorizationError
from marketplace.support.contact import Contact
from marketplace.support.inquiries import (
    BulkInquiryOperation,
    CloseInquiry,
    MarkInquiryRead,
    RespondToInquiry,
    SubmitInquiry,
    UpdateInquiryStatus,
)
from marketplace.support.queries import InquiryFilters, get_inquiry, inquiry_stats, list_inquiries


def _submit(**overrides):
    fields = {
        "name": "Ravi Kumar",
        "email": "ravi@example.com",
        "subject": "Pickup not scheduled",
        "message": "Nobody came to collect my stroller.",
    }
    fields.update(overrides)
    return current_domain.process(SubmitInquiry(**fields), asynchronous=False)


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _contact(contact_id):
    return current_domain.repository_for(Contact).get(contact_id)


class TestSubmitInquiry:
    def test_submit(self):
        contact_id = _submit(category="support", user_agent="pytest", ip_address="127.0.0.1")
        contact = _contact(contact_id)
        assert contact.category == "support"
        assert contact.ip_address == "127.0.0.1"

    def test_unknown_category(self):
        with pytest.raises(ValidationError):
            _submit(category="gossip")


class TestAdminOperations:
    def test_update_status(self):
        contact_id = _submit()
        status = _process(
            UpdateInquiryStatus(
                contact_id=contact_id, status="in_progress", priority="high", actor_id="admin-1", actor_role="Admin"
            )
        )
        assert status == "in_progress"
        assert _contact(contact_id).priority == "high"

    def test_non_admin_is_refused(self):
        contact_id = _submit()
        with pytest.raises(AuthorizationError):
            _process(MarkInquiryRead(contact_id=contact_id, actor_role="Customer"))
        assert _contact(contact_id).is_read is False

    def test_respond(self):
        contact_id = _submit()
        _process(RespondToInquiry(contact_id=contact_id, response="Booked", actor_id="admin-1", actor_role="Admin"))

        contact = _contact(contact_id)
        assert contact.status == "resolved"
        assert contact.responded_by == "admin-1"

    def test_mark_read(self):
        contact_id = _submit()
        _process(MarkInquiryRead(contact_id=contact_id, actor_role="Admin"))
        assert _contact(contact_id).is_read is True

    def test_close_is_a_soft_delete(self):
        contact_id = _submit()
        _process(CloseInquiry(contact_id=contact_id, actor_role="Admin"))
        assert _contact(contact_id).status == "closed"

    def test_missing_inquiry(self):
        with pytest.raises(ObjectNotFoundError):
            _process(CloseInquiry(contact_id="missing", actor_role="Admin"))


class TestBulkOperation:
    def _bulk(self, ids, action, **extra):
        return _process(
            BulkInquiryOperation(contact_ids=json.dumps(ids), action=action, actor_role="Admin", **extra)
        )

    def test_assign_moves_to_in_progress(self):
        ids = [_submit(), _submit()]

        result = self._bulk(ids, "assign", assigned_to="admin-7")

        assert result["processed"] == 2
        assert {_contact(contact_id).status for contact_id in ids} == {"in_progress"}

    def test_reports_failures_per_id(self):
        closed = _submit()
        _process(CloseInquiry(contact_id=closed, actor_role="Admin"))
        open_ = _submit()

        result = self._bulk([open_, closed, "missing"], "change_status", status="resolved")

        assert result["processed"] == 1
        assert [entry["success"] for entry in result["results"]] == [True, False, False]
        assert _contact(open_).status == "resolved"

    def test_mark_read_and_delete(self):
        ids = [_submit(), _submit()]
        self._bulk(ids, "mark_read")
        self._bulk(ids, "delete")
        assert {(_contact(i).is_read, _contact(i).status) for i in ids} == {(True, "closed")}

    def test_unknown_action(self):
        with pytest.raises(ValidationError):
            self._bulk([_submit()], "archive")

    def test_change_status_requires_status(self):
        with pytest.raises(ValidationError):
            self._bulk([_submit()], "change_status")

    def test_non_admin(self):
        with pytest.raises(AuthorizationError):
            _process(BulkInquiryOperation(contact_ids=json.dumps(["x"]), action="mark_read", actor_role="Seller"))


class TestInquiryReads:
    @pytest.fixture()
    def inquiries(self):
        first = _submit(subject="Refund please", category="complaint", priority="high")
        second = _submit(name="Meera", email="meera@example.com", subject="Partnership", category="business")
        third = _submit(subject="App crash", source="mobile_app")
        _process(MarkInquiryRead(contact_id=third, actor_role="Admin"))
        _process(CloseInquiry(contact_id=second, actor_role="Admin"))
        return {"first": first, "second": second, "third": third}

    def test_newest_first(self, inquiries):
        result = list_inquiries()
        assert [c["contact_id"] for c in result["contacts"]] == [
            inquiries["third"],
            inquiries["second"],
            inquiries["first"],
        ]

    def test_filters(self, inquiries):
        assert list_inquiries(InquiryFilters(status="closed"))["contacts"][0]["contact_id"] == inquiries["second"]
        assert list_inquiries(InquiryFilters(priority="high"))["pagination"]["total_items"] == 1

    def test_search_over_email_and_subject(self, inquiries):
        assert [c["name"] for c in list_inquiries(InquiryFilters(search="MEERA@"))["contacts"]] == ["Meera"]
        assert list_inquiries(InquiryFilters(search="refund"))["contacts"][0]["contact_id"] == inquiries["first"]

    def test_stats(self, inquiries):
        stats = inquiry_stats()

        assert stats["total"] == 3
        assert stats["by_status"] == {"pending": 2, "in_progress": 0, "resolved": 0, "closed": 1}
        assert stats["unread"] == 2
        assert stats["by_category"]["complaint"] == 1
        assert stats["by_category"]["general"] == 1
        assert stats["by_priority"]["medium"] == 2

    def test_detail(self, inquiries):
        assert get_inquiry(inquiries["first"])["subject"] == "Refund please"
