"""Tests for the (current, target) -> roles workflow table."""

from enum import Enum

import pytest
from protean.exceptions import ValidationError

from marketplace.shared.errors import AuthorizationError
from marketplace.shared.roles import Role
from marketplace.shared.workflow import Workflow


class Door(Enum):
    CLOSED = "Closed"
    OPEN = "Open"
    LOCKED = "Locked"
    GONE = "Gone"


@pytest.fixture()
def door():
    return Workflow(
        "door",
        Door,
        {
            (Door.CLOSED, Door.OPEN): {Role.CUSTOMER, Role.ADMIN},
            (Door.OPEN, Door.CLOSED): {Role.CUSTOMER},
            (Door.CLOSED, Door.LOCKED): {Role.ADMIN},
            (Door.LOCKED, Door.GONE): set(),
        },
    )


class TestStatusCoercion:
    def test_accepts_stored_strings(self, door):
        assert door.status("Open") is Door.OPEN

    def test_passes_enum_members_through(self, door):
        assert door.status(Door.LOCKED) is Door.LOCKED

    def test_unknown_status_is_a_validation_error(self, door):
        with pytest.raises(ValidationError) as exc:
            door.status("Ajar")
        assert "Unknown door status 'Ajar'" in str(exc.value.messages)


class TestSuccessors:
    def test_successors_of_closed(self, door):
        assert door.successors("Closed") == {Door.OPEN, Door.LOCKED}

    def test_state_without_outgoing_steps_is_terminal(self, door):
        assert door.is_terminal(Door.GONE)
        assert not door.is_terminal(Door.LOCKED)

    def test_allowed_roles_for_missing_step_is_empty(self, door):
        assert door.allowed_roles("Open", "Locked") == frozenset()


class TestAssertAllowed:
    def test_allowed_role_passes(self, door):
        door.assert_allowed("Closed", "Open", Role.CUSTOMER)

    def test_missing_step_is_a_validation_error(self, door):
        with pytest.raises(ValidationError) as exc:
            door.assert_allowed("Open", "Locked", Role.ADMIN)
        assert "Cannot move door from Open to Locked" in str(exc.value.messages)

    def test_terminal_state_reports_already(self, door):
        with pytest.raises(ValidationError) as exc:
            door.assert_allowed("Gone", "Closed", Role.ADMIN)
        assert "Door is already Gone" in str(exc.value.messages)

    def test_role_outside_the_set_is_an_authorization_error(self, door):
        with pytest.raises(AuthorizationError):
            door.assert_allowed("Closed", "Locked", Role.CUSTOMER)

    def test_step_is_checked_before_role(self, door):
        # A seller is allowed nothing, but the missing step wins
        with pytest.raises(ValidationError):
            door.assert_allowed("Open", "Gone", Role.SELLER)

    def test_system_only_step_rejects_every_role(self, door):
        for role in Role:
            with pytest.raises(AuthorizationError):
                door.assert_allowed("Locked", "Gone", role)

    def test_system_only_step_exists(self, door):
        door.assert_step_exists("Locked", "Gone")
